"""Tests for cooperative cancellation and the active-run registry."""
import threading

from matrix_ide.engine.run_control import RunController, RunRegistry, RunState


class TestRunController:
    def test_initial_state_running(self):
        ctrl = RunController()
        assert ctrl.state == RunState.RUNNING
        assert not ctrl.stopped

    def test_stop(self):
        ctrl = RunController()
        ctrl.stop()
        assert ctrl.state == RunState.STOPPED
        assert ctrl.stopped

    def test_stop_from_another_thread(self):
        ctrl = RunController()
        t = threading.Thread(target=ctrl.stop)
        t.start()
        t.join()
        assert ctrl.stopped


class TestRunRegistry:
    def test_start_get_finish(self):
        registry = RunRegistry()
        run = registry.start("exec-1", "session-1")
        assert registry.get("exec-1") is run
        assert run.session_id == "session-1"
        assert len(registry) == 1
        registry.finish("exec-1")
        assert registry.get("exec-1") is None
        assert len(registry) == 0

    def test_each_run_has_its_own_controller(self):
        registry = RunRegistry()
        first = registry.start("a", "s")
        second = registry.start("b", "s")
        first.controller.stop()
        assert not second.controller.stopped

    def test_finish_unknown_is_noop(self):
        RunRegistry().finish("missing")

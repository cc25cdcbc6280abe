"""Thread-safe stop signal for graph executions and the registry of active runs."""
import threading
from dataclasses import dataclass, field
from enum import Enum


class RunState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class RunController:
    """Cooperative cancellation token checked by the executor between nodes.

    Stopping never interrupts a node that is already executing.
    """

    def __init__(self):
        self._state = RunState.RUNNING
        self._lock = threading.Lock()

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def stopped(self) -> bool:
        return self.state == RunState.STOPPED

    def stop(self):
        with self._lock:
            self._state = RunState.STOPPED


@dataclass
class ActiveRun:
    execution_id: str
    session_id: str
    controller: RunController = field(default_factory=RunController)


class RunRegistry:
    """Active runs keyed by execution id; a run is removed once it finishes."""

    def __init__(self):
        self._runs: dict[str, ActiveRun] = {}
        self._lock = threading.Lock()

    def start(self, execution_id: str, session_id: str) -> ActiveRun:
        run = ActiveRun(execution_id=execution_id, session_id=session_id)
        with self._lock:
            self._runs[execution_id] = run
        return run

    def get(self, execution_id: str) -> ActiveRun | None:
        with self._lock:
            return self._runs.get(execution_id)

    def finish(self, execution_id: str) -> None:
        with self._lock:
            self._runs.pop(execution_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)


runs = RunRegistry()

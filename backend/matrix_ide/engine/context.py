"""Run report produced by the execution engine."""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class NodeState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


def output_key(node_id: str, port: str) -> str:
    return f"{node_id}_{port}"


@dataclass
class ExecutionContext:
    node_outputs: dict[str, Any] = field(default_factory=dict)
    node_states: dict[str, NodeState] = field(default_factory=dict)
    execution_log: list[str] = field(default_factory=list)
    start_time: float = 0.0
    duration_ms: int = 0
    cancelled: bool = False

    def count(self, state: NodeState) -> int:
        return sum(1 for s in self.node_states.values() if s == state)

    def output(self, node_id: str, port: str, default: Any = None) -> Any:
        return self.node_outputs.get(output_key(node_id, port), default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_outputs": dict(self.node_outputs),
            "node_states": {k: v.value for k, v in self.node_states.items()},
            "execution_log": list(self.execution_log),
            "start_time": self.start_time,
            "duration_ms": self.duration_ms,
            "cancelled": self.cancelled,
        }


EventCallback = Callable[[dict[str, Any]], None]


class ExecutionContextBuilder:
    """Accumulates the state of a single run.

    Only the run that created the builder writes to it; ``build`` hands the
    caller an independent ExecutionContext.
    """

    def __init__(self, on_event: EventCallback | None = None, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._on_event = on_event
        self._outputs: dict[str, Any] = {}
        self._states: dict[str, NodeState] = {}
        self._log: list[str] = []
        self._cancelled = False
        self.start_time = clock()

    def elapsed_ms(self) -> int:
        return int((self._clock() - self.start_time) * 1000)

    def log(self, line: str) -> None:
        self._log.append(line)
        self._emit({"type": "log", "line": line})

    def set_state(self, node_id: str, state: NodeState) -> None:
        self._states[node_id] = state
        self._emit({"type": "node_state", "node_id": node_id, "state": state.value})

    def state(self, node_id: str) -> NodeState | None:
        return self._states.get(node_id)

    def bind_outputs(self, node_id: str, ports: list[str], value: Any) -> None:
        for port in ports:
            self._outputs[output_key(node_id, port)] = value

    def lookup(self, node_id: str, port: str) -> tuple[bool, Any]:
        key = output_key(node_id, port)
        if key in self._outputs:
            return True, self._outputs[key]
        return False, None

    def mark_cancelled(self) -> None:
        self._cancelled = True

    def count(self, state: NodeState) -> int:
        return sum(1 for s in self._states.values() if s == state)

    def build(self) -> ExecutionContext:
        return ExecutionContext(
            node_outputs=dict(self._outputs),
            node_states=dict(self._states),
            execution_log=list(self._log),
            start_time=self.start_time,
            duration_ms=self.elapsed_ms(),
            cancelled=self._cancelled,
        )

    def _emit(self, event: dict[str, Any]) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            logger.exception("Execution event callback failed for %s", event.get("type"))

"""Base node handler abstraction and node type definitions."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from ..engine.behaviors import BehaviorKind
from ..engine.graph import Node
from ..engine.options import ExecutionOptions


@dataclass
class NodeDefinition:
    """Serializable node type definition sent to the frontend."""
    node_type: str
    display_name: str
    category: str
    description: str
    default_inputs: list[str]
    default_outputs: list[str]
    behaviors: list[str]


@dataclass
class RunContext:
    """What a handler may touch while running: options and the run log."""
    options: ExecutionOptions
    log: Callable[[str], None]

    @property
    def rng(self):
        return self.options.rng

    def timestamp(self) -> str:
        return self.options.timestamp()


def first_input(inputs: dict[str, Any]) -> Any:
    """Only the first resolved input is used by the built-in behaviors."""
    for value in inputs.values():
        return value
    return None


class BaseNode(ABC):
    """Abstract base class for the handler of one node type."""

    CATEGORY: str = "Uncategorized"
    DISPLAY_NAME: str = ""
    DESCRIPTION: str = ""
    DEFAULT_INPUTS: list[str] = []
    DEFAULT_OUTPUTS: list[str] = []
    BEHAVIORS: tuple[BehaviorKind, ...] = (BehaviorKind.DEFAULT,)

    @abstractmethod
    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        ...

    @classmethod
    def get_definition(cls, node_type: str) -> NodeDefinition:
        return NodeDefinition(
            node_type=node_type,
            display_name=cls.DISPLAY_NAME or cls.__name__,
            category=cls.CATEGORY,
            description=cls.DESCRIPTION or cls.__doc__ or "",
            default_inputs=list(cls.DEFAULT_INPUTS),
            default_outputs=list(cls.DEFAULT_OUTPUTS),
            behaviors=[b.value for b in cls.BEHAVIORS],
        )

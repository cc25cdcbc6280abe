"""Input node: stands in for user interaction with canned values."""
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.graph import Node
from .base import BaseNode, RunContext
from .registry import NodeRegistry

MOCK_INPUTS = [
    "Hello Matrix IDE",
    "Sample data",
    "42",
    "test@example.com",
    "user input data",
]


@NodeRegistry.register(NodeType.INPUT)
class InputNode(BaseNode):
    CATEGORY = "Input"
    DISPLAY_NAME = "Input"
    DESCRIPTION = "Produces a placeholder value in place of user or file input"
    DEFAULT_OUTPUTS = ["value"]
    BEHAVIORS = (BehaviorKind.CONSOLE_INPUT, BehaviorKind.FILE_INPUT)

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        value = run.rng.choice(MOCK_INPUTS)
        if node.resolved_behavior() == BehaviorKind.FILE_INPUT:
            path = getattr(node.config, "file_path", "input.txt")
            run.log(f'📄 File input ({path}): "{value}"')
        else:
            run.log(f'📥 Input: "{value}"')
        return value

"""Variable node: a configured constant, or its input when unset."""
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.graph import Node
from .base import BaseNode, RunContext, first_input
from .registry import NodeRegistry


@NodeRegistry.register(NodeType.VARIABLE)
class VariableNode(BaseNode):
    CATEGORY = "Data"
    DISPLAY_NAME = "Variable"
    DEFAULT_INPUTS = ["value"]
    DEFAULT_OUTPUTS = ["value"]
    BEHAVIORS = (BehaviorKind.CONSTANT,)

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        value = getattr(node.config, "value", None)
        if value is None:
            value = first_input(inputs)
        run.log(f"📊 Variable: {node.label} = {json.dumps(value, default=str)}")
        return value

"""Logic node: classifies its input into a fixed label set."""
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.graph import Node
from .base import BaseNode, RunContext, first_input
from .registry import NodeRegistry


def classify(value: Any, number_threshold: float = 50, length_threshold: int = 5) -> str:
    # bool is an int subclass but is classified by truthiness
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return "high" if value > number_threshold else "low"
    if isinstance(value, str):
        return "long" if len(value) > length_threshold else "short"
    return "truthy" if value else "falsy"


@NodeRegistry.register(NodeType.LOGIC)
class LogicNode(BaseNode):
    CATEGORY = "Logic"
    DISPLAY_NAME = "Condition"
    DESCRIPTION = "Labels its input: high/low for numbers, long/short for strings, truthy/falsy otherwise"
    DEFAULT_INPUTS = ["value"]
    DEFAULT_OUTPUTS = ["route"]
    BEHAVIORS = (BehaviorKind.CLASSIFY,)

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        value = first_input(inputs)
        result = classify(
            value,
            number_threshold=getattr(node.config, "number_threshold", 50),
            length_threshold=getattr(node.config, "length_threshold", 5),
        )
        run.log(f'🔀 Logic: "{value}" → "{result}"')
        return result

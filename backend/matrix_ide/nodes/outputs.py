"""Output node: renders a template; nothing is written to a real sink."""
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.graph import Node
from .base import BaseNode, RunContext, first_input
from .registry import NodeRegistry


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "None"
    return json.dumps(value, default=str)


def render_template(template: str, inputs: dict[str, Any]) -> str:
    """Substitute ``{result}`` with the first input and ``{<port>}`` with each input."""
    rendered = template.replace("{result}", _as_text(first_input(inputs)))
    for port, value in inputs.items():
        rendered = rendered.replace("{" + port + "}", _as_text(value))
    return rendered


@NodeRegistry.register(NodeType.OUTPUT)
class OutputNode(BaseNode):
    CATEGORY = "Output"
    DISPLAY_NAME = "Output"
    DESCRIPTION = "Renders its input through a {result} template and logs it"
    DEFAULT_INPUTS = ["data"]
    BEHAVIORS = (BehaviorKind.CONSOLE_OUTPUT, BehaviorKind.FILE_OUTPUT)

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        template = getattr(node.config, "template", None) or "Result: {result}"
        output = render_template(template, inputs)
        if node.resolved_behavior() == BehaviorKind.FILE_OUTPUT:
            filename = getattr(node.config, "filename", "output.txt")
            run.log(f"📤 Output ({filename}): {output}")
        else:
            run.log(f"📤 Output: {output}")
        return output

"""Function node: text processing, mock AI enhancement, validation, custom code."""
import json
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType, ai_prefix
from ..engine.graph import Node
from ..engine.safe_eval import UnsafeExpressionError, evaluate_return
from .base import BaseNode, RunContext, first_input
from .registry import NodeRegistry


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def validation_confidence(value: Any) -> float:
    """Pseudo-confidence: grows with the length of the value, capped at 0.99."""
    if not value:
        return 0.0
    return round(min(0.99, 0.5 + len(str(value)) / 100), 2)


@NodeRegistry.register(NodeType.FUNCTION)
class FunctionNode(BaseNode):
    CATEGORY = "Processing"
    DISPLAY_NAME = "Function"
    DESCRIPTION = "Transforms its first input with a built-in behavior or restricted custom code"
    DEFAULT_INPUTS = ["input"]
    DEFAULT_OUTPUTS = ["result"]
    BEHAVIORS = (
        BehaviorKind.DEFAULT,
        BehaviorKind.TEXT_PROCESS,
        BehaviorKind.AI_ENHANCE,
        BehaviorKind.VALIDATE,
        BehaviorKind.CUSTOM_CODE,
    )

    async def execute(self, node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
        value = first_input(inputs) or ""
        behavior = node.resolved_behavior()

        if behavior == BehaviorKind.TEXT_PROCESS:
            processed = value.strip().lower() if isinstance(value, str) else _to_text(value)
            run.log(f'🔄 Processed: "{value}" → "{processed}"')
            return processed

        if behavior == BehaviorKind.AI_ENHANCE:
            prefix = ai_prefix(getattr(node.config, "model", None))
            enhanced = f"{prefix}: {_to_text(value)}"
            run.log(f'🤖 AI Enhanced: "{value}" → "{enhanced}"')
            return enhanced

        if behavior == BehaviorKind.VALIDATE:
            is_valid = bool(value) and len(str(value)) > 0
            result = {
                "is_valid": is_valid,
                "data": value,
                "confidence": validation_confidence(value) if is_valid else 0.0,
            }
            run.log(f'✅ Validation: "{value}" is {"valid" if is_valid else "invalid"}')
            return result

        if node.data.code and "return" in node.data.code:
            try:
                result = evaluate_return(node.data.code, inputs)
            except UnsafeExpressionError as e:
                run.log(f"⚠️ Custom code execution failed: {e}")
                return value
            run.log(f"⚙️ Custom function result: {json.dumps(result)}")
            return result

        wrapped = {
            "value": value,
            "timestamp": run.timestamp(),
            "node_id": node.id,
            "node_type": NodeType.FUNCTION.value,
        }
        run.log(f"➡️ Pass-through: {_to_text(value)}")
        return wrapped

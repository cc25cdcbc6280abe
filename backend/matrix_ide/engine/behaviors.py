"""Node type tags and built-in behavior selection."""
import re
from enum import Enum


class NodeType(str, Enum):
    INPUT = "input"
    OUTPUT = "output"
    FUNCTION = "function"
    VARIABLE = "variable"
    API = "api"
    LOGIC = "logic"


class BehaviorKind(str, Enum):
    """Built-in behavior a node runs and generates code for.

    Set explicitly when a node is created from the palette or a template.
    """
    DEFAULT = "default"
    CONSOLE_INPUT = "console_input"
    FILE_INPUT = "file_input"
    TEXT_PROCESS = "text_process"
    AI_ENHANCE = "ai_enhance"
    VALIDATE = "validate"
    CUSTOM_CODE = "custom_code"
    HTTP_REQUEST = "http_request"
    CLASSIFY = "classify"
    CONSOLE_OUTPUT = "console_output"
    FILE_OUTPUT = "file_output"
    CONSTANT = "constant"


# Keyword checks for graphs saved before behaviors were tagged.
# Order matters: the first matching keyword wins.
_LEGACY_FUNCTION_KEYWORDS: list[tuple[tuple[str, ...], BehaviorKind]] = [
    (("process", "text"), BehaviorKind.TEXT_PROCESS),
    (("ai", "enhance"), BehaviorKind.AI_ENHANCE),
    (("validate",), BehaviorKind.VALIDATE),
]


def node_type_of(value: NodeType | str) -> NodeType | str:
    """Coerce to NodeType, keeping unknown tags as plain strings."""
    if isinstance(value, NodeType):
        return value
    try:
        return NodeType(value)
    except ValueError:
        return value


def infer_behavior(node_type: NodeType | str, label: str) -> BehaviorKind:
    """Legacy label-substring heuristic used when a node carries no behavior tag."""
    label = (label or "").lower()
    node_type = node_type_of(node_type)

    if node_type == NodeType.INPUT:
        return BehaviorKind.FILE_INPUT if "file" in label else BehaviorKind.CONSOLE_INPUT
    if node_type == NodeType.OUTPUT:
        return BehaviorKind.FILE_OUTPUT if "file" in label else BehaviorKind.CONSOLE_OUTPUT
    if node_type == NodeType.FUNCTION:
        for keywords, kind in _LEGACY_FUNCTION_KEYWORDS:
            if any(k in label for k in keywords):
                return kind
        return BehaviorKind.DEFAULT
    if node_type == NodeType.API:
        return BehaviorKind.HTTP_REQUEST
    if node_type == NodeType.LOGIC:
        return BehaviorKind.CLASSIFY
    if node_type == NodeType.VARIABLE:
        return BehaviorKind.CONSTANT
    return BehaviorKind.DEFAULT


def ai_prefix(model: str | None) -> str:
    """``AI_ENHANCED`` plus the model name as an upper-snake suffix."""
    suffix = re.sub(r"[^A-Za-z0-9]+", "_", model or "").strip("_").upper()
    return f"AI_ENHANCED_{suffix}" if suffix else "AI_ENHANCED"

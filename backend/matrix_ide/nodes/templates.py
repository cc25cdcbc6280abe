"""Node template palette.

Templates are preconfigured nodes. A node created from a template always
carries an explicit BehaviorKind, so its behavior never depends on the label.
"""
from dataclasses import dataclass, field
from typing import Any

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.configs import config_from_dict
from ..engine.graph import Node, NodeData, Position


@dataclass(frozen=True)
class NodeTemplate:
    id: str
    name: str
    description: str
    category: str
    type: NodeType
    behavior: BehaviorKind
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    config: dict[str, Any] = field(default_factory=dict)
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "type": self.type.value,
            "behavior": self.behavior.value,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "config": dict(self.config),
            "code": self.code,
        }


TEMPLATES: tuple[NodeTemplate, ...] = (
    # Input
    NodeTemplate(
        id="text-input", name="Text Input",
        description="Simple text input with validation", category="Input",
        type=NodeType.INPUT, behavior=BehaviorKind.CONSOLE_INPUT,
        outputs=("text",),
        config={"prompt": "Enter text:", "validation": "required"},
    ),
    NodeTemplate(
        id="file-input", name="File Reader",
        description="Read data from files with error handling", category="Input",
        type=NodeType.INPUT, behavior=BehaviorKind.FILE_INPUT,
        outputs=("content",),
        config={"filePath": "input.txt", "encoding": "utf-8"},
    ),
    NodeTemplate(
        id="number-input", name="Number Input",
        description="Numeric input with range validation", category="Input",
        type=NodeType.INPUT, behavior=BehaviorKind.CONSOLE_INPUT,
        outputs=("number",),
        config={"prompt": "Enter number:", "min": 0, "max": 100},
    ),
    # Processing
    NodeTemplate(
        id="data-cleaner", name="Data Cleaner",
        description="Clean and normalize text data", category="Processing",
        type=NodeType.FUNCTION, behavior=BehaviorKind.TEXT_PROCESS,
        inputs=("data",), outputs=("cleaned_data",),
        config={"functionName": "clean_data", "parameters": ["data"], "returnType": "str"},
    ),
    NodeTemplate(
        id="math-calculator", name="Math Calculator",
        description="Combine two operands into an expression", category="Processing",
        type=NodeType.FUNCTION, behavior=BehaviorKind.CUSTOM_CODE,
        inputs=("a", "b"), outputs=("result",),
        config={"operation": "add", "precision": 2},
        code='return a + " + " + b',
    ),
    # AI
    NodeTemplate(
        id="ai-text-processor", name="AI Text Processor",
        description="Process text using local AI models", category="AI",
        type=NodeType.FUNCTION, behavior=BehaviorKind.AI_ENHANCE,
        inputs=("text",), outputs=("processed_text", "sentiment"),
        config={"model": "local-gpt", "maxLength": 500},
    ),
    # API
    NodeTemplate(
        id="rest-api-get", name="REST API GET",
        description="Fetch data from REST API with error handling", category="API",
        type=NodeType.API, behavior=BehaviorKind.HTTP_REQUEST,
        inputs=("url",), outputs=("data", "status"),
        config={"url": "https://api.example.com/data", "timeout": 5000, "retries": 3},
    ),
    NodeTemplate(
        id="webhook-sender", name="Webhook Sender",
        description="Send data to webhook endpoints", category="API",
        type=NodeType.API, behavior=BehaviorKind.HTTP_REQUEST,
        inputs=("data",), outputs=("status", "response"),
        config={"webhook_url": "", "method": "POST", "headers": {}},
    ),
    # Logic
    NodeTemplate(
        id="conditional-router", name="Conditional Router",
        description="Route data based on conditions", category="Logic",
        type=NodeType.LOGIC, behavior=BehaviorKind.CLASSIFY,
        inputs=("value",), outputs=("route", "category"),
        config={"threshold": 50, "trueOutput": "high", "falseOutput": "low"},
    ),
    NodeTemplate(
        id="data-validator", name="Data Validator",
        description="Validate data against rules", category="Logic",
        type=NodeType.LOGIC, behavior=BehaviorKind.CLASSIFY,
        inputs=("data",), outputs=("valid", "errors"),
        config={"rules": ["required", "type:string", "min_length:3"]},
    ),
    # Output
    NodeTemplate(
        id="console-logger", name="Console Logger",
        description="Advanced console logging with levels", category="Output",
        type=NodeType.OUTPUT, behavior=BehaviorKind.CONSOLE_OUTPUT,
        inputs=("data",),
        config={"level": "info", "timestamp": True, "format": "json"},
    ),
    NodeTemplate(
        id="file-writer", name="File Writer",
        description="Write data to files with backup", category="Output",
        type=NodeType.OUTPUT, behavior=BehaviorKind.FILE_OUTPUT,
        inputs=("data",),
        config={"filename": "output.txt", "outputType": "file", "backup": True, "append": False},
    ),
)

_BY_ID = {t.id: t for t in TEMPLATES}


def list_templates(category: str | None = None) -> list[NodeTemplate]:
    if category is None:
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t.category.lower() == category.lower()]


def get_template(template_id: str) -> NodeTemplate:
    if template_id not in _BY_ID:
        raise KeyError(f"Unknown template: {template_id}")
    return _BY_ID[template_id]


def create_node_from_template(
    template_id: str, node_id: str, position: Position | None = None,
) -> Node:
    """Instantiate a template as a new node with its behavior tag set."""
    template = get_template(template_id)
    return Node(
        id=node_id,
        type=template.type,
        data=NodeData(
            label=template.name,
            inputs=list(template.inputs),
            outputs=list(template.outputs),
            code=template.code,
            config=config_from_dict(template.type, template.config),
        ),
        position=position or Position(),
        behavior=template.behavior,
    )

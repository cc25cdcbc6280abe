"""Typed per-node-type configuration records.

The canvas stores config as a free-form JSON object. ``config_from_dict``
converts that into one of the records below and ``config_to_dict`` goes back.
Keys a record does not know about are preserved in ``extra``.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Union

from .behaviors import NodeType, node_type_of


@dataclass
class InputConfig:
    prompt: str = "Enter value:"
    placeholder: str = ""
    validation: str | None = None
    file_path: str = "input.txt"
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class FunctionConfig:
    function_name: str | None = None
    model: str | None = None
    parameters: list[str] = field(default_factory=list)
    return_type: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class ApiConfig:
    url: str = "https://api.example.com/data"
    method: str = "GET"
    timeout_ms: int = 5000
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class LogicConfig:
    number_threshold: float = 50
    length_threshold: int = 5
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class OutputConfig:
    template: str = "Result: {result}"
    output_type: str = "console"
    filename: str = "output.txt"
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class VariableConfig:
    value: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class GenericConfig:
    """Config of a node whose type is not recognised."""
    extra: dict[str, Any] = field(default_factory=dict)


NodeConfig = Union[
    InputConfig, FunctionConfig, ApiConfig, LogicConfig,
    OutputConfig, VariableConfig, GenericConfig,
]

CONFIG_TYPES: dict[NodeType, type] = {
    NodeType.INPUT: InputConfig,
    NodeType.FUNCTION: FunctionConfig,
    NodeType.API: ApiConfig,
    NodeType.LOGIC: LogicConfig,
    NodeType.OUTPUT: OutputConfig,
    NodeType.VARIABLE: VariableConfig,
}

# camelCase / legacy canvas keys -> record field names
_KEY_ALIASES: dict[str, str] = {
    "filePath": "file_path",
    "functionName": "function_name",
    "returnType": "return_type",
    "webhook_url": "url",
    "webhookUrl": "url",
    "timeout": "timeout_ms",
    "threshold": "number_threshold",
    "numberThreshold": "number_threshold",
    "lengthThreshold": "length_threshold",
    "outputType": "output_type",
}


def default_config(node_type: NodeType | str) -> NodeConfig:
    return CONFIG_TYPES.get(node_type_of(node_type), GenericConfig)()


def config_from_dict(node_type: NodeType | str, raw: dict[str, Any] | None) -> NodeConfig:
    """Build the typed config record for ``node_type`` from free-form data."""
    config_cls = CONFIG_TYPES.get(node_type_of(node_type), GenericConfig)
    known = {f.name for f in fields(config_cls)} - {"extra"}
    kwargs: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in (raw or {}).items():
        name = _KEY_ALIASES.get(key, key)
        if name in known:
            # Empty legacy values (e.g. webhook_url: "") keep the default
            if value is None or value == "":
                continue
            kwargs[name] = value
        else:
            extra[key] = value
    return config_cls(**kwargs, extra=extra)


def config_to_dict(config: NodeConfig) -> dict[str, Any]:
    data = {f.name: getattr(config, f.name) for f in fields(config) if f.name != "extra"}
    data.update(config.extra)
    return data

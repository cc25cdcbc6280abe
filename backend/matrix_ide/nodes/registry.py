"""Node handler registry with auto-discovery."""
import importlib
import logging
import pkgutil

from ..engine.behaviors import NodeType
from .base import BaseNode, NodeDefinition

logger = logging.getLogger(__name__)

# Modules in this package that define no handlers
_NON_HANDLER_MODULES = {"base", "registry", "templates"}


class NodeRegistry:
    """Registry mapping node type tags to BaseNode subclasses."""

    _nodes: dict[str, type[BaseNode]] = {}

    @classmethod
    def register(cls, node_type: NodeType | str):
        """Decorator to register the handler of a node type.

        Usage:
            @NodeRegistry.register(NodeType.LOGIC)
            class LogicNode(BaseNode):
                ...
        """
        name = node_type.value if isinstance(node_type, NodeType) else node_type

        def decorator(node_cls: type[BaseNode]) -> type[BaseNode]:
            cls._nodes[name] = node_cls
            return node_cls
        return decorator

    @classmethod
    def get(cls, node_type: NodeType | str) -> type[BaseNode]:
        name = node_type.value if isinstance(node_type, NodeType) else node_type
        if name not in cls._nodes:
            raise KeyError(f"Unknown node type: {name}")
        return cls._nodes[name]

    @classmethod
    def create(cls, node_type: NodeType | str) -> BaseNode:
        return cls.get(node_type)()

    @classmethod
    def has(cls, node_type: NodeType | str) -> bool:
        name = node_type.value if isinstance(node_type, NodeType) else node_type
        return name in cls._nodes

    @classmethod
    def all_definitions(cls) -> dict[str, NodeDefinition]:
        return {
            name: node_cls.get_definition(name)
            for name, node_cls in cls._nodes.items()
        }

    @classmethod
    def discover(cls, package_name: str) -> None:
        """Import all modules in the given package to trigger @register decorators."""
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            if module_name.startswith("_") or module_name in _NON_HANDLER_MODULES:
                continue
            importlib.import_module(f"{package_name}.{module_name}")
        logger.debug("Registered node types: %s", sorted(cls._nodes))

    @classmethod
    def clear(cls) -> None:
        cls._nodes.clear()

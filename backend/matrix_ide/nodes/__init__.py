"""Auto-discover all node handler modules on import."""
from .registry import NodeRegistry

NodeRegistry.discover("matrix_ide.nodes")

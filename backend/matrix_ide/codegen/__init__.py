"""Source generation from node graphs.

Generation is pure: the same graph and language always produce the same
text, and it never raises for unknown languages or node types.
"""
from typing import Sequence

from ..engine.graph import Connection, Node
from . import cpp, javascript, python  # noqa: F401  (register generators)
from .registry import DEFAULT_LANGUAGE, GeneratorRegistry


def generate_code_for_language(
    nodes: Sequence[Node], connections: Sequence[Connection], language: str,
) -> str:
    """Generate a listing in ``language``; unsupported names fall back to Python."""
    return GeneratorRegistry.get(language).generate(nodes, connections)


def generate_code(nodes: Sequence[Node], connections: Sequence[Connection]) -> dict[str, str]:
    return {
        language: generate_code_for_language(nodes, connections, language)
        for language in GeneratorRegistry.languages()
    }


__all__ = [
    "DEFAULT_LANGUAGE",
    "GeneratorRegistry",
    "generate_code",
    "generate_code_for_language",
]

"""Deterministic variable names for generated code.

Every node gets one variable derived from its label: ``<slug>_value`` for
input nodes and ``<slug>_result`` for everything else. Output port names are
not part of the name since a node binds the same value to all its ports.
Clashing names get ``_2``, ``_3``... in scheduling order. Helper names
(an API response, a C++ file stream) are reserved after all variables.
"""
import re
from typing import Sequence

from ..engine.behaviors import NodeType
from ..engine.graph import Node

_NON_IDENT = re.compile(r"[^0-9a-zA-Z_]+")


def slugify(label: str) -> str:
    slug = _NON_IDENT.sub("_", (label or "").strip().lower()).strip("_")
    if not slug or slug[0].isdigit():
        slug = f"node_{slug}" if slug else "node"
    return slug


def variable_name(node: Node) -> str:
    suffix = "value" if node.type == NodeType.INPUT else "result"
    return f"{slugify(node.label)}_{suffix}"


def unique_name(base: str, taken: set[str]) -> str:
    """Reserve ``base`` in ``taken``, numbering it ``_2``, ``_3``... on a clash."""
    name, n = base, 1
    while name in taken:
        n += 1
        name = f"{base}_{n}"
    taken.add(name)
    return name


def assign_names(ordered: Sequence[Node], taken: set[str] | None = None) -> dict[str, str]:
    """Map node id -> unique variable name, walking nodes in the given order."""
    taken = set() if taken is None else taken
    return {node.id: unique_name(variable_name(node), taken) for node in ordered}


def assign_helper_names(
    nodes: Sequence[Node], suffixes: dict[str, str], taken: set[str],
) -> dict[str, str]:
    """Extra per-node names such as ``<slug>_response``.

    ``suffixes`` maps node id -> suffix. Names are unique against ``taken``,
    which should already hold every variable name.
    """
    return {
        node.id: unique_name(f"{slugify(node.label)}_{suffixes[node.id]}", taken)
        for node in nodes
        if node.id in suffixes
    }

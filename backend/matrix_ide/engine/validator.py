"""Graph validation: dangling references, unknown ports, node types and cycles."""
from typing import Sequence

from ..nodes.registry import NodeRegistry
from .graph import Connection, Node
from .scheduler import topological_order


def validate_graph(nodes: Sequence[Node], connections: Sequence[Connection]) -> list[str]:
    """Validate a graph, returning a list of error messages (empty = valid)."""
    errors: list[str] = []
    errors.extend(_check_duplicate_ids(nodes, connections))
    errors.extend(_check_node_types(nodes))
    errors.extend(_check_connections(nodes, connections))
    errors.extend(_check_cycles(nodes, connections))
    return errors


def _check_duplicate_ids(nodes: Sequence[Node], connections: Sequence[Connection]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            errors.append(f"Duplicate node id: {node.id}")
        seen.add(node.id)
    seen.clear()
    for conn in connections:
        if conn.id in seen:
            errors.append(f"Duplicate connection id: {conn.id}")
        seen.add(conn.id)
    return errors


def _check_node_types(nodes: Sequence[Node]) -> list[str]:
    return [
        f"Unknown node type: {node.type}"
        for node in nodes
        if not NodeRegistry.has(node.type)
    ]


def _check_connections(nodes: Sequence[Node], connections: Sequence[Connection]) -> list[str]:
    errors: list[str] = []
    by_id = {n.id: n for n in nodes}
    for conn in connections:
        src = by_id.get(conn.source)
        tgt = by_id.get(conn.target)
        if not src or not tgt:
            errors.append(f"Connection {conn.id} references missing node")
            continue
        if conn.source_output not in src.data.outputs:
            errors.append(
                f"Connection {conn.id}: output '{conn.source_output}' "
                f"not found on {src.id}"
            )
        if conn.target_input not in tgt.data.inputs:
            errors.append(
                f"Connection {conn.id}: input '{conn.target_input}' "
                f"not found on {tgt.id}"
            )
    return errors


def _check_cycles(nodes: Sequence[Node], connections: Sequence[Connection]) -> list[str]:
    schedule = topological_order(nodes, connections)
    if schedule.has_cycle:
        return [f"Graph contains a cycle involving: {', '.join(schedule.unscheduled)}"]
    return []

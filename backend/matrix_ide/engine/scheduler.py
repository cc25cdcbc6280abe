"""Topological scheduling of node graphs."""
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from .graph import Connection, Node


@dataclass
class ScheduleResult:
    order: list[Node] = field(default_factory=list)
    unscheduled: list[str] = field(default_factory=list)  # ids left out by a cycle

    @property
    def has_cycle(self) -> bool:
        return bool(self.unscheduled)

    @property
    def node_ids(self) -> list[str]:
        return [n.id for n in self.order]


def topological_order(nodes: Sequence[Node], connections: Sequence[Connection]) -> ScheduleResult:
    """Kahn's algorithm returning nodes in execution order.

    Ties are broken by position in ``nodes``. A cycle does not raise: nodes
    on or downstream of it are reported in ``unscheduled`` and the partial
    order is returned.
    """
    in_degree: dict[str, int] = {n.id: 0 for n in nodes}
    by_id: dict[str, Node] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)
    # One adjacency entry per connection, so parallel edges count twice
    adj: dict[str, list[str]] = {nid: [] for nid in in_degree}
    for conn in connections:
        if conn.source not in in_degree or conn.target not in in_degree:
            continue
        adj[conn.source].append(conn.target)
        in_degree[conn.target] += 1

    queue = deque(nid for nid, deg in in_degree.items() if deg == 0)
    order: list[Node] = []
    while queue:
        node_id = queue.popleft()
        order.append(by_id[node_id])
        for succ in adj[node_id]:
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)

    scheduled = {n.id for n in order}
    unscheduled = [nid for nid in in_degree if nid not in scheduled]
    return ScheduleResult(order=order, unscheduled=unscheduled)

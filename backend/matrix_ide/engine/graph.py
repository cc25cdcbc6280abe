"""Graph data structures: nodes, connections and the editable graph."""
from dataclasses import dataclass, field, replace
from typing import Any

from .behaviors import BehaviorKind, NodeType, infer_behavior, node_type_of
from .configs import NodeConfig, default_config


class GraphError(Exception):
    """Base class for graph mutation errors."""


class NodeNotFoundError(GraphError, KeyError):
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")

    def __str__(self) -> str:
        return self.args[0]


class ConnectionNotFoundError(GraphError, KeyError):
    def __init__(self, connection_id: str):
        self.connection_id = connection_id
        super().__init__(f"Connection not found: {connection_id}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateIdError(GraphError):
    pass


class InvalidPortError(GraphError):
    pass


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0

    def snapped(self, grid: float) -> "Position":
        return Position(x=round(self.x / grid) * grid, y=round(self.y / grid) * grid)


@dataclass
class NodeData:
    label: str
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    code: str | None = None
    config: NodeConfig | None = None


@dataclass
class Node:
    id: str
    type: NodeType | str
    data: NodeData
    position: Position = field(default_factory=Position)
    behavior: BehaviorKind | None = None  # None = untagged legacy node

    def __post_init__(self):
        self.type = node_type_of(self.type)
        if self.data.config is None:
            self.data.config = default_config(self.type)

    @property
    def label(self) -> str:
        return self.data.label

    @property
    def config(self) -> NodeConfig:
        return self.data.config

    def resolved_behavior(self) -> BehaviorKind:
        if self.behavior is not None:
            return self.behavior
        return infer_behavior(self.type, self.data.label)


@dataclass
class Connection:
    id: str
    source: str
    source_output: str  # port name on source
    target: str
    target_input: str   # port name on target


_NODE_DATA_FIELDS = {"label", "inputs", "outputs", "code", "config"}


@dataclass
class Graph:
    nodes: dict[str, Node] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)

    @classmethod
    def from_lists(cls, nodes: list[Node], connections: list[Connection]) -> "Graph":
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for conn in connections:
            graph.add_connection(conn)
        return graph

    def node_list(self) -> list[Node]:
        return list(self.nodes.values())

    def get_node(self, node_id: str) -> Node:
        if node_id not in self.nodes:
            raise NodeNotFoundError(node_id)
        return self.nodes[node_id]

    def get_connection(self, connection_id: str) -> Connection:
        for conn in self.connections:
            if conn.id == connection_id:
                return conn
        raise ConnectionNotFoundError(connection_id)

    def get_incoming(self, node_id: str) -> list[Connection]:
        return [c for c in self.connections if c.target == node_id]

    def get_outgoing(self, node_id: str) -> list[Connection]:
        return [c for c in self.connections if c.source == node_id]

    def get_predecessors(self, node_id: str) -> set[str]:
        return {c.source for c in self.connections if c.target == node_id}

    def get_successors(self, node_id: str) -> set[str]:
        return {c.target for c in self.connections if c.source == node_id}

    # -- mutations ---------------------------------------------------------

    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise DuplicateIdError(f"Node id already exists: {node.id}")
        self.nodes[node.id] = node
        return node

    def update_node(self, node_id: str, **changes: Any) -> Node:
        """Apply a partial update to a node.

        Accepts NodeData fields (label, inputs, outputs, code, config) as well
        as ``type`` and ``behavior``. Changing the type without a new config
        resets the config to that type's defaults.
        """
        node = self.get_node(node_id)
        unknown = set(changes) - _NODE_DATA_FIELDS - {"type", "behavior"}
        if unknown:
            raise GraphError(f"Cannot update node fields: {sorted(unknown)}")

        data_changes = {k: v for k, v in changes.items() if k in _NODE_DATA_FIELDS}
        new_type = node_type_of(changes.get("type", node.type))
        if new_type != node.type and "config" not in data_changes:
            data_changes["config"] = default_config(new_type)

        updated = Node(
            id=node.id,
            type=new_type,
            data=replace(node.data, **data_changes),
            position=node.position,
            behavior=changes.get("behavior", node.behavior),
        )
        self.nodes[node_id] = updated
        return updated

    def move_node(self, node_id: str, position: Position, snap_to_grid: float | None = None) -> Node:
        node = self.get_node(node_id)
        if snap_to_grid:
            position = position.snapped(snap_to_grid)
        node.position = position
        return node

    def delete_node(self, node_id: str) -> Node:
        node = self.get_node(node_id)
        del self.nodes[node_id]
        self.connections = [
            c for c in self.connections
            if c.source != node_id and c.target != node_id
        ]
        return node

    def add_connection(self, conn: Connection) -> Connection:
        if any(c.id == conn.id for c in self.connections):
            raise DuplicateIdError(f"Connection id already exists: {conn.id}")
        source = self.get_node(conn.source)
        target = self.get_node(conn.target)
        if conn.source_output not in source.data.outputs:
            raise InvalidPortError(
                f"Connection {conn.id}: output '{conn.source_output}' "
                f"not found on node '{source.id}'"
            )
        if conn.target_input not in target.data.inputs:
            raise InvalidPortError(
                f"Connection {conn.id}: input '{conn.target_input}' "
                f"not found on node '{target.id}'"
            )
        self.connections.append(conn)
        return conn

    def delete_connection(self, connection_id: str) -> Connection:
        conn = self.get_connection(connection_id)
        self.connections = [c for c in self.connections if c.id != connection_id]
        return conn

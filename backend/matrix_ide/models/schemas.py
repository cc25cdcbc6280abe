"""Pydantic schemas for API request/response models and canvas conversion."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..engine.behaviors import BehaviorKind, NodeType
from ..engine.configs import config_from_dict, config_to_dict
from ..engine.graph import Connection, Graph, Node, NodeData, Position


class PositionSchema(BaseModel):
    x: float = 0.0
    y: float = 0.0


class NodeDataSchema(BaseModel):
    label: str
    inputs: list[str] = []
    outputs: list[str] = []
    code: str | None = None
    config: dict[str, Any] = {}


class NodeSchema(BaseModel):
    id: str
    type: str
    position: PositionSchema = PositionSchema()
    data: NodeDataSchema
    behavior: BehaviorKind | None = None


class ConnectionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str
    source_output: str = Field(alias="sourceOutput")
    target: str
    target_input: str = Field(alias="targetInput")


class GraphSchema(BaseModel):
    nodes: list[NodeSchema] = []
    connections: list[ConnectionSchema] = []


class ExecuteRequest(BaseModel):
    graph: GraphSchema | None = None   # None = the workspace graph
    session_id: str | None = None
    wait: bool = False
    seed: int | None = None


class ExecuteResponse(BaseModel):
    execution_id: str
    session_id: str
    status: str
    results: dict[str, Any] = {}


class GenerateRequest(BaseModel):
    graph: GraphSchema | None = None
    language: str | None = None


class GenerateResponse(BaseModel):
    language: str
    code: str


class ValidateRequest(BaseModel):
    graph: GraphSchema | None = None


class ValidateResponse(BaseModel):
    valid: bool
    errors: list[str] = []


class AddNodeRequest(BaseModel):
    """Either a full node or a template id (with optional id and position)."""
    node: NodeSchema | None = None
    template_id: str | None = None
    id: str | None = None
    position: PositionSchema | None = None


class UpdateNodeRequest(BaseModel):
    type: str | None = None
    behavior: BehaviorKind | None = None
    label: str | None = None
    inputs: list[str] | None = None
    outputs: list[str] | None = None
    code: str | None = None
    config: dict[str, Any] | None = None


class MoveNodeRequest(BaseModel):
    position: PositionSchema
    snap_to_grid: bool = False


class NodeDefinitionResponse(BaseModel):
    node_type: str
    display_name: str
    category: str
    description: str
    default_inputs: list[str]
    default_outputs: list[str]
    behaviors: list[str]


def node_from_schema(schema: NodeSchema) -> Node:
    return Node(
        id=schema.id,
        type=schema.type,
        data=NodeData(
            label=schema.data.label,
            inputs=list(schema.data.inputs),
            outputs=list(schema.data.outputs),
            code=schema.data.code,
            config=config_from_dict(schema.type, schema.data.config),
        ),
        position=Position(x=schema.position.x, y=schema.position.y),
        behavior=schema.behavior,
    )


def node_to_schema(node: Node) -> NodeSchema:
    return NodeSchema(
        id=node.id,
        type=node.type.value if isinstance(node.type, NodeType) else node.type,
        position=PositionSchema(x=node.position.x, y=node.position.y),
        data=NodeDataSchema(
            label=node.data.label,
            inputs=list(node.data.inputs),
            outputs=list(node.data.outputs),
            code=node.data.code,
            config=config_to_dict(node.config),
        ),
        behavior=node.behavior,
    )


def connection_from_schema(schema: ConnectionSchema) -> Connection:
    return Connection(
        id=schema.id,
        source=schema.source,
        source_output=schema.source_output,
        target=schema.target,
        target_input=schema.target_input,
    )


def connection_to_schema(conn: Connection) -> ConnectionSchema:
    return ConnectionSchema(
        id=conn.id,
        source=conn.source,
        source_output=conn.source_output,
        target=conn.target,
        target_input=conn.target_input,
    )


def schema_to_lists(schema: GraphSchema) -> tuple[list[Node], list[Connection]]:
    """Convert without validation; the engine tolerates dangling references."""
    nodes = [node_from_schema(n) for n in schema.nodes]
    connections = [connection_from_schema(c) for c in schema.connections]
    return nodes, connections


def graph_to_schema(graph: Graph) -> GraphSchema:
    return GraphSchema(
        nodes=[node_to_schema(n) for n in graph.node_list()],
        connections=[connection_to_schema(c) for c in graph.connections],
    )

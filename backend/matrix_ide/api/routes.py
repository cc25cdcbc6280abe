"""REST API routes."""
import asyncio
import logging
import uuid
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException

from ..codegen import DEFAULT_LANGUAGE, GeneratorRegistry, generate_code_for_language
from ..config import settings
from ..engine.configs import config_from_dict
from ..engine.context import ExecutionContext, NodeState
from ..engine.executor import execute_node_graph
from ..engine.graph import (
    Connection, ConnectionNotFoundError, Graph, GraphError, Node,
    NodeNotFoundError, Position,
)
from ..engine.run_control import runs
from ..engine.validator import validate_graph
from ..models.schemas import (
    AddNodeRequest, ConnectionSchema, ExecuteRequest, ExecuteResponse,
    GenerateRequest, GenerateResponse, GraphSchema, MoveNodeRequest,
    NodeDefinitionResponse, NodeSchema,
    UpdateNodeRequest, ValidateRequest, ValidateResponse,
    connection_from_schema, connection_to_schema, graph_to_schema,
    node_from_schema, node_to_schema, schema_to_lists,
)
from ..nodes.registry import NodeRegistry
from ..nodes.templates import create_node_from_template, list_templates
from .websocket import manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# In-memory stores; results are capped at settings.max_results
_results: dict[str, Any] = {}
_workspace = Graph()


def _graph_http_error(error: GraphError) -> HTTPException:
    if isinstance(error, (NodeNotFoundError, ConnectionNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


def _request_graph(schema: GraphSchema | None) -> tuple[list[Node], list[Connection]]:
    if schema is None:
        return _workspace.node_list(), list(_workspace.connections)
    return schema_to_lists(schema)


def _store_result(execution_id: str, result: dict[str, Any]):
    # Evict oldest entries if at capacity
    while _results and len(_results) >= settings.max_results:
        _results.pop(next(iter(_results)))
    _results[execution_id] = result


def _run_status(context: ExecutionContext) -> str:
    if context.cancelled:
        return "cancelled"
    if context.count(NodeState.ERROR):
        return "failed"
    return "completed"


@router.get("/nodes", response_model=dict[str, NodeDefinitionResponse])
async def list_nodes():
    """Return all registered node definitions."""
    return {
        name: asdict(defn)
        for name, defn in NodeRegistry.all_definitions().items()
    }


@router.get("/templates")
async def get_templates(category: str | None = None):
    return [t.to_dict() for t in list_templates(category)]


@router.get("/languages")
async def get_languages():
    return {"default": DEFAULT_LANGUAGE, "languages": GeneratorRegistry.languages()}


@router.post("/execute", response_model=ExecuteResponse)
async def execute(request: ExecuteRequest):
    """Execute a graph (the workspace graph when none is given).

    With ``wait`` the run report is returned inline. Otherwise the run starts
    in the background and its events are streamed over the session WebSocket.
    """
    nodes, connections = _request_graph(request.graph)
    session_id = request.session_id or str(uuid.uuid4())
    execution_id = str(uuid.uuid4())
    options = settings.execution_options(seed=request.seed)
    run = runs.start(execution_id, session_id)
    logger.info("Execution %s started (%d nodes, session %s)", execution_id, len(nodes), session_id)

    if request.wait:
        try:
            context = await execute_node_graph(
                nodes, connections, options, controller=run.controller,
            )
        finally:
            runs.finish(execution_id)
        results = context.to_dict()
        _store_result(execution_id, results)
        return ExecuteResponse(
            execution_id=execution_id, session_id=session_id,
            status=_run_status(context), results=results,
        )

    stream = manager.make_event_stream(session_id, execution_id, asyncio.get_running_loop())

    async def _run_graph():
        try:
            await manager.send_to_session(session_id, {
                "type": "execution_start", "execution_id": execution_id,
            })
            pump = asyncio.create_task(stream.pump())
            try:
                context = await execute_node_graph(
                    nodes, connections, options,
                    progress_callback=stream.callback, controller=run.controller,
                )
            finally:
                stream.close()
                await pump
            results = context.to_dict()
            _store_result(execution_id, results)
            await manager.send_to_session(session_id, {
                "type": "execution_complete",
                "execution_id": execution_id,
                "status": _run_status(context),
                "results": results,
            })
        except Exception as e:
            logger.exception("Execution %s crashed", execution_id)
            await manager.send_to_session(session_id, {
                "type": "execution_error",
                "execution_id": execution_id,
                "error": str(e),
            })
        finally:
            runs.finish(execution_id)

    asyncio.create_task(_run_graph())

    return ExecuteResponse(
        execution_id=execution_id, session_id=session_id, status="started",
    )


@router.post("/execute/{execution_id}/stop")
async def stop_execution(execution_id: str):
    run = runs.get(execution_id)
    if not run:
        raise HTTPException(status_code=404, detail="Execution not found or already completed")
    run.controller.stop()
    await manager.send_to_session(run.session_id, {
        "type": "execution_stopped", "execution_id": execution_id,
    })
    return {"status": "stopped"}


@router.get("/results/{execution_id}")
async def get_results(execution_id: str):
    if execution_id not in _results:
        raise HTTPException(status_code=404, detail="Execution not found")
    return _results[execution_id]


@router.post("/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest):
    nodes, connections = _request_graph(request.graph)
    language = GeneratorRegistry.resolve(request.language or settings.default_language)
    code = generate_code_for_language(nodes, connections, language)
    return GenerateResponse(language=language, code=code)


@router.post("/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest):
    nodes, connections = _request_graph(request.graph)
    errors = validate_graph(nodes, connections)
    return ValidateResponse(valid=not errors, errors=errors)


# -- workspace graph ---------------------------------------------------------

@router.get("/graph", response_model=GraphSchema)
async def get_workspace_graph():
    return graph_to_schema(_workspace)


@router.post("/graph/nodes", response_model=NodeSchema)
async def add_node(request: AddNodeRequest):
    if request.node is not None:
        node = node_from_schema(request.node)
    elif request.template_id:
        position = None
        if request.position is not None:
            position = Position(x=request.position.x, y=request.position.y)
        try:
            node = create_node_from_template(
                request.template_id, request.id or str(uuid.uuid4()), position,
            )
        except KeyError as e:
            raise HTTPException(status_code=404, detail=e.args[0])
    else:
        raise HTTPException(status_code=400, detail="Either node or template_id is required")

    try:
        _workspace.add_node(node)
    except GraphError as e:
        raise _graph_http_error(e)
    return node_to_schema(node)


@router.patch("/graph/nodes/{node_id}", response_model=NodeSchema)
async def update_node(node_id: str, request: UpdateNodeRequest):
    changes = request.model_dump(exclude_unset=True)
    if changes.get("type") is None:
        changes.pop("type", None)
    try:
        if "config" in changes:
            node_type = changes.get("type", _workspace.get_node(node_id).type)
            changes["config"] = config_from_dict(node_type, changes["config"])
        node = _workspace.update_node(node_id, **changes)
    except GraphError as e:
        raise _graph_http_error(e)
    return node_to_schema(node)


@router.post("/graph/nodes/{node_id}/move", response_model=NodeSchema)
async def move_node(node_id: str, request: MoveNodeRequest):
    grid = settings.snap_grid_size if request.snap_to_grid else None
    position = Position(x=request.position.x, y=request.position.y)
    try:
        node = _workspace.move_node(node_id, position, snap_to_grid=grid)
    except GraphError as e:
        raise _graph_http_error(e)
    return node_to_schema(node)


@router.delete("/graph/nodes/{node_id}")
async def delete_node(node_id: str):
    try:
        _workspace.delete_node(node_id)
    except GraphError as e:
        raise _graph_http_error(e)
    return {"status": "deleted", "id": node_id}


@router.post("/graph/connections", response_model=ConnectionSchema)
async def add_connection(request: ConnectionSchema):
    try:
        conn = _workspace.add_connection(connection_from_schema(request))
    except GraphError as e:
        raise _graph_http_error(e)
    return connection_to_schema(conn)


@router.delete("/graph/connections/{connection_id}")
async def delete_connection(connection_id: str):
    try:
        _workspace.delete_connection(connection_id)
    except GraphError as e:
        raise _graph_http_error(e)
    return {"status": "deleted", "id": connection_id}


@router.post("/graph/reset")
async def reset_workspace():
    _workspace.nodes.clear()
    _workspace.connections.clear()
    return {"status": "reset"}

"""Execution engine: walk the scheduled graph and simulate each node."""
import asyncio
import logging
from typing import Any, Sequence

from ..nodes.base import RunContext
from ..nodes.registry import NodeRegistry
from .context import EventCallback, ExecutionContext, ExecutionContextBuilder, NodeState
from .graph import Connection, Node
from .options import ExecutionOptions
from .run_control import RunController
from .scheduler import topological_order

logger = logging.getLogger(__name__)


def resolve_inputs(
    node: Node,
    connections: Sequence[Connection],
    builder: ExecutionContextBuilder,
) -> dict[str, Any]:
    """Collect values produced upstream for the node's input ports.

    Every incoming connection is read, whether or not the node declares its
    target port. Connections are read in list order, so when several feed
    the same input the last one wins. Unresolvable keys are skipped.
    """
    inputs: dict[str, Any] = {}
    for conn in connections:
        if conn.target != node.id:
            continue
        found, value = builder.lookup(conn.source, conn.source_output)
        if found:
            inputs[conn.target_input] = value
    return inputs


async def execute_node(node: Node, inputs: dict[str, Any], run: RunContext) -> Any:
    handler = NodeRegistry.create(node.type)
    return await handler.execute(node, inputs, run)


async def execute_node_graph(
    nodes: Sequence[Node],
    connections: Sequence[Connection],
    options: ExecutionOptions | None = None,
    *,
    progress_callback: EventCallback | None = None,
    controller: RunController | None = None,
) -> ExecutionContext:
    """Execute nodes in topological order and return the run report.

    The first failing node is marked ``error`` and the run halts; nodes after
    it stay ``pending``. Node failures never propagate to the caller.
    """
    options = options or ExecutionOptions()
    builder = ExecutionContextBuilder(on_event=progress_callback, clock=options.clock)
    run = RunContext(options=options, log=builder.log)

    for node in nodes:
        builder.set_state(node.id, NodeState.PENDING)
    builder.log(f"🚀 Starting execution of {len(nodes)} nodes")

    schedule = topological_order(nodes, connections)
    if schedule.has_cycle:
        builder.log("⚠️ Warning: Circular dependency detected in node graph")
        logger.warning(
            "Circular dependency detected; skipping nodes %s", schedule.unscheduled,
        )

    for node in schedule.order:
        if controller is not None and controller.stopped:
            builder.mark_cancelled()
            builder.log("⏹ Execution cancelled")
            break

        inputs = resolve_inputs(node, connections, builder)
        builder.log(f"▶️ Executing: {node.label}")
        builder.set_state(node.id, NodeState.RUNNING)
        started = options.clock()
        try:
            if options.node_delay > 0:
                await asyncio.sleep(options.node_delay)
            output = await execute_node(node, inputs, run)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            elapsed = int((options.clock() - started) * 1000)
            builder.set_state(node.id, NodeState.ERROR)
            builder.log(f"✗ {node.label} failed: {_error_message(e)}")
            builder.log(f"💥 Execution stopped due to error in {node.label}")
            logger.info("Node %s (%s) failed after %dms: %s", node.id, node.label, elapsed, e)
            break

        elapsed = int((options.clock() - started) * 1000)
        builder.bind_outputs(node.id, node.data.outputs, output)
        builder.set_state(node.id, NodeState.COMPLETED)
        builder.log(f"✓ {node.label} completed in {elapsed}ms")

    builder.log(
        f"🏁 Execution completed: {builder.count(NodeState.COMPLETED)}/{len(nodes)} "
        f"nodes in {builder.elapsed_ms()}ms"
    )
    return builder.build()


def _error_message(error: Exception) -> str:
    # KeyError wraps its message in quotes
    if isinstance(error, KeyError) and error.args:
        return str(error.args[0])
    return str(error) or type(error).__name__

"""Shared test fixtures for Matrix IDE backend tests."""
import sys
from pathlib import Path

import pytest

# Ensure the matrix_ide package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from matrix_ide.engine.graph import Connection, Node, NodeData
from matrix_ide.engine.options import ExecutionOptions


@pytest.fixture(scope="session", autouse=True)
def register_nodes():
    """Discover and register all node handlers once per test session."""
    from matrix_ide.nodes.registry import NodeRegistry
    NodeRegistry.discover("matrix_ide.nodes")


def make_node(node_id, node_type, label, inputs=(), outputs=(), **kwargs) -> Node:
    return Node(
        id=node_id,
        type=node_type,
        data=NodeData(label=label, inputs=list(inputs), outputs=list(outputs),
                      code=kwargs.pop("code", None), config=kwargs.pop("config", None)),
        **kwargs,
    )


def connect(conn_id, source, source_output, target, target_input) -> Connection:
    return Connection(
        id=conn_id, source=source, source_output=source_output,
        target=target, target_input=target_input,
    )


@pytest.fixture
def instant_options():
    """No cosmetic delays and a fixed seed."""
    return ExecutionOptions.instant(seed=7)


@pytest.fixture
def chain_graph():
    """Input -> Process Text -> Console Output."""
    nodes = [
        make_node("in", "input", "User Input", outputs=["value"]),
        make_node("fn", "function", "Process Text", inputs=["input"], outputs=["result"]),
        make_node("out", "output", "Console Output", inputs=["data"]),
    ]
    connections = [
        connect("c1", "in", "value", "fn", "input"),
        connect("c2", "fn", "result", "out", "data"),
    ]
    return nodes, connections

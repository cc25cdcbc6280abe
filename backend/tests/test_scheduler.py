"""Tests for topological scheduling."""
from conftest import connect, make_node
from matrix_ide.engine.scheduler import topological_order


def _nodes(*ids):
    return [make_node(i, "variable", i.upper(), inputs=["in"], outputs=["out"]) for i in ids]


class TestTopologicalOrder:
    def test_empty_graph(self):
        result = topological_order([], [])
        assert result.order == []
        assert not result.has_cycle

    def test_simple_chain(self, chain_graph):
        nodes, connections = chain_graph
        assert topological_order(nodes, connections).node_ids == ["in", "fn", "out"]

    def test_chain_declared_backwards(self):
        nodes = _nodes("c", "b", "a")
        connections = [
            connect("e1", "a", "out", "b", "in"),
            connect("e2", "b", "out", "c", "in"),
        ]
        assert topological_order(nodes, connections).node_ids == ["a", "b", "c"]

    def test_ties_follow_input_order(self):
        nodes = _nodes("z", "m", "a")
        assert topological_order(nodes, []).node_ids == ["z", "m", "a"]

    def test_diamond_graph(self):
        """A -> B, A -> C, B -> D, C -> D"""
        nodes = _nodes("a", "b", "c", "d")
        connections = [
            connect("e1", "a", "out", "b", "in"),
            connect("e2", "a", "out", "c", "in"),
            connect("e3", "b", "out", "d", "in"),
            connect("e4", "c", "out", "d", "in"),
        ]
        assert topological_order(nodes, connections).node_ids == ["a", "b", "c", "d"]

    def test_successors_follow_connection_order(self):
        nodes = _nodes("a", "b", "c")
        connections = [
            connect("e1", "a", "out", "c", "in"),
            connect("e2", "a", "out", "b", "in"),
        ]
        assert topological_order(nodes, connections).node_ids == ["a", "c", "b"]

    def test_parallel_connections_count_separately(self):
        nodes = _nodes("a", "b")
        connections = [
            connect("e1", "a", "out", "b", "in"),
            connect("e2", "a", "out", "b", "in"),
        ]
        result = topological_order(nodes, connections)
        assert result.node_ids == ["a", "b"]
        assert not result.has_cycle

    def test_dangling_connections_ignored(self):
        nodes = _nodes("a", "b")
        connections = [
            connect("e1", "ghost", "out", "b", "in"),
            connect("e2", "a", "out", "missing", "in"),
        ]
        result = topological_order(nodes, connections)
        assert result.node_ids == ["a", "b"]
        assert not result.has_cycle


class TestCycles:
    def test_two_node_cycle_does_not_raise(self):
        nodes = _nodes("a", "b")
        connections = [
            connect("e1", "a", "out", "b", "in"),
            connect("e2", "b", "out", "a", "in"),
        ]
        result = topological_order(nodes, connections)
        assert result.has_cycle
        assert result.order == []
        assert result.unscheduled == ["a", "b"]

    def test_partial_order_before_cycle(self):
        nodes = _nodes("start", "x", "y", "free")
        connections = [
            connect("e1", "start", "out", "x", "in"),
            connect("e2", "x", "out", "y", "in"),
            connect("e3", "y", "out", "x", "in"),
        ]
        result = topological_order(nodes, connections)
        assert result.has_cycle
        assert result.node_ids == ["start", "free"]
        assert set(result.unscheduled) == {"x", "y"}

    def test_self_loop(self):
        nodes = _nodes("a")
        result = topological_order(nodes, [connect("e1", "a", "out", "a", "in")])
        assert result.has_cycle
        assert result.unscheduled == ["a"]

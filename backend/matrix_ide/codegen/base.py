"""Base class for per-language code generators."""
import json
import math
from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..engine.behaviors import NodeType
from ..engine.graph import Connection, Node
from ..engine.scheduler import topological_order
from .naming import assign_helper_names, assign_names


def quote(text: str) -> str:
    """Double-quoted string literal valid in Python, JavaScript and C++."""
    return json.dumps(text, ensure_ascii=False)


def one_line(text: str) -> str:
    return " ".join((text or "").split())


class CodeGenerator(ABC):
    """Walks the scheduled graph and emits one block per node.

    Subclasses provide the surrounding boilerplate and one ``emit_<type>``
    method per node type. Node types without an emitter contribute nothing.
    """

    LANGUAGE: str = ""
    ALIASES: tuple[str, ...] = ()
    BODY_INDENT: str = "    "
    NULL: str = "None"

    def generate(self, nodes: Sequence[Node], connections: Sequence[Connection]) -> str:
        schedule = topological_order(nodes, connections)
        taken: set[str] = set()
        names = assign_names(schedule.order, taken)
        suffixes: dict[str, str] = {}
        for node in schedule.order:
            suffix = self.helper_suffix(node)
            if suffix:
                suffixes[node.id] = suffix
        self.helper_names = assign_helper_names(schedule.order, suffixes, taken)

        body: list[str] = []
        defined: dict[str, str] = {}
        for node in schedule.order:
            emitter = self._emitter_for(node)
            if emitter is None:
                continue
            args = self.input_variables(node, connections, defined)
            block = emitter(node, args, names[node.id])
            defined[node.id] = names[node.id]
            body.extend(self.BODY_INDENT + line if line else "" for line in block)
            body.append("")

        lines = [*self.header(), *self.main_open(), *body, *self.main_close(), *self.footer()]
        return "\n".join(lines)

    def helper_suffix(self, node: Node) -> str | None:
        """Suffix of a second variable the node's block declares, if any."""
        return None

    def number(self, value: Any, default: float) -> str:
        """Numeric literal shared by all three languages."""
        try:
            num = float(value)
        except (TypeError, ValueError):
            num = float(default)
        if not math.isfinite(num):
            num = float(default)
        return str(int(num)) if num.is_integer() else repr(num)

    def thresholds(self, node: Node) -> str:
        """Arguments for the generated routing helper, from the logic config."""
        number = self.number(getattr(node.config, "number_threshold", 50), 50)
        length = self.number(getattr(node.config, "length_threshold", 5), 5)
        return f"{number}, {length}"

    def input_variables(
        self, node: Node, connections: Sequence[Connection], names: dict[str, str],
    ) -> list[str]:
        """Variables feeding ``node``, in connection order, without repeats.

        Sources that emitted nothing are left out.
        """
        args: list[str] = []
        for conn in connections:
            if conn.target != node.id or conn.source not in names:
                continue
            var = names[conn.source]
            if var not in args:
                args.append(var)
        return args

    def first_arg(self, args: list[str]) -> str:
        return args[0] if args else self.NULL

    def _emitter_for(self, node: Node):
        if not isinstance(node.type, NodeType):
            return None
        return getattr(self, f"emit_{node.type.value}", None)

    @abstractmethod
    def header(self) -> list[str]:
        ...

    @abstractmethod
    def main_open(self) -> list[str]:
        ...

    @abstractmethod
    def main_close(self) -> list[str]:
        ...

    @abstractmethod
    def footer(self) -> list[str]:
        ...

    @abstractmethod
    def literal(self, value: Any) -> str:
        """Render a configured variable value as a source literal."""

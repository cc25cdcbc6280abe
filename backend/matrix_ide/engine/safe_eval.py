"""Restricted evaluation of custom function-node code.

Only one statement form is understood::

    return <operand> (+ <operand>)*

where an operand is a quoted string literal or the name of one of the
node's resolved inputs. The result is the concatenation of the operands as
strings. Anything else is rejected with UnsafeExpressionError.
"""
import re
from dataclasses import dataclass
from typing import Any, Mapping

FORBIDDEN_WORDS = ("eval", "Function", "exec", "import")

_RETURN_RE = re.compile(r"\breturn\b[ \t]*(?P<expr>[^\n]*)")

TOKEN_RE = re.compile(
    r"""
    (?P<STRING>"(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*')
  | (?P<PLUS>\+)
  | (?P<ID>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<SKIP>[ \t]+)
  | (?P<MISMATCH>.)
    """,
    re.VERBOSE,
)

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}


class UnsafeExpressionError(ValueError):
    pass


@dataclass
class Token:
    kind: str
    value: str
    pos: int


def tokenize(expr: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(expr):
        m = TOKEN_RE.match(expr, pos)
        kind = m.lastgroup or "MISMATCH"
        value = m.group(0)
        if kind == "MISMATCH":
            raise UnsafeExpressionError(f"Unexpected character {value!r} at {pos}")
        if kind != "SKIP":
            tokens.append(Token(kind, value, pos))
        pos = m.end()
    return tokens


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def extract_return_expression(code: str) -> str:
    for word in FORBIDDEN_WORDS:
        if word in code:
            raise UnsafeExpressionError(f"Forbidden word in code: {word}")
    m = _RETURN_RE.search(code)
    if not m:
        raise UnsafeExpressionError("No return statement")
    expr = m.group("expr").strip()
    if expr.endswith(";"):
        expr = expr[:-1].rstrip()
    if not expr:
        raise UnsafeExpressionError("Empty return expression")
    return expr


def evaluate_return(code: str, inputs: Mapping[str, Any]) -> str:
    """Evaluate the first ``return`` statement of ``code`` against ``inputs``."""
    tokens = tokenize(extract_return_expression(code))

    parts: list[str] = []
    expect_operand = True
    for tok in tokens:
        if expect_operand:
            if tok.kind == "STRING":
                parts.append(_unquote(tok.value))
            elif tok.kind == "ID" and tok.value in inputs:
                parts.append(str(inputs[tok.value]))
            elif tok.kind == "ID":
                raise UnsafeExpressionError(f"Unknown name '{tok.value}'")
            else:
                raise UnsafeExpressionError(f"Expected operand at {tok.pos}")
        elif tok.kind != "PLUS":
            raise UnsafeExpressionError(f"Expected '+' at {tok.pos}")
        expect_operand = not expect_operand

    if expect_operand:
        raise UnsafeExpressionError("Expression ends with '+'")
    return "".join(parts)

"""Tests for the restricted return-expression evaluator."""
import pytest

from matrix_ide.engine.safe_eval import (
    UnsafeExpressionError, evaluate_return, extract_return_expression, tokenize,
)


class TestEvaluateReturn:
    def test_string_literal(self):
        assert evaluate_return('return "hello"', {}) == "hello"

    def test_concatenates_literals_and_inputs(self):
        code = 'def f(a, b):\n    return a + " and " + b;\n'
        assert evaluate_return(code, {"a": "left", "b": 2}) == "left and 2"

    def test_single_quotes_and_escapes(self):
        assert evaluate_return("return 'it\\'s' + \"\\n\"", {}) == "it's\n"

    def test_first_return_wins(self):
        code = 'return "one"\nreturn "two"'
        assert evaluate_return(code, {}) == "one"

    @pytest.mark.parametrize("code", [
        'return eval("1")',
        "import os\nreturn 'x'",
        "return exec",
        "return new Function('x')",
    ])
    def test_forbidden_words(self, code):
        with pytest.raises(UnsafeExpressionError, match="Forbidden"):
            evaluate_return(code, {"x": 1})

    def test_unknown_name(self):
        with pytest.raises(UnsafeExpressionError, match="Unknown name 'missing'"):
            evaluate_return("return missing", {"a": 1})

    @pytest.mark.parametrize("code", [
        "return a +",
        "return a b",
        "return + a",
        "return a * 2",
        "return a.upper()",
    ])
    def test_rejects_other_expressions(self, code):
        with pytest.raises(UnsafeExpressionError):
            evaluate_return(code, {"a": "x"})

    def test_missing_return(self):
        with pytest.raises(UnsafeExpressionError, match="No return"):
            evaluate_return("x = 1", {})

    def test_empty_return(self):
        with pytest.raises(UnsafeExpressionError, match="Empty"):
            extract_return_expression("return ;")

    def test_is_a_value_error(self):
        assert issubclass(UnsafeExpressionError, ValueError)


class TestTokenize:
    def test_kinds(self):
        kinds = [t.kind for t in tokenize('a + "b"')]
        assert kinds == ["ID", "PLUS", "STRING"]

"""Tests for the per-type node handlers and the registry."""
import asyncio

import pytest

from conftest import make_node
from matrix_ide.engine.behaviors import BehaviorKind, ai_prefix
from matrix_ide.engine.configs import ApiConfig, FunctionConfig, LogicConfig, OutputConfig, VariableConfig
from matrix_ide.engine.executor import execute_node
from matrix_ide.engine.options import ExecutionOptions
from matrix_ide.nodes.base import RunContext
from matrix_ide.nodes.functions import validation_confidence
from matrix_ide.nodes.inputs import MOCK_INPUTS
from matrix_ide.nodes.logic import classify
from matrix_ide.nodes.outputs import render_template
from matrix_ide.nodes.registry import NodeRegistry


def run_node(node, inputs=None):
    log: list[str] = []
    run = RunContext(options=ExecutionOptions.instant(seed=1), log=log.append)
    result = asyncio.run(execute_node(node, inputs or {}, run))
    return result, log


class TestRegistry:
    def test_all_types_registered(self):
        for node_type in ("input", "output", "function", "variable", "api", "logic"):
            assert NodeRegistry.has(node_type)

    def test_unknown_type(self):
        with pytest.raises(KeyError, match="Unknown node type: teleport"):
            NodeRegistry.get("teleport")

    def test_definitions(self):
        defs = NodeRegistry.all_definitions()
        assert defs["function"].category == "Processing"
        assert "ai_enhance" in defs["function"].behaviors
        assert defs["input"].default_outputs == ["value"]


class TestInputNode:
    def test_returns_mock_value(self):
        value, log = run_node(make_node("n", "input", "User Input", outputs=["value"]))
        assert value in MOCK_INPUTS
        assert log == [f'📥 Input: "{value}"']

    def test_file_input_logs_path(self):
        node = make_node("n", "input", "Source", outputs=["content"], behavior=BehaviorKind.FILE_INPUT)
        value, log = run_node(node)
        assert log == [f'📄 File input (input.txt): "{value}"']


class TestFunctionNode:
    def test_text_process(self):
        node = make_node("n", "function", "Process Text", inputs=["input"])
        result, _ = run_node(node, {"input": "  Hello WORLD  "})
        assert result == "hello world"

    @pytest.mark.parametrize("upstream", [None, 0, False, ""])
    def test_falsy_input_becomes_empty_string(self, upstream):
        node = make_node("n", "function", "Process Text", inputs=["input"])
        result, log = run_node(node, {"input": upstream})
        assert result == ""
        assert log == ['🔄 Processed: "" → ""']

    def test_ai_enhance_with_model(self):
        node = make_node("n", "function", "AI", inputs=["input"], config=FunctionConfig(model="local-gpt"))
        result, log = run_node(node, {"input": "data"})
        assert result == "AI_ENHANCED_LOCAL_GPT: data"
        assert log[0].startswith("🤖 AI Enhanced")

    def test_ai_enhance_without_model(self):
        node = make_node("n", "function", "Enhance", inputs=["input"])
        result, _ = run_node(node, {"input": "data"})
        assert result == "AI_ENHANCED: data"

    def test_validate(self):
        node = make_node("n", "function", "Validate", inputs=["input"])
        result, _ = run_node(node, {"input": "abc"})
        assert result == {"is_valid": True, "data": "abc", "confidence": 0.53}

    def test_validate_empty(self):
        node = make_node("n", "function", "Validate", inputs=["input"])
        result, log = run_node(node, {"input": ""})
        assert result["is_valid"] is False
        assert result["confidence"] == 0.0
        assert log == ['✅ Validation: "" is invalid']

    def test_custom_code_falls_back_to_input(self):
        node = make_node("n", "function", "Custom", inputs=["x"], code="return eval(x)")
        result, log = run_node(node, {"x": "raw"})
        assert result == "raw"
        assert log[0].startswith("⚠️ Custom code execution failed")

    def test_pass_through_wraps_value(self):
        node = make_node("n", "function", "Wrapper", inputs=["input"])
        result, _ = run_node(node, {"input": 5})
        assert result["value"] == 5
        assert result["node_id"] == "n"
        assert result["node_type"] == "function"
        assert "timestamp" in result

    def test_behavior_tag_overrides_label(self):
        node = make_node("n", "function", "Process Text", inputs=["input"], behavior=BehaviorKind.DEFAULT)
        result, _ = run_node(node, {"input": "ABC"})
        assert result["value"] == "ABC"


class TestOtherNodes:
    def test_api_mock_response(self):
        node = make_node("n", "api", "Fetch", inputs=["request"], config=ApiConfig(method="post"))
        result, log = run_node(node, {"request": "payload"})
        assert result["status"] == 200
        assert result["processed"] is True
        assert result["input"] == "payload"
        assert log[0] == "🌐 API Call: POST https://api.example.com/data"

    def test_logic_uses_config_thresholds(self):
        node = make_node("n", "logic", "Route", inputs=["value"], config=LogicConfig(number_threshold=10))
        result, _ = run_node(node, {"value": 11})
        assert result == "high"

    def test_output_renders_template(self):
        node = make_node("n", "output", "Out", inputs=["data"], config=OutputConfig(template="Got {result}!"))
        result, log = run_node(node, {"data": "x"})
        assert result == "Got x!"
        assert log == ["📤 Output: Got x!"]

    def test_file_output_log(self):
        node = make_node("n", "output", "Save To File", inputs=["data"])
        _, log = run_node(node, {"data": "x"})
        assert log == ["📤 Output (output.txt): Result: x"]

    def test_variable_prefers_config(self):
        node = make_node("n", "variable", "Const", inputs=["value"], config=VariableConfig(value=3))
        assert run_node(node, {"value": 9})[0] == 3

    def test_variable_falls_back_to_input(self):
        node = make_node("n", "variable", "Const", inputs=["value"])
        assert run_node(node, {"value": 9})[0] == 9


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [
        (51, "high"), (50, "low"), (3.5, "low"),
        ("abcdef", "long"), ("abcde", "short"),
        (True, "truthy"), (None, "falsy"), ([], "falsy"), ({"a": 1}, "truthy"),
    ])
    def test_classify(self, value, expected):
        assert classify(value) == expected

    def test_render_template_ports(self):
        assert render_template("{a}-{b} / {result}", {"a": 1, "b": "two"}) == "1-two / 1"

    def test_validation_confidence_capped(self):
        assert validation_confidence("x" * 200) == 0.99

    def test_ai_prefix(self):
        assert ai_prefix("gpt-4o mini") == "AI_ENHANCED_GPT_4O_MINI"
        assert ai_prefix(None) == "AI_ENHANCED"

"""Tests for the node template palette."""
import pytest

from matrix_ide.engine.behaviors import BehaviorKind, NodeType
from matrix_ide.engine.configs import ApiConfig, FunctionConfig
from matrix_ide.engine.graph import Position
from matrix_ide.nodes.registry import NodeRegistry
from matrix_ide.nodes.templates import TEMPLATES, create_node_from_template, get_template, list_templates


class TestPalette:
    def test_ids_unique(self):
        ids = [t.id for t in TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_every_template_has_a_handler(self):
        for template in TEMPLATES:
            assert NodeRegistry.has(template.type)

    def test_filter_by_category(self):
        assert [t.id for t in list_templates("api")] == ["rest-api-get", "webhook-sender"]

    def test_unknown_template(self):
        with pytest.raises(KeyError):
            get_template("nope")


class TestCreateNode:
    def test_behavior_is_explicit(self):
        node = create_node_from_template("data-cleaner", "n1")
        assert node.behavior == BehaviorKind.TEXT_PROCESS
        assert node.type is NodeType.FUNCTION
        assert node.data.inputs == ["data"]
        assert node.data.outputs == ["cleaned_data"]
        assert isinstance(node.config, FunctionConfig)
        assert node.config.function_name == "clean_data"

    def test_behavior_independent_of_label(self):
        node = create_node_from_template("file-writer", "n1")
        node.data.label = "Sink"
        assert node.resolved_behavior() == BehaviorKind.FILE_OUTPUT

    def test_ai_template_model(self):
        node = create_node_from_template("ai-text-processor", "n1")
        assert node.config.model == "local-gpt"
        assert node.config.extra == {"maxLength": 500}

    def test_webhook_keeps_default_url(self):
        node = create_node_from_template("webhook-sender", "n1", Position(x=5, y=6))
        assert isinstance(node.config, ApiConfig)
        assert node.config.method == "POST"
        assert node.config.url == "https://api.example.com/data"
        assert node.position == Position(x=5, y=6)

    def test_nodes_do_not_share_state(self):
        first = create_node_from_template("text-input", "a")
        second = create_node_from_template("text-input", "b")
        first.data.outputs.append("extra")
        assert second.data.outputs == ["text"]

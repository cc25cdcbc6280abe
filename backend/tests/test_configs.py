"""Tests for typed node configuration and its dict conversion."""
from matrix_ide.engine.configs import (
    ApiConfig, FunctionConfig, GenericConfig, InputConfig, OutputConfig,
    config_from_dict, config_to_dict, default_config,
)


class TestConfigFromDict:
    def test_camel_case_keys(self):
        config = config_from_dict("function", {"functionName": "clean", "returnType": "str"})
        assert isinstance(config, FunctionConfig)
        assert config.function_name == "clean"
        assert config.return_type == "str"

    def test_unknown_keys_kept_in_extra(self):
        config = config_from_dict("input", {"prompt": "Name?", "encoding": "utf-8"})
        assert isinstance(config, InputConfig)
        assert config.prompt == "Name?"
        assert config.extra == {"encoding": "utf-8"}

    def test_empty_legacy_value_keeps_default(self):
        config = config_from_dict("api", {"webhook_url": "", "method": "POST"})
        assert isinstance(config, ApiConfig)
        assert config.url == "https://api.example.com/data"
        assert config.method == "POST"

    def test_unknown_type_gives_generic(self):
        config = config_from_dict("teleport", {"speed": 9})
        assert isinstance(config, GenericConfig)
        assert config.extra == {"speed": 9}

    def test_none_input(self):
        assert config_from_dict("output", None) == OutputConfig()


class TestConfigToDict:
    def test_round_trip_with_extra(self):
        config = config_from_dict("output", {"outputType": "file", "backup": True})
        data = config_to_dict(config)
        assert data["output_type"] == "file"
        assert data["backup"] is True
        assert data["template"] == "Result: {result}"
        assert config_from_dict("output", data) == config

    def test_defaults(self):
        assert default_config("logic").number_threshold == 50
        assert default_config("api").timeout_ms == 5000

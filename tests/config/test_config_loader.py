"""Tests for configuration loading."""

from pathlib import Path

import pytest

from cqrsgen.config.errors import ConfigLoadError, ConfigValidationError
from cqrsgen.config.loader import (
    find_config_file,
    load_config,
    load_yaml,
    parse_config_from_string,
)
from cqrsgen.config.models import Conventions, GeneratorConfig


class TestParseConfigFromString:
    def test_full_config(self):
        config = parse_config_from_string(
            """
lifecycle: src/app/lifecycle.py
models:
  - src/app/domain/todo_list.py
output: src/app/api.py
conventions:
  handle_marker: Guard
  effect: {decorator: effect_type}
  operation_prefixes: [do]
runtime:
  result_module: returns.result
"""
        )

        assert config.lifecycle == "src/app/lifecycle.py"
        assert config.models == ["src/app/domain/todo_list.py"]
        assert config.conventions.handle_marker == "Guard"
        assert config.conventions.effect.decorator == "effect_type"
        assert config.conventions.error.keyword == "Error"
        assert config.conventions.operation_prefixes == ["do"]
        assert config.runtime.result_module == "returns.result"

    def test_empty_document_gives_defaults(self):
        config = parse_config_from_string("")

        assert config == GeneratorConfig()
        assert config.conventions.domain_model_marker == "CqrsModel"
        assert config.conventions.source_roots == ["src", "tests"]

    def test_single_model_shorthand(self):
        config = parse_config_from_string("models: src/app/m.py\n")

        assert config.models == ["src/app/m.py"]

    def test_selector_shorthand(self):
        config = parse_config_from_string("conventions:\n  effect: Event\n")

        assert config.conventions.effect.keyword == "Event"

    def test_selector_needs_exactly_one_rule(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_config_from_string(
                "conventions:\n  effect: {keyword: Effect, decorator: effect_type}\n"
            )

        assert exc_info.value.errors[0]["loc"].startswith("conventions.effect")

    def test_source_roots_must_not_be_empty(self):
        with pytest.raises(ConfigValidationError):
            parse_config_from_string("conventions:\n  source_roots: []\n")

    def test_invalid_yaml(self):
        with pytest.raises(ConfigLoadError):
            parse_config_from_string("models: [unclosed\n")

    def test_non_mapping_root(self):
        with pytest.raises(ConfigLoadError) as exc_info:
            parse_config_from_string("- a\n- b\n")

        assert "got list" in str(exc_info.value)


class TestLoadConfig:
    def test_sets_base_dir(self, tmp_path):
        path = tmp_path / "cqrsgen.yaml"
        path.write_text("models: [src/app/m.py]\n")

        config = load_config(path)

        assert Path(config.base_dir) == tmp_path.resolve()
        assert "base_dir" not in config.model_dump()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            load_yaml(tmp_path / "missing.yaml")

        assert "File not found" in str(exc_info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            load_yaml(tmp_path)

        assert "Not a file" in str(exc_info.value)


class TestFindConfigFile:
    def test_walks_upward(self, tmp_path):
        (tmp_path / "cqrsgen.yaml").write_text("")
        nested = tmp_path / "src" / "app"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / "cqrsgen.yaml").resolve()

    def test_not_found(self, tmp_path):
        assert find_config_file(tmp_path) is None


def test_conventions_describe_selectors():
    conventions = Conventions(error={"decorator": "error_type"})

    assert conventions.effect.describe() == "name containing 'Effect'"
    assert conventions.error.describe() == "decorator '@error_type'"

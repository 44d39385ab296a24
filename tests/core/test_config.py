# tests/core/test_config.py
import json

import pytest

from a11y_auditor.config import AnalysisConfig, ConfigurationError, load_config


def test_defaults():
    config = AnalysisConfig()
    assert config.component_map == {}
    assert config.polymorphic_prop_names == ("as", "component")
    assert config.max_skip == 1
    assert config.allow_same_level is True
    assert config.disabled_rules == ()


def test_camel_case_and_snake_case_keys():
    camel = AnalysisConfig(componentMap={"Link": "A"}, maxSkip=2, polymorphicPropNames="tag")
    snake = AnalysisConfig(component_map={"Link": "a"}, max_skip=2, polymorphic_prop_names=["tag", "tag"])
    assert camel == snake
    assert camel.component_map == {"Link": "a"}
    assert camel.polymorphic_prop_names == ("tag",)


def test_config_is_immutable():
    config = AnalysisConfig()
    with pytest.raises(Exception):
        config.max_skip = 5


@pytest.mark.parametrize("max_skip", [0, -1])
def test_invalid_max_skip_is_rejected(max_skip):
    with pytest.raises(ConfigurationError):
        AnalysisConfig.from_settings({"maxSkip": max_skip})


def test_empty_mapped_tag_is_rejected():
    with pytest.raises(ConfigurationError):
        AnalysisConfig.from_settings({"componentMap": {"Button": " "}})


def test_settings_sections():
    assert AnalysisConfig.from_settings({"a11y": {"maxSkip": 3}}).max_skip == 3
    legacy = AnalysisConfig.from_settings({"test-a11y-js": {"components": {"Button": "button"}}})
    assert legacy.component_map == {"Button": "button"}
    assert AnalysisConfig.from_settings({"unrelated": True, "maxSkip": 2}).max_skip == 2


def test_load_config_from_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"a11y": {"allowSameLevel": False, "disabledRules": ["form-label"]}}))
    config = load_config(path)
    assert config.allow_same_level is False
    assert config.disabled_rules == ("form-label",)


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "absent.json") == AnalysisConfig()


def test_load_config_sources():
    assert load_config() == AnalysisConfig()
    assert load_config({"maxSkip": 2}).max_skip == 2


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_config_rejects_bad_files(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_config(path)

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Sections of a settings file that may hold the analysis options
SETTINGS_SECTIONS = ("a11y", "test-a11y-js")


class ConfigurationError(ValueError):
    """Raised once, at load time, when analysis settings are malformed."""


class AnalysisConfig(BaseModel):
    """
    Caller-supplied options, immutable for the duration of a run.

    Accepts both the camelCase keys used in lint settings files
    (``componentMap``, ``maxSkip``) and the snake_case attribute names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    component_map: Dict[str, str] = Field(default_factory=dict, alias="componentMap")
    polymorphic_prop_names: Tuple[str, ...] = Field(default=("as", "component"), alias="polymorphicPropNames")
    max_skip: int = Field(default=1, ge=1, alias="maxSkip")
    allow_same_level: bool = Field(default=True, alias="allowSameLevel")
    disabled_rules: Tuple[str, ...] = Field(default=(), alias="disabledRules")

    @field_validator('component_map')
    @classmethod
    def normalize_component_map(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Mapped tags are stored lowercase; keys (component names) are matched verbatim."""
        normalized = {}
        for component, tag in v.items():
            if not component or not tag or not tag.strip():
                raise ValueError(f"componentMap entry {component!r} -> {tag!r} must name a tag")
            normalized[component] = tag.strip().lower()
        return normalized

    @field_validator('polymorphic_prop_names', 'disabled_rules', mode='before')
    @classmethod
    def coerce_names(cls, v: Any) -> Any:
        """Accept a single string where a list is expected; drop duplicates but keep order."""
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]] = None) -> "AnalysisConfig":
        """
        Builds a config from a settings dictionary.

        Looks for an ``a11y`` (or legacy ``test-a11y-js``) section first and
        falls back to the top level. The legacy ``components`` key is accepted
        as an alias for ``componentMap``.
        """
        settings = settings or {}
        section = settings
        for key in SETTINGS_SECTIONS:
            if isinstance(settings.get(key), dict):
                section = settings[key]
                break

        section = dict(section)
        if "components" in section and "componentMap" not in section:
            section["componentMap"] = section.pop("components")

        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid analysis settings: {e}") from e


def load_config(source: Union[str, Path, Dict[str, Any], None] = None) -> AnalysisConfig:
    """
    Loads and validates analysis settings.

    Args:
        source: A path to a JSON settings file, an already-parsed settings
                dict, or None for defaults.

    Raises:
        ConfigurationError: If the file cannot be parsed or a value is invalid.
    """
    if source is None:
        return AnalysisConfig()

    if isinstance(source, dict):
        return AnalysisConfig.from_settings(source)

    config_path = Path(source)
    if not config_path.exists():
        logger.warning("Settings file not found at %s. Using default analysis config.", config_path)
        return AnalysisConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Settings file {config_path} is not valid JSON: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Settings file {config_path} must contain a JSON object")

    config = AnalysisConfig.from_settings(settings)
    logger.info("Analysis configuration loaded from %s.", config_path)
    return config

"""User configuration file schema (JSON or YAML)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from compendex.domain.model import ReprintBehavior

from .errors import ConfigurationError

log = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _as_list(value: object) -> object:
    if isinstance(value, str):
        return [value]
    if value is None:
        return []
    return value


class UserConfigModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SourcesConfig(UserConfigModel):
    tools_root: str | None = Field(default=None, validation_alias=AliasChoices("toolsRoot"))
    reference: list[str] = Field(default_factory=list)
    book: list[str] = Field(default_factory=list)
    adventure: list[str] = Field(default_factory=list)
    homebrew: list[str] = Field(default_factory=list)
    default_source: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("defaultSource")
    )

    @field_validator("reference", "book", "adventure", "homebrew", mode="before")
    @classmethod
    def _wrap_single(cls, value: object) -> object:
        return _as_list(value)


class VaultPathsConfig(UserConfigModel):
    """``rules`` and ``compendium`` roots; any other key is a per-type root."""

    rules: str | None = None
    compendium: str | None = None
    types: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_type_paths(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        known = {"rules", "compendium", "types"}
        types = dict(data.get("types") or {})
        for name, value in data.items():
            if name not in known and isinstance(value, str):
                types[name] = value
        return {
            "rules": data.get("rules"),
            "compendium": data.get("compendium"),
            "types": types,
        }


class UserConfig(UserConfigModel):
    sources: SourcesConfig = Field(
        default_factory=SourcesConfig,
        validation_alias=AliasChoices("sources", "convert", "full-source", "fullSource"),
    )
    from_: list[str] = Field(default_factory=list, validation_alias=AliasChoices("from"))
    paths: VaultPathsConfig = Field(default_factory=VaultPathsConfig)
    include: list[str] = Field(default_factory=list)
    include_group: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("includeGroup", "includeGroups")
    )
    exclude: list[str] = Field(default_factory=list)
    exclude_pattern: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("excludePattern")
    )
    reprint_behavior: ReprintBehavior = Field(
        default=ReprintBehavior.NEWEST, validation_alias=AliasChoices("reprintBehavior")
    )
    tag_prefix: str = Field(default="", validation_alias=AliasChoices("tagPrefix"))
    source_id_alias: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("sourceIdAlias")
    )

    @field_validator(
        "from_", "include", "include_group", "exclude", "exclude_pattern", mode="before"
    )
    @classmethod
    def _wrap_single(cls, value: object) -> object:
        return _as_list(value)

    @field_validator("reprint_behavior", mode="before")
    @classmethod
    def _lower_behavior(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def references(self) -> list[str]:
        """Reference sources, including the deprecated top-level ``from`` list."""

        if self.from_:
            log.warning("The 'from' configuration key is deprecated; use 'sources.reference'")
        return [*self.sources.reference, *self.from_]


def _parse(path: Path, text: str) -> object:
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def load_user_config(path: Path | str) -> UserConfig:
    """Read and validate a user configuration file; raises :class:`ConfigurationError`."""

    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file {config_path}: {exc}") from exc

    try:
        payload = _parse(config_path, text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error parsing configuration file {config_path}: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

    try:
        return UserConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration file {config_path}: {exc}") from exc

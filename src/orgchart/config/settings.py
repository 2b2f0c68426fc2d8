"""Configuration management built on top of the policy primitives."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal, Mapping

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policies import Policies, load_policies

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
SETTINGS_ENV_PREFIX = "ORGCHART_SETTINGS__"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``override``; nested mappings merge key by key."""

    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def _read_config_layer(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"configuration file '{path}' must contain a mapping")
    return document


def _env_layer(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect ``ORGCHART_SETTINGS__A__B=value`` variables as ``{"a": {"b": value}}``.

    Values are JSON-decoded when possible, so ``false`` and ``3`` arrive typed.
    """

    layer: Dict[str, Any] = {}
    for name in sorted(environ):
        if not name.startswith(SETTINGS_ENV_PREFIX):
            continue
        *parents, leaf = name[len(SETTINGS_ENV_PREFIX) :].lower().split("__")
        try:
            value = json.loads(environ[name])
        except json.JSONDecodeError:
            value = environ[name]
        nested: Dict[str, Any] = {leaf: value}
        for parent in reversed(parents):
            nested = {parent: nested}
        layer = deep_merge(layer, nested)
    return layer


def _resolve_project_path(value: Path | str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


class PathsConfig(BaseModel):
    """Directories for the employee tree, exports and log files.

    Relative entries are anchored at the project root.
    """

    data_dir: Path = Field(default=Path("data"))
    output_dir: Path = Field(default=Path("output"))
    logs_dir: Path = Field(default=Path("logs"))

    def resolved(self, name: Literal["data_dir", "output_dir", "logs_dir"]) -> Path:
        return _resolve_project_path(getattr(self, name))

    def ensure_exists(self) -> None:
        for name in ("data_dir", "output_dir", "logs_dir"):
            self.resolved(name).mkdir(parents=True, exist_ok=True)


class Settings(BaseSettings):
    """Primary configuration object for the hierarchy viewer.

    Precedence (highest first): explicit kwargs or CLI arguments, environment
    variables prefixed with ``ORGCHART_`` (handled by :class:`BaseSettings`),
    nested overrides via ``ORGCHART_SETTINGS__`` variables, environment-specific
    YAML (e.g. ``production.yaml``), the default YAML file, and finally the
    class defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORGCHART_",
        validate_assignment=True,
        extra="allow",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    create_dirs: bool = Field(
        default=True,
        description="Create the directories declared in `paths` during initialisation.",
    )
    employee_tree: Path = Field(
        default=Path("employee-structure.json"),
        description="JSON or YAML employee tree; relative paths live under `paths.data_dir`.",
    )
    policies: Policies

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("ORGCHART_ENV", "development")

        combined: Dict[str, Any] = {}
        for layer in (
            _read_config_layer(config_dir / "default.yaml"),
            _read_config_layer(config_dir / f"{environment}.yaml"),
            _env_layer(os.environ),
            {key: value for key, value in values.items() if value is not None},
        ):
            combined = deep_merge(combined, layer)

        policies = combined.get("policies")
        if not isinstance(policies, Policies):
            combined["policies"] = load_policies(policies or {})
        return combined

    @model_validator(mode="after")
    def _ensure_paths(self) -> "Settings":
        if self.create_dirs:
            self.paths.ensure_exists()
        return self

    @property
    def policy_version(self) -> str:
        return self.policies.policy_version

    @property
    def employee_tree_file(self) -> Path:
        if self.employee_tree.is_absolute():
            return self.employee_tree
        return self.paths.resolved("data_dir") / self.employee_tree

    @property
    def log_file(self) -> Path:
        return self.paths.resolved("logs_dir") / "orgchart.log"

    def output_file(self, target: Path | str) -> Path:
        """Place a relative export ``target`` under ``paths.output_dir``."""

        path = Path(target).expanduser()
        if path.is_absolute():
            return path
        return self.paths.resolved("output_dir") / path


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "PathsConfig", "PROJECT_ROOT", "deep_merge"]

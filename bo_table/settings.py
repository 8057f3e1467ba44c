"""Engine settings: defaults, optional YAML file, environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bo_common.config import parse_int_env, parse_int_list_env
from bo_common.errors import ConfigurationError

_ENV_INT_FIELDS = {
    "BO_SEARCH_DEBOUNCE_MS": "search_debounce_ms",
    "BO_QUERY_DEBOUNCE_MS": "query_debounce_ms",
    "BO_DEFAULT_PAGE_SIZE": "default_page_size",
    "BO_MAX_VISIBLE_PAGES": "max_visible_pages",
    "BO_SKELETON_ROWS": "skeleton_rows",
}


class TableSettings(BaseModel):
    """Tunables shared by every table in the application."""

    search_debounce_ms: int = Field(default=400, ge=0)
    query_debounce_ms: int = Field(default=100, ge=0)
    max_visible_pages: int = Field(default=5, ge=3)
    default_page_size: int = Field(default=10, ge=1)
    page_size_options: list[int] = Field(default_factory=lambda: [10, 20, 50, 100])
    skeleton_rows: int = Field(default=5, ge=1)
    floating_action: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("page_size_options")
    @classmethod
    def _positive_sizes(cls, value: list[int]) -> list[int]:
        if not value or any(size < 1 for size in value):
            raise ValueError("page_size_options must be a non-empty list of positive sizes")
        return sorted(set(value))


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError("Settings file not found", context={"path": path})
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            "Settings file is not valid YAML", context={"path": path}, cause=exc
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Settings file must contain a mapping at the top level",
            context={"path": path},
        )
    section = data.get("table", data)
    if not isinstance(section, dict):
        raise ConfigurationError("Section 'table' must be a mapping", context={"path": path})
    return section


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for env_name, field_name in _ENV_INT_FIELDS.items():
        if env_name not in environ:
            continue
        value = parse_int_env(environ[env_name])
        if value is None:
            raise ConfigurationError(
                "Environment override must be an integer",
                context={"variable": env_name, "value": environ[env_name]},
            )
        overrides[field_name] = value
    sizes = parse_int_list_env(environ.get("BO_PAGE_SIZE_OPTIONS"))
    if sizes is not None:
        overrides["page_size_options"] = sizes
    if "BO_FLOATING_ACTION" in environ:
        overrides["floating_action"] = environ["BO_FLOATING_ACTION"]
    return overrides


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> TableSettings:
    """Resolve settings from defaults, a YAML file and the environment.

    The file comes from ``path`` or ``BO_TABLE_CONFIG``; environment
    variables override file values.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    config_path = path or (Path(env["BO_TABLE_CONFIG"]) if env.get("BO_TABLE_CONFIG") else None)
    if config_path is not None:
        data.update(_load_yaml(Path(config_path)))
    data.update(_env_overrides(env))
    try:
        return TableSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid table settings",
            context={"errors": [err["msg"] for err in exc.errors()]},
            cause=exc,
        ) from exc

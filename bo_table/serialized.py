"""Externally sourced JSON configuration, degraded to "absent" when broken."""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


def parse_json_feature(raw: str | bytes | None, *, feature: str) -> Any | None:
    """Decode ``raw`` JSON, logging and returning None when it is malformed."""
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)) and not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring malformed %s configuration: %s", feature, exc)
        return None


class FloatingAction(BaseModel):
    """A floating action button configured from a JSON string."""

    label: str
    url: str | None = None
    icon: str | None = None
    position: Literal["bottom-right", "bottom-left"] = "bottom-right"

    model_config = ConfigDict(extra="ignore")


def parse_floating_action(raw: str | bytes | None) -> FloatingAction | None:
    data = parse_json_feature(raw, feature="floating action")
    if data is None:
        return None
    if not isinstance(data, Mapping):
        logger.warning("Ignoring floating action configuration: expected an object")
        return None
    try:
        return FloatingAction.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid floating action configuration: %s", exc)
        return None

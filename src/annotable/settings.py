from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

ANNOTABLE_DANGLING_ANNOTATIONS_ENV = "ANNOTABLE_DANGLING_ANNOTATIONS"
ANNOTABLE_TRACK_PROPERTIES_ENV = "ANNOTABLE_TRACK_PROPERTIES"

DanglingPolicy = Literal["keep", "warn", "error"]


class AnnotableConfig(BaseModel):
    dangling_annotations: DanglingPolicy = Field(
        default="keep",
        description="What to do with annotations still staged when a host finishes its definition.",
    )
    track_properties: bool = Field(
        default=False,
        description="Treat property objects bound on a host as method definitions.",
    )

    @field_validator("dangling_annotations", mode="before")
    @classmethod
    def _fold_policy(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


_ENV_TRUE = frozenset({"1", "true", "yes", "y", "on"})
_ENV_FALSE = frozenset({"0", "false", "no", "n", "off"})


def _env_flag(variable: str) -> bool | None:
    raw = os.getenv(variable)
    if raw is None:
        return None
    folded = raw.strip().lower()
    if folded in _ENV_TRUE or folded in _ENV_FALSE:
        return folded in _ENV_TRUE
    logger.warning("Ignoring invalid %s value: %r", variable, raw)
    return None


def load_env_overrides() -> dict[str, Any]:
    """Read config values from ANNOTABLE_* environment variables, skipping invalid ones."""
    data: dict[str, Any] = {}
    policy = os.getenv(ANNOTABLE_DANGLING_ANNOTATIONS_ENV)
    if policy is not None:
        try:
            data["dangling_annotations"] = AnnotableConfig(dangling_annotations=policy).dangling_annotations
        except ValidationError:
            logger.warning("Ignoring invalid %s value: %r", ANNOTABLE_DANGLING_ANNOTATIONS_ENV, policy)
    track = _env_flag(ANNOTABLE_TRACK_PROPERTIES_ENV)
    if track is not None:
        data["track_properties"] = track
    return data


def load_config(config: AnnotableConfig | Mapping[str, Any] | None = None, **overrides: Any) -> AnnotableConfig:
    """
    Build the effective config for one host.

    Precedence, lowest first: defaults, environment, ``config``, keyword overrides.
    """
    if isinstance(config, AnnotableConfig):
        data = config.model_dump(exclude_unset=True)
    else:
        data = dict(config or {})
    return AnnotableConfig.model_validate({**load_env_overrides(), **data, **overrides})


__all__ = [
    "ANNOTABLE_DANGLING_ANNOTATIONS_ENV",
    "ANNOTABLE_TRACK_PROPERTIES_ENV",
    "AnnotableConfig",
    "DanglingPolicy",
    "load_config",
    "load_env_overrides",
]

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Annotation(BaseModel):
    """
    One annotation instance: a name with the params and options it was called with.

        annotation = Annotation("route", ["/users"], {"method": "GET"})
        annotation.name     # "route"
        annotation.params   # ("/users",)
        annotation.options  # {"method": "GET"}
    """

    model_config = ConfigDict(frozen=True)

    # options is a read-only mapping, so instances cannot be hashed.
    __hash__ = None  # type: ignore[assignment]

    name: Any
    params: tuple[Any, ...] = Field(default_factory=tuple)
    options: Mapping[str, Any] = Field(default_factory=dict)

    def __init__(
        self,
        name: Any,
        params: Iterable[Any] = (),
        options: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(name=name, params=tuple(params), options=dict(options or {}))

    @field_validator("options", mode="after")
    @classmethod
    def _read_only_options(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))


__all__ = ["Annotation"]

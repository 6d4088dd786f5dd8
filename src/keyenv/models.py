"""Pydantic records mirroring responses from the KeyEnv API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordType = TypeVar("RecordType", bound="APIRecord")


class APIRecord(BaseModel):
    """Immutable record built from a decoded API payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_response(cls: type[RecordType], data: Mapping[str, Any]) -> RecordType:
        """Validate a snake_case wire map into a record."""

        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Return the record in its wire shape, optional fields included."""

        return self.model_dump()


class Secret(APIRecord):
    """A secret without its decrypted value."""

    id: str
    environment_id: str
    key: str = Field(min_length=1)
    type: str = "string"
    version: int
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("id", "environment_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return "string" if value is None else value


class SecretWithValue(Secret):
    """A secret together with its decrypted value."""

    value: str = ""
    inherited_from: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _default_value(cls, value: Any) -> Any:
        return "" if value is None else value


class Environment(APIRecord):
    """A deployment environment inside a project."""

    id: str
    project_id: str
    name: str
    inherits_from: str | None = None
    created_at: str | None = None

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


def unwrap_record(payload: Any, wrapper: str) -> Mapping[str, Any]:
    """Return ``payload[wrapper]`` when present, otherwise the payload itself.

    Single-record endpoints answer either ``{"secret": {...}}`` or with the
    record fields at the root.
    """

    if isinstance(payload, Mapping):
        inner = payload.get(wrapper)
        if isinstance(inner, Mapping):
            return inner
        return payload
    return {}


def extract_items(payload: Any, field: str) -> list[Mapping[str, Any]]:
    """Return the list stored under ``field``, or an empty list."""

    if not isinstance(payload, Mapping):
        return []
    items = payload.get(field)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


__all__ = [
    "APIRecord",
    "Environment",
    "Secret",
    "SecretWithValue",
    "extract_items",
    "unwrap_record",
]

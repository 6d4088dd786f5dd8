from __future__ import annotations

import pytest
from pydantic import ValidationError

from keyenv import Environment, Secret, SecretWithValue
from keyenv.models import extract_items, unwrap_record


def test_secret_from_response() -> None:
    secret = Secret.from_response(
        {
            "id": "sec_123",
            "environment_id": "env_456",
            "key": "DATABASE_URL",
            "type": "string",
            "version": 1,
            "description": "Database connection URL",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-02T00:00:00Z",
        }
    )

    assert secret.id == "sec_123"
    assert secret.environment_id == "env_456"
    assert secret.key == "DATABASE_URL"
    assert secret.type == "string"
    assert secret.version == 1
    assert secret.description == "Database connection URL"
    assert secret.created_at == "2024-01-01T00:00:00Z"
    assert secret.updated_at == "2024-01-02T00:00:00Z"


def test_secret_defaults_and_coercion() -> None:
    secret = Secret.from_response(
        {"id": 7, "environment_id": 9, "key": "A", "type": None, "version": "3", "extra": True}
    )

    assert secret.id == "7"
    assert secret.environment_id == "9"
    assert secret.type == "string"
    assert secret.version == 3
    assert secret.description is None


def test_secret_with_value_from_response() -> None:
    secret = SecretWithValue.from_response(
        {
            "id": "sec_123",
            "environment_id": "env_456",
            "key": "DATABASE_URL",
            "version": 1,
            "value": "postgres://localhost/mydb",
            "inherited_from": "development",
        }
    )

    assert isinstance(secret, Secret)
    assert secret.value == "postgres://localhost/mydb"
    assert secret.inherited_from == "development"
    assert secret.type == "string"


def test_secret_with_value_missing_value_is_empty_string() -> None:
    secret = SecretWithValue.from_response(
        {"id": "s", "environment_id": "e", "key": "K", "version": 1, "value": None}
    )

    assert secret.value == ""


def test_environment_from_response() -> None:
    environment = Environment.from_response(
        {
            "id": "env_123",
            "project_id": "proj_456",
            "name": "production",
            "inherits_from": "staging",
            "created_at": "2024-01-01T00:00:00Z",
        }
    )

    assert environment.id == "env_123"
    assert environment.project_id == "proj_456"
    assert environment.name == "production"
    assert environment.inherits_from == "staging"


def test_to_dict_includes_optional_fields() -> None:
    secret = SecretWithValue.from_response(
        {"id": "s", "environment_id": "e", "key": "SECRET_KEY", "version": 1, "value": "v"}
    )

    data = secret.to_dict()

    assert data["value"] == "v"
    assert data["inherited_from"] is None
    assert data["description"] is None
    assert data["environment_id"] == "e"


@pytest.mark.parametrize(
    "record",
    [
        Secret(id="s", environment_id="e", key="K", version=2),
        Secret(
            id="s",
            environment_id="e",
            key="K",
            type="json",
            version=2,
            description="d",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-02T00:00:00Z",
        ),
        SecretWithValue(id="s", environment_id="e", key="K", version=1, value="x"),
        SecretWithValue(
            id="s", environment_id="e", key="K", version=1, value="x", inherited_from="dev"
        ),
        Environment(id="e", project_id="p", name="staging"),
        Environment(
            id="e", project_id="p", name="prod", inherits_from="staging", created_at="2024"
        ),
    ],
)
def test_wire_round_trip(record) -> None:
    assert type(record).from_response(record.to_dict()) == record


def test_records_are_frozen() -> None:
    secret = Secret(id="s", environment_id="e", key="K", version=1)

    with pytest.raises(ValidationError):
        secret.key = "OTHER"


def test_empty_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Secret.from_response({"id": "s", "environment_id": "e", "key": "", "version": 1})


def test_unwrap_record_accepts_both_shapes() -> None:
    fields = {"id": "s", "key": "K"}

    assert unwrap_record({"secret": fields}, "secret") == fields
    assert unwrap_record(fields, "secret") == fields
    assert unwrap_record([], "secret") == {}


def test_extract_items_ignores_missing_or_malformed_lists() -> None:
    assert extract_items({}, "secrets") == []
    assert extract_items({"secrets": None}, "secrets") == []
    assert extract_items([{"key": "A"}], "secrets") == []
    assert extract_items({"secrets": [{"key": "A"}, "junk"]}, "secrets") == [{"key": "A"}]

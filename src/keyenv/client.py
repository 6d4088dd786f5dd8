"""KeyEnv client backed by the KeyEnv secrets API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config import KeyEnvConfig
from .envfile import render_env_file
from .environ import EnvironmentTarget, ProcessEnvironment
from .exceptions import KeyEnvAPIError, KeyEnvConfigError
from .executor import RequestExecutor
from .models import Environment, Secret, SecretWithValue, extract_items, unwrap_record

API_PREFIX = "/api/v1"


class KeyEnv:
    """Reads and writes secrets stored in KeyEnv.

    Example::

        client = KeyEnv(os.environ["KEYENV_TOKEN"])
        secret = client.get_secret("project-id", "production", "DATABASE_URL")
        print(secret.value)

    Every network operation raises :class:`KeyEnvAPIError` on failure.
    """

    def __init__(
        self,
        token: str,
        timeout: float | None = None,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        environ: EnvironmentTarget | None = None,
        config: KeyEnvConfig | None = None,
    ) -> None:
        if not token:
            raise KeyEnvConfigError("KeyEnv token is required")

        overrides: dict[str, Any] = {"token": token}
        if timeout is not None:
            overrides["timeout"] = timeout
        if base_url is not None:
            overrides["api_url"] = base_url
        try:
            if config is None:
                self.config: KeyEnvConfig = KeyEnvConfig(**overrides)
            else:
                self.config = KeyEnvConfig(**{**config.model_dump(), **overrides})
        except ValidationError as exc:
            raise KeyEnvConfigError(f"Invalid KeyEnv configuration: {exc}") from exc

        self._executor: RequestExecutor = RequestExecutor(self.config, http_client)
        self._environ: EnvironmentTarget = environ or ProcessEnvironment()
        self._logger: logging.Logger = logging.getLogger(__name__)

    @classmethod
    def create(
        cls,
        token: str,
        timeout: float | None = None,
        base_url: str | None = None,
        **kwargs: Any,
    ) -> KeyEnv:
        """Factory equivalent to calling the constructor."""

        return cls(token, timeout, base_url, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> KeyEnv:
        """Build a client from ``KEYENV_*`` environment variables."""

        try:
            config = KeyEnvConfig()
        except ValidationError as exc:
            raise KeyEnvConfigError(f"Invalid KeyEnv configuration: {exc}") from exc
        return cls(config.token, config=config, **kwargs)

    @property
    def base_url(self) -> str:
        return self.config.api_url

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._executor.close()

    def __enter__(self) -> KeyEnv:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"KeyEnv(base_url={self.base_url!r})"

    # Secrets

    def get_secrets(self, project_id: str, environment: str) -> list[SecretWithValue]:
        """Return every secret of an environment with its decrypted value."""

        data = self._executor.execute(
            "GET", self._secrets_path(project_id, environment, "export")
        )
        return [SecretWithValue.from_response(item) for item in extract_items(data, "secrets")]

    def get_secrets_as_dict(self, project_id: str, environment: str) -> dict[str, str]:
        """Return ``{key: value}``; a repeated key keeps its last value."""

        return {
            secret.key: secret.value
            for secret in self.get_secrets(project_id, environment)
        }

    def get_secret(self, project_id: str, environment: str, key: str) -> SecretWithValue:
        data = self._executor.execute("GET", self._secrets_path(project_id, environment, key))
        return SecretWithValue.from_response(unwrap_record(data, "secret"))

    def list_secrets(self, project_id: str, environment: str) -> list[Secret]:
        """List secret metadata without values."""

        data = self._executor.execute("GET", self._secrets_path(project_id, environment))
        return [Secret.from_response(item) for item in extract_items(data, "secrets")]

    def create_secret(
        self,
        project_id: str,
        environment: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> Secret:
        payload: dict[str, Any] = {"key": key, "value": value}
        if description is not None:
            payload["description"] = description
        data = self._executor.execute(
            "POST", self._secrets_path(project_id, environment), payload
        )
        return Secret.from_response(unwrap_record(data, "secret"))

    def update_secret(
        self,
        project_id: str,
        environment: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> Secret:
        payload: dict[str, Any] = {"value": value}
        if description is not None:
            payload["description"] = description
        data = self._executor.execute(
            "PUT", self._secrets_path(project_id, environment, key), payload
        )
        return Secret.from_response(unwrap_record(data, "secret"))

    def set_secret(
        self,
        project_id: str,
        environment: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> Secret:
        """Update ``key``, creating it when the update reports not found."""

        try:
            return self.update_secret(project_id, environment, key, value, description)
        except KeyEnvAPIError as exc:
            if not exc.is_not_found():
                raise
        self._logger.debug(
            "Secret not found on update, creating it",
            extra={
                "secret_context": {
                    "project_id": project_id,
                    "environment": environment,
                    "key": key,
                }
            },
        )
        return self.create_secret(project_id, environment, key, value, description)

    def delete_secret(self, project_id: str, environment: str, key: str) -> None:
        self._executor.execute("DELETE", self._secrets_path(project_id, environment, key))

    # Environments and projects

    def list_environments(self, project_id: str) -> list[Environment]:
        data = self._executor.execute(
            "GET", f"{API_PREFIX}/projects/{_segment(project_id)}/environments"
        )
        return [Environment.from_response(item) for item in extract_items(data, "environments")]

    def list_projects(self) -> list[Any]:
        """Return the ``projects`` list exactly as the API sent it."""

        data = self._executor.execute("GET", f"{API_PREFIX}/projects")
        projects = data.get("projects") if isinstance(data, dict) else None
        return list(projects) if isinstance(projects, list) else []

    def get_project(self, project_id: str) -> dict[str, Any]:
        data = self._executor.execute("GET", f"{API_PREFIX}/projects/{_segment(project_id)}")
        return dict(unwrap_record(data, "project"))

    def validate_token(self) -> dict[str, Any]:
        """Return the current user; raises 401 when the token is rejected."""

        return self.get_current_user()

    def get_current_user(self) -> dict[str, Any]:
        data = self._executor.execute("GET", f"{API_PREFIX}/users/me")
        return data if isinstance(data, dict) else {}

    # Local output

    def load_env(
        self,
        project_id: str,
        environment: str,
        *,
        target: EnvironmentTarget | None = None,
    ) -> int:
        """Export every secret into ``target`` (the process by default).

        Returns the number of secrets written.
        """

        secrets = self.get_secrets(project_id, environment)
        sink = target or self._environ
        for secret in secrets:
            sink.set(secret.key, secret.value)
        self._logger.debug(
            "Loaded secrets into environment",
            extra={
                "secret_context": {
                    "project_id": project_id,
                    "environment": environment,
                    "count": len(secrets),
                }
            },
        )
        return len(secrets)

    def generate_env_file(self, project_id: str, environment: str) -> str:
        """Return ``.env`` text for the environment; nothing is written to disk."""

        secrets = self.get_secrets(project_id, environment)
        return render_env_file(((secret.key, secret.value) for secret in secrets), environment)

    def _secrets_path(self, project_id: str, environment: str, suffix: str | None = None) -> str:
        path = (
            f"{API_PREFIX}/projects/{_segment(project_id)}"
            f"/environments/{_segment(environment)}/secrets"
        )
        if suffix is not None:
            path = f"{path}/{_segment(suffix)}"
        return path


def _segment(value: str) -> str:
    return quote(str(value), safe="")


__all__ = ["API_PREFIX", "KeyEnv"]

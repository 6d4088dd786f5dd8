"""Request executor turning HTTP outcomes into JSON or ``KeyEnvAPIError``."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ._version import __version__
from .config import KeyEnvConfig
from .exceptions import KeyEnvAPIError

USER_AGENT = f"keyenv-python/{__version__}"


class RequestExecutor:
    """Issues authenticated JSON requests against the KeyEnv API."""

    def __init__(
        self,
        config: KeyEnvConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config: KeyEnvConfig = config
        self._client: httpx.Client | None = http_client
        self._owns_client: bool = http_client is None
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def base_url(self) -> str:
        return self.config.api_url

    def close(self) -> None:
        """Close the underlying HTTP client if this executor created it."""

        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def execute(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Send ``method`` to ``path`` and return the decoded JSON payload.

        A 204 response, an empty body and a JSON ``null`` all yield ``{}``.
        Every failure is raised as :class:`KeyEnvAPIError`.
        """

        method = method.upper()
        url = f"{self.base_url}{path}"
        try:
            response = self._get_client().request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout(),
                json=body if body is not None and method not in {"GET", "DELETE"} else None,
            )
        except httpx.TimeoutException as exc:
            self._logger.debug(
                "KeyEnv request timed out", extra=self._log_context(method, path, 408)
            )
            raise KeyEnvAPIError("Request timeout", 408) from exc
        except httpx.RequestError as exc:
            self._logger.debug(
                "KeyEnv request failed before a response",
                extra=self._log_context(method, path, 0),
            )
            raise KeyEnvAPIError(str(exc) or "Network error", 0) from exc

        status = response.status_code
        self._logger.debug("KeyEnv request completed", extra=self._log_context(method, path, status))

        if status == httpx.codes.NO_CONTENT:
            return {}

        data = self._decode(response.text)

        if status >= 400:
            raise self._error_from_payload(status, data)

        return {} if data is None else data

    def _decode(self, text: str) -> Any:
        if text == "":
            return None
        try:
            return json.loads(text)
        except ValueError:
            return {"error": text}

    def _error_from_payload(self, status: int, data: Any) -> KeyEnvAPIError:
        payload = data if isinstance(data, dict) else {}
        message = payload.get("error")
        code = payload.get("code")
        details = payload.get("details")
        return KeyEnvAPIError(
            str(message) if message is not None else "Unknown error",
            status,
            str(code) if code is not None else None,
            details if isinstance(details, dict) else {},
        )

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.config.timeout, connect=self.config.connect_timeout)

    def _get_client(self) -> httpx.Client:
        # TLS and redirect settings apply only to clients created here.
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout(),
                verify=self.config.verify_ssl,
                follow_redirects=True,
                max_redirects=self.config.max_redirects,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _log_context(self, method: str, path: str, status: int) -> dict[str, dict[str, Any]]:
        return {
            "request_context": {
                "method": method,
                "path": path,
                "status_code": status,
            }
        }


__all__ = ["RequestExecutor", "USER_AGENT"]

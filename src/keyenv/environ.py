"""Targets that receive secrets loaded by :meth:`KeyEnv.load_env`."""

from __future__ import annotations

import os
from typing import Protocol


class EnvironmentTarget(Protocol):
    """Anything that can store an environment variable."""

    def set(self, key: str, value: str) -> None:  # pragma: no cover - protocol
        """Store ``value`` under ``key``."""


class ProcessEnvironment:
    """Writes into ``os.environ``, which also updates the OS environment.

    Not synchronized; concurrent writers on the same keys race.
    """

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value


class InMemoryEnvironment:
    """Collects variables in a dict instead of touching the process."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


__all__ = ["EnvironmentTarget", "InMemoryEnvironment", "ProcessEnvironment"]

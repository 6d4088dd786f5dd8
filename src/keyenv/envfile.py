"""Render secrets as ``.env`` file text."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

_QUOTE_TRIGGERS = ("\n", '"', "'", " ")


def format_env_value(value: str) -> str:
    """Return ``value`` as it should appear after ``KEY=``."""

    if any(char in value for char in _QUOTE_TRIGGERS):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def render_env_file(
    pairs: Iterable[tuple[str, str]],
    environment: str,
    *,
    generated_at: datetime | None = None,
) -> str:
    """Render ``pairs`` in order beneath a comment header.

    The result always ends with a single newline, even without pairs.
    """

    moment = generated_at or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    lines = [
        "# Generated by KeyEnv",
        f"# Environment: {environment}",
        f"# Generated at: {stamp}",
        "",
    ]
    lines.extend(f"{key}={format_env_value(value)}" for key, value in pairs)
    return "\n".join(lines) + "\n"


__all__ = ["format_env_value", "render_env_file"]

"""Python client for the KeyEnv secrets API."""

from ._version import __version__
from .client import API_PREFIX, KeyEnv
from .config import DEFAULT_API_URL, KeyEnvConfig
from .envfile import format_env_value, render_env_file
from .environ import EnvironmentTarget, InMemoryEnvironment, ProcessEnvironment
from .exceptions import KeyEnvAPIError, KeyEnvConfigError, KeyEnvError
from .executor import USER_AGENT, RequestExecutor
from .models import Environment, Secret, SecretWithValue

__all__ = [
    "API_PREFIX",
    "DEFAULT_API_URL",
    "Environment",
    "EnvironmentTarget",
    "InMemoryEnvironment",
    "KeyEnv",
    "KeyEnvAPIError",
    "KeyEnvConfig",
    "KeyEnvConfigError",
    "KeyEnvError",
    "ProcessEnvironment",
    "RequestExecutor",
    "Secret",
    "SecretWithValue",
    "USER_AGENT",
    "__version__",
    "format_env_value",
    "render_env_file",
]

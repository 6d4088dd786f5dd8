from __future__ import annotations

import httpx
import pytest

from keyenv import InMemoryEnvironment, KeyEnv

from .fakes import BASE_URL, FakeAPI


@pytest.fixture(autouse=True)
def _clean_keyenv_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in (
        "KEYENV_TOKEN",
        "KEYENV_API_URL",
        "KEYENV_TIMEOUT",
        "KEYENV_CONNECT_TIMEOUT",
        "KEYENV_VERIFY_SSL",
        "KEYENV_MAX_REDIRECTS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def memory_env() -> InMemoryEnvironment:
    return InMemoryEnvironment()


@pytest.fixture
def client(fake_api: FakeAPI, memory_env: InMemoryEnvironment):
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    keyenv = KeyEnv("test-token", base_url=BASE_URL, http_client=http_client, environ=memory_env)
    yield keyenv
    http_client.close()

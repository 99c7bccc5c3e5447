import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_ENV_VARS = (
    "AI_BUILDER_TOKEN",
    "AI_BUILDERS_CACHE_DIR",
    "AI_BUILDERS_GUIDE_URL",
    "AI_BUILDERS_OPENAPI_URL",
    "AI_BUILDERS_HTTP_TIMEOUT",
    "COACH_MODEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep tests away from the real token and the real ~/.ai-builders-mcp-cache."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AI_BUILDERS_CACHE_DIR", str(tmp_path / "cache"))


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


class FakeRemote:
    """httpx.MockTransport wrapper that records every request it serves."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = "# Remote guide\n"
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    def refuse_connections(self) -> None:
        self.error = httpx.ConnectError("[Errno 111] Connection refused")

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def http_client(remote):
    client = httpx.Client(transport=httpx.MockTransport(remote.handler))
    try:
        yield client
    finally:
        client.close()

import json
import logging

import httpx
import pytest

from adminapi.admin import AdminApi
from adminapi.core.config import ClientConfig
from adminapi.transport.client import ApiClient

BASE_URL = "http://backend.test"


class FakeBackend:
    """Scripted backend behind ``httpx.MockTransport``.

    Each queued outcome is consumed by one attempt: a dict becomes a 200 JSON
    body, an ``httpx.Response`` is returned as-is, and an exception instance
    is raised as if the network failed. Once the script runs out every call
    answers ``{"errCode": 0, "data": None}``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._outcomes: list = []

    def queue(self, *outcomes) -> "FakeBackend":
        self._outcomes.extend(outcomes)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if self._outcomes else {"errCode": 0, "errMsg": "", "data": None}
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(200, json=outcome)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_path(self) -> str:
        return self.requests[-1].url.path

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def sleeper():
    return RecordingSleep()


@pytest.fixture
def config():
    return ClientConfig(base_url=BASE_URL, timeout_ms=5000, max_retries=2, retry_delay_ms=1000)


@pytest.fixture
def client(config, backend, sleeper):
    return ApiClient(config, transport=httpx.MockTransport(backend.handler), sleep=sleeper)


@pytest.fixture
def api(config, backend, sleeper):
    return AdminApi(config, transport=httpx.MockTransport(backend.handler), sleep=sleeper)


@pytest.fixture
def ok():
    """Build a successful backend body."""

    def _ok(data=None):
        return {"errCode": 0, "errMsg": "", "data": data}

    return _ok


@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="adminapi")

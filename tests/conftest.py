"""
Shared fixtures for the Carapace test suite

The remote API is replaced by an httpx.MockTransport so every test sees
the exact request the client built, and nothing ever leaves the process
"""

import httpx
import pytest

from carapace.client import CarapaceClient
from carapace.dispatcher import build_dispatcher


API_KEY = "sc_key_test123"
BASE_URL = "https://carapaceai.com/api/v1"


# Environment variables

@pytest.fixture(autouse=True)
def env_vars(monkeypatch):
    """Pin the environment the server reads so a developer's real key
    never reaches a test
    """
    env = {
        "CARAPACE_API_KEY": API_KEY,
        "CARAPACE_MCP_TRANSPORT": "stdio",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env



# Fake Carapace API

class FakeCarapaceAPI:
    """Records each request and answers from a queue of canned outcomes.

    Queue an ``httpx.Response`` with :meth:`respond` or an exception with
    :meth:`fail`; a request with nothing queued fails the test loudly
    """

    def __init__(self):
        self.requests = []
        self._outcomes = []

    def respond(self, status_code=200, json=None, content=None, headers=None):
        if json is not None:
            self._outcomes.append(httpx.Response(status_code, json=json, headers=headers))
        else:
            self._outcomes.append(
                httpx.Response(status_code, content=content or b"", headers=headers)
            )
        return self

    def fail(self, exc):
        self._outcomes.append(exc)
        return self

    def handler(self, request):
        self.requests.append(request)
        assert self._outcomes, f"unexpected request: {request.method} {request.url}"
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self):
        return self.requests[-1]


@pytest.fixture()
def fake_api():
    return FakeCarapaceAPI()


@pytest.fixture()
def client(fake_api):
    """A CarapaceClient wired to the fake API"""
    return CarapaceClient(API_KEY, base_url=BASE_URL, transport=fake_api.transport)


@pytest.fixture()
def dispatcher(client):
    return build_dispatcher(client)


@pytest.fixture()
def sample_query_response():
    """One ranked insight, shaped like the real /query answer"""
    return {
        "results": [
            {
                "id": "abc-123",
                "claim": "Test insight",
                "reasoning": "Test reasoning",
                "confidence": 0.9,
                "score": 0.85,
            }
        ]
    }

"""Pytest configuration - loads .env for the live smoke test and fakes the HTTP transport."""

import io
import json
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from dilovod_cli.sdk import DilovodClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://api.dilovod.test"


@dataclass
class SentRequest:
    """One request captured by the fake transport."""

    url: str
    method: str
    headers: dict[str, str]
    body: bytes
    timeout: float | None

    @property
    def envelope(self) -> dict[str, Any]:
        return json.loads(self.body)


class FakeTransport:
    """
    Stand-in for urllib.request.urlopen.

    Queued replies are returned in order: bytes/str are sent as the raw body,
    dicts/lists are JSON-encoded, exceptions are raised.
    """

    def __init__(self):
        self.requests: list[SentRequest] = []
        self._replies: list[Any] = []

    def reply(self, *replies: Any) -> None:
        self._replies.extend(replies)

    def __call__(self, req: urllib.request.Request, timeout: float | None = None) -> io.BytesIO:
        self.requests.append(
            SentRequest(
                url=req.full_url,
                method=req.get_method(),
                headers=dict(req.header_items()),
                body=req.data,
                timeout=timeout,
            )
        )
        reply = self._replies.pop(0) if self._replies else {"result": []}
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, (dict, list)):
            reply = json.dumps(reply)
        if isinstance(reply, str):
            reply = reply.encode("utf-8")
        return io.BytesIO(reply)

    @property
    def last(self) -> SentRequest:
        return self.requests[-1]


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


@pytest.fixture
def client(transport) -> DilovodClient:
    return DilovodClient(api_key=TEST_API_KEY, base_url=TEST_BASE_URL)

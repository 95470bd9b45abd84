"""
Pytest fixtures for the test suite.

Client tests never touch the network: ``FakeTransport`` records every call
and answers with a canned RawResponse, so "no network call" is simply
``transport.calls == []``.
"""
from __future__ import annotations

import pytest

from chatkit_server.config import InstanceConfig, resolve
from chatkit_server.transport import RawResponse

# Long enough to avoid PyJWT's short HMAC key warning.
TEST_SECRET = "s" * 32
TEST_LOCATOR = "v1:us1:instance-1"
TEST_KEY = f"key-1:{TEST_SECRET}"


class FakeTransport:
    """Records calls and returns ``response`` (or raises ``error``)."""

    def __init__(self, response: RawResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or RawResponse(status_code=200, body={})
        self.error = error
        self.calls: list[dict] = []

    def send(self, url, method, headers, body=None):
        self.calls.append({"url": url, "method": method, "headers": dict(headers), "body": body})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> dict:
        return self.calls[-1]


@pytest.fixture
def config() -> InstanceConfig:
    """Instance config with a short, recognizable lifetime."""
    return resolve(TEST_LOCATOR, TEST_KEY, 3600)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(config, transport):
    from chatkit_server.client import ChatkitClient

    return ChatkitClient(config, transport)

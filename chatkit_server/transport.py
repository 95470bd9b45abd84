"""
HTTP transport used by ChatkitClient.

The client only needs one-shot call-and-wait semantics, so the contract is a
single ``send`` method. ``RequestsTransport`` is the default; tests and host
applications can pass anything that satisfies ``Transport``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

import requests

from .errors import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True)
class RawResponse:
    """Status code and decoded JSON body (None when the body was empty)."""

    status_code: int
    body: Any = None


class Transport(Protocol):
    def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any] | None = None,
    ) -> RawResponse: ...


class RequestsTransport:
    """
    ``requests``-backed transport.

    Every call has a timeout and is attempted exactly once. Network failures
    raise TransportError; a body that is not JSON raises MalformedResponseError.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        try:
            resp = self._session.request(
                method,
                url,
                headers=dict(headers),
                json=dict(body) if body is not None else None,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Chatkit request failed: %s", type(e).__name__, exc_info=False)
            raise TransportError(f"{method} request failed: {type(e).__name__}", url) from e

        return RawResponse(status_code=resp.status_code, body=_decode_body(resp))

    def close(self) -> None:
        self._session.close()


def _decode_body(resp: requests.Response) -> Any:
    if resp.status_code == 204 or not resp.content or not resp.content.strip():
        return None
    try:
        return resp.json()
    except ValueError as e:
        logger.warning("Chatkit response is not JSON status=%s", resp.status_code)
        raise MalformedResponseError(f"Response body is not JSON (status {resp.status_code})") from e

"""Uniform result envelope and the normalizer that builds it from raw responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from .errors import MalformedResponseError

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = frozenset({200, 201, 204})

Payload = Union[dict[str, Any], list[dict[str, Any]], None]


@dataclass(frozen=True)
class ResultEnvelope:
    """
    Outcome of one SDK operation.

    Upstream business errors (e.g. "user not found") are returned as an
    envelope with ``error_code`` set, not raised. A success envelope always
    has ``status_code`` 200 and ``error_code`` None; an error envelope never
    carries a payload.
    """

    status_code: int
    message: str = ""
    payload: Payload = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        if self.error_code is None and self.status_code != 200:
            raise ValueError("A success envelope must have status 200")
        if self.error_code is not None and self.payload is not None:
            raise ValueError("An error envelope cannot carry a payload")

    @classmethod
    def success(cls, payload: Payload = None) -> ResultEnvelope:
        return cls(status_code=200, payload=payload)

    @classmethod
    def failure(cls, status_code: int, error_code: str, message: str = "") -> ResultEnvelope:
        return cls(status_code=status_code, message=message, error_code=error_code)

    @property
    def ok(self) -> bool:
        return self.error_code is None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict in the Chatkit SDK response shape."""
        if self.ok:
            return {"status": self.status_code, "message": self.message, "payload": self.payload}
        return {"status": self.status_code, "message": self.message, "error": self.error_code}


def normalize(status_code: int, body: Any = None) -> ResultEnvelope:
    """
    Turn an upstream status code and decoded JSON body into a ResultEnvelope.

    200, 201 and 204 are successes and reported as 200. The payload is the
    body as-is: None, a single object, or a list of objects (order kept).

    Any other status is an error. The body is read as
    ``{"error": ..., "error_description": ...}``; missing fields become "".

    Raises MalformedResponseError when the body has neither shape.
    """
    if status_code in SUCCESS_STATUSES:
        return ResultEnvelope.success(_success_payload(body))

    if body is None:
        body = {}
    if not isinstance(body, dict):
        logger.warning("Error response body is not an object status=%s", status_code)
        raise MalformedResponseError(f"Expected an error object for status {status_code}, got {type(body).__name__}")

    return ResultEnvelope.failure(
        status_code,
        _as_text(body.get("error")),
        _as_text(body.get("error_description")),
    )


def _success_payload(body: Any) -> Payload:
    if body is None:
        return None
    if isinstance(body, dict):
        return body
    if isinstance(body, list):
        for item in body:
            if not isinstance(item, dict):
                logger.warning("Response array holds a non-object element")
                raise MalformedResponseError(f"Expected an array of objects, found {type(item).__name__}")
        return list(body)
    logger.warning("Response body is neither an object nor an array")
    raise MalformedResponseError(f"Expected an object or array, got {type(body).__name__}")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)

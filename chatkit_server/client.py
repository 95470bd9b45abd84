"""
Chatkit server client: authenticate users and manage users and rooms.

Background for newcomers:
    Every call signs its own token right before it is sent, and passes that
    token straight to the transport. Nothing about the token is stored on the
    client, so one ``ChatkitClient`` can be shared across threads.

    Which token a call uses matters to the API:

    * ``server_token()`` — superuser, no subject. Plain admin calls.
    * ``server_token(user_id)`` — superuser acting as ``user_id``. Used when
      the API needs to know *who* (updating a user, listing their rooms,
      creating a room on their behalf).
    * ``user_token(user_id)`` — handed to end users by ``authenticate``;
      never sent by this client.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from . import tokens
from .config import InstanceConfig, resolve
from .envelope import ResultEnvelope, normalize
from .errors import ValidationError
from .logging_config import configure_logging
from .settings import Settings, get_settings
from .transport import DEFAULT_TIMEOUT_SECONDS, METHODS, RequestsTransport, Transport

logger = logging.getLogger(__name__)


class ChatkitClient:
    """
    Public operations of the SDK.

    Each operation checks its arguments first (ValidationError, no network),
    then returns a ResultEnvelope. Upstream errors come back as error
    envelopes; only transport and malformed-body failures raise.
    """

    def __init__(
        self,
        config: InstanceConfig,
        transport: Transport | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._config = config
        # Only a transport built here is closed by close().
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(timeout=timeout)

    @classmethod
    def from_options(
        cls,
        instance_locator: str,
        key: str,
        expire_in: int | str | None = None,
        transport: Transport | None = None,
    ) -> ChatkitClient:
        return cls(resolve(instance_locator, key, expire_in), transport)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, transport: Transport | None = None) -> ChatkitClient:
        settings = settings or get_settings()
        configure_logging(settings.log_level)
        return cls(
            InstanceConfig.from_settings(settings),
            transport,
            timeout=settings.request_timeout_seconds,
        )

    @property
    def config(self) -> InstanceConfig:
        return self._config

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> ChatkitClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # ── Authentication ───────────────────────────────────────────────────

    def authenticate(self, user_id: str) -> ResultEnvelope:
        """Issue an end-user token for ``user_id``. No network call."""
        _require_id(user_id, "a user id")
        claims = tokens.build_claims(self._config, user_id, superuser=False)
        return ResultEnvelope.success(
            {
                "access_token": tokens.encode_claims(self._config, claims),
                "token_type": "access_token",
                "expires_in": claims.lifetime_seconds,
                "user_id": user_id,
            }
        )

    # ── Users ────────────────────────────────────────────────────────────

    def get_users(self, user_ids: Iterable[str] | None = None) -> ResultEnvelope:
        """List all users, or only ``user_ids`` when given (must be non-empty)."""
        if user_ids is None:
            return self._call("GET", "users", tokens.server_token(self._config))

        ids = [str(i) for i in user_ids] if not isinstance(user_ids, str) else [user_ids]
        if not ids or not all(ids):
            raise ValidationError("user_ids", "You must provide at least one user id")
        query = ",".join(_segment(i) for i in ids)
        return self._call("GET", f"users_by_ids?user_ids={query}", tokens.server_token(self._config))

    def get_user(self, user_id: str) -> ResultEnvelope:
        _require_id(user_id, "a user id")
        return self._call("GET", f"users/{_segment(user_id)}", tokens.server_token(self._config))

    def create_user(self, user_id: str, data: Mapping[str, Any] | None = None) -> ResultEnvelope:
        _require_id(user_id, "an id")
        body = _with_name(data)
        body["id"] = user_id
        return self._call("POST", "users", tokens.server_token(self._config), body)

    def update_user(self, user_id: str, data: Mapping[str, Any] | None = None) -> ResultEnvelope:
        _require_id(user_id, "an id")
        body = dict(data) if data is not None else None
        return self._call("PUT", f"users/{_segment(user_id)}", tokens.server_token(self._config, user_id), body)

    def delete_user(self, user_id: str) -> ResultEnvelope:
        _require_id(user_id, "an id")
        return self._call("DELETE", f"users/{_segment(user_id)}", tokens.server_token(self._config))

    # ── Rooms ────────────────────────────────────────────────────────────

    def get_user_rooms(self, user_id: str) -> ResultEnvelope:
        _require_id(user_id, "a user id")
        return self._call("GET", f"users/{_segment(user_id)}/rooms", tokens.server_token(self._config, user_id))

    def get_user_joinable_rooms(self, user_id: str) -> ResultEnvelope:
        _require_id(user_id, "a user id")
        return self._call(
            "GET",
            f"users/{_segment(user_id)}/rooms?joinable=true",
            tokens.server_token(self._config, user_id),
        )

    def create_room(self, creator_id: str, data: Mapping[str, Any] | None = None) -> ResultEnvelope:
        _require_id(creator_id, "the id of the user that you wish to create the room", field="creator_id")
        body = _with_name(data)
        body["creator_id"] = creator_id
        return self._call("POST", "rooms", tokens.server_token(self._config, creator_id), body)

    # ── Generic ──────────────────────────────────────────────────────────

    def request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        *,
        user_id: str | None = None,
        superuser: bool = True,
    ) -> ResultEnvelope:
        """
        Call any endpoint under the instance base URL.

        The token is signed for this call only: superuser by default, acting
        as ``user_id`` when given.
        """
        verb = (method or "").upper()
        if verb not in METHODS:
            raise ValidationError("method", f"Unsupported method {method!r}; expected one of {sorted(METHODS)}")
        if not path:
            raise ValidationError("path")
        token = tokens.sign(self._config, user_id, superuser=superuser)
        return self._call(verb, path.lstrip("/"), token, dict(body) if body is not None else None)

    def _call(
        self,
        method: str,
        path: str,
        token: str,
        body: Mapping[str, Any] | None = None,
    ) -> ResultEnvelope:
        url = f"{self._config.api_base_url}{path}"
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        logger.debug("Chatkit request method=%s path=%s", method, path)
        raw = self._transport.send(url, method, headers, body)
        logger.debug("Chatkit response method=%s path=%s status=%s", method, path, raw.status_code)
        return normalize(raw.status_code, raw.body)


def _segment(value: str) -> str:
    """Escape an id for use as one path segment or query value."""
    return quote(str(value), safe="")


def _require_id(value: str | None, description: str, field: str = "user_id") -> None:
    if value is None or value == "":
        raise ValidationError(field, f"You must provide {description}")


def _with_name(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Copy ``data`` after checking it has a non-empty ``name``."""
    body = dict(data) if data is not None else {}
    name = body.get("name")
    if name is None or str(name) == "":
        raise ValidationError("name", "You must provide a name")
    return body

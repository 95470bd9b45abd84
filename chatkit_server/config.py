"""Instance configuration resolved from locator and key strings. No hardcoded secrets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .settings import Settings

DEFAULT_API_HOST = "us1.pusherplatform.io"
DEFAULT_TOKEN_LIFETIME_SECONDS = 24 * 60 * 60

LOCATOR_FORMAT = "v1:region:instance"
KEY_FORMAT = "keyId:keySecret"


@dataclass(frozen=True)
class InstanceConfig:
    """
    Everything needed to sign tokens for, and talk to, one Chatkit instance.

    Built once per client by ``resolve`` (or ``from_settings``) and never
    mutated afterwards.

    Fields:
        instance_id: Third segment of the ``v1:region:instance`` locator.
        key_id: Part before the colon in ``keyId:keySecret``; used in ``iss``.
        key_secret: Part after the colon; HMAC key for token signatures.
        token_lifetime_seconds: Validity of every token issued (default 24h).
        region: Second locator segment. Informational only, see ``api_host``.
        api_host: Host serving the API. Not derived from ``region``.
    """

    instance_id: str
    key_id: str
    key_secret: str = field(repr=False)
    token_lifetime_seconds: int = DEFAULT_TOKEN_LIFETIME_SECONDS
    region: str = ""
    api_host: str = DEFAULT_API_HOST

    @property
    def api_base_url(self) -> str:
        return f"https://{self.api_host}/services/chatkit/v1/{self.instance_id}/"

    @property
    def issuer(self) -> str:
        return f"api_keys/{self.key_id}"

    @classmethod
    def from_settings(cls, settings: Settings) -> InstanceConfig:
        return resolve(
            settings.instance_locator,
            settings.key,
            settings.expire_in,
            api_host=settings.api_host,
        )


def resolve(
    locator: str | None,
    key: str | None,
    lifetime_seconds: int | str | None = None,
    *,
    api_host: str = DEFAULT_API_HOST,
) -> InstanceConfig:
    """
    Parse ``locator`` and ``key`` into an ``InstanceConfig``.

    ``lifetime_seconds`` accepts an int or an integer string (the ``expireIn``
    option) and defaults to one day. Raises ConfigurationError when the
    locator is not ``v1:region:instance``, the key is not ``keyId:keySecret``,
    or the lifetime is not a positive integer.
    """
    if not locator:
        raise ConfigurationError("You must provide an instance locator")
    if not key:
        raise ConfigurationError("You must provide a key")

    locator_parts = locator.strip().split(":")
    if len(locator_parts) != 3 or not all(locator_parts):
        raise ConfigurationError(f"Invalid instance locator, expected format {LOCATOR_FORMAT!r}")

    key_parts = key.strip().split(":")
    if len(key_parts) != 2 or not all(key_parts):
        raise ConfigurationError(f"Invalid key, expected format {KEY_FORMAT!r}")

    return InstanceConfig(
        instance_id=locator_parts[2],
        key_id=key_parts[0],
        key_secret=key_parts[1],
        token_lifetime_seconds=_resolve_lifetime(lifetime_seconds),
        region=locator_parts[1],
        api_host=api_host or DEFAULT_API_HOST,
    )


def _resolve_lifetime(raw: int | str | None) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return DEFAULT_TOKEN_LIFETIME_SECONDS
    if isinstance(raw, (bool, float)):
        raise ConfigurationError("Token lifetime must be an integer number of seconds")
    try:
        seconds = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("Token lifetime must be an integer number of seconds") from e
    if seconds <= 0:
        raise ConfigurationError("Token lifetime must be greater than zero")
    return seconds

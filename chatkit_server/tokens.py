"""
Sign (and verify) Chatkit bearer tokens.

Background for newcomers:
    Chatkit does not hand out tokens itself. The SDK holds the instance key
    (``keyId:keySecret``) and mints HS256 JWTs locally. The API trusts a token
    when:

    1. The signature checks out against the key secret.
    2. ``iss`` is ``api_keys/<keyId>`` and ``instance`` is the instance id.
    3. ``exp`` is in the future.

    Two custom claims decide what the bearer may do:

    * **sub** — the Chatkit user the token acts as. Absent for pure admin
      tokens.
    * **su** — superuser. Present (and ``true``) only on server tokens; the
      claim is omitted entirely on end-user tokens, never set to ``false``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import jwt

from .config import InstanceConfig
from .errors import TokenVerificationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Claims of a single token. Built fresh for every signature, never reused."""

    issued_at: int
    expires_at: int
    issuer: str
    instance: str
    subject: str | None = None
    superuser: bool = False

    @property
    def lifetime_seconds(self) -> int:
        return self.expires_at - self.issued_at

    def to_payload(self) -> dict[str, Any]:
        """Return the JWT claim set; ``sub`` and ``su`` only when they apply."""
        payload: dict[str, Any] = {
            "iat": self.issued_at,
            "exp": self.expires_at,
            "iss": self.issuer,
            "instance": self.instance,
        }
        if self.subject is not None:
            payload["sub"] = self.subject
        if self.superuser:
            payload["su"] = True
        return payload


def build_claims(
    config: InstanceConfig,
    user_id: str | None = None,
    *,
    superuser: bool = False,
    now: float | None = None,
) -> TokenClaims:
    issued_at = int(time.time() if now is None else now)
    return TokenClaims(
        issued_at=issued_at,
        expires_at=issued_at + config.token_lifetime_seconds,
        issuer=config.issuer,
        instance=config.instance_id,
        subject=user_id,
        superuser=superuser,
    )


def encode_claims(config: InstanceConfig, claims: TokenClaims) -> str:
    return jwt.encode(
        claims.to_payload(),
        config.key_secret.encode("utf-8"),
        algorithm=ALGORITHM,
        headers={"typ": "JWT"},
    )


def sign(
    config: InstanceConfig,
    user_id: str | None = None,
    *,
    superuser: bool = False,
    now: float | None = None,
) -> str:
    """
    Build and sign a token for ``user_id`` (or no subject when None).

    ``now`` is a unix timestamp and defaults to the current time; passing it
    makes the output reproducible.
    """
    claims = build_claims(config, user_id, superuser=superuser, now=now)
    logger.debug(
        "Signed token sub=%s su=%s exp=%s",
        claims.subject,
        claims.superuser,
        claims.expires_at,
    )
    return encode_claims(config, claims)


def server_token(config: InstanceConfig, user_id: str | None = None) -> str:
    """Superuser token, optionally acting as ``user_id``."""
    return sign(config, user_id, superuser=True)


def user_token(config: InstanceConfig, user_id: str) -> str:
    """End-user token for ``user_id``; never carries ``su``."""
    return sign(config, user_id, superuser=False)


def decode_token(config: InstanceConfig, token: str, *, verify_exp: bool = True) -> dict[str, Any]:
    """
    Verify a token signed with this instance's key and return its claims.

    Checks the signature, ``iss`` and (unless ``verify_exp`` is False) ``exp``.
    Raises TokenVerificationError otherwise.
    """
    try:
        payload = jwt.decode(
            token,
            config.key_secret.encode("utf-8"),
            algorithms=[ALGORITHM],
            issuer=config.issuer,
            options={
                "verify_signature": True,
                "verify_exp": verify_exp,
                "verify_iss": True,
                "require": ["iat", "exp", "iss"],
            },
        )
    except jwt.ExpiredSignatureError as e:
        logger.info("Token expired")
        raise TokenVerificationError("Token expired") from e
    except jwt.InvalidIssuerError as e:
        logger.info("Token invalid issuer")
        raise TokenVerificationError("Invalid token: issuer") from e
    except jwt.InvalidTokenError as e:
        logger.info("Token invalid: %s", type(e).__name__)
        raise TokenVerificationError("Invalid token") from e

    if payload.get("instance") != config.instance_id:
        logger.info("Token issued for another instance")
        raise TokenVerificationError("Invalid token: instance")
    return payload

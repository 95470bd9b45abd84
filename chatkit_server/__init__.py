"""
Server-side SDK for the Chatkit chat API.

Signs admin and end-user tokens locally from the instance key and relays user
and room operations to the API. Every operation returns a ResultEnvelope.
"""

from .client import ChatkitClient
from .config import InstanceConfig, resolve
from .envelope import ResultEnvelope, normalize
from .errors import (
    ChatkitError,
    ConfigurationError,
    MalformedResponseError,
    TokenVerificationError,
    TransportError,
    ValidationError,
)
from .settings import Settings, get_settings
from .tokens import TokenClaims, decode_token, server_token, sign, user_token
from .transport import RawResponse, RequestsTransport, Transport

__all__ = [
    "ChatkitClient",
    "InstanceConfig",
    "resolve",
    "ResultEnvelope",
    "normalize",
    "ChatkitError",
    "ConfigurationError",
    "MalformedResponseError",
    "TokenVerificationError",
    "TransportError",
    "ValidationError",
    "Settings",
    "get_settings",
    "TokenClaims",
    "decode_token",
    "server_token",
    "sign",
    "user_token",
    "RawResponse",
    "RequestsTransport",
    "Transport",
]

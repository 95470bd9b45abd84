from __future__ import annotations

import logging

from .errors import ConfigurationError

PACKAGE_LOGGER = "chatkit_server"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Set the level of the SDK's package logger and return it.

    Called by ``ChatkitClient.from_settings`` with ``CHATKIT_LOG_LEVEL``.
    The host application owns handlers and formatting; the package only adds
    a NullHandler so an unconfigured app prints nothing. Unknown level names
    raise ConfigurationError.
    """

    normalized = (level or "").strip().upper()
    if normalized not in _LEVELS:
        raise ConfigurationError(f"Unknown log level {level!r}; expected one of {', '.join(_LEVELS)}")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(normalized)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())
    return package_logger

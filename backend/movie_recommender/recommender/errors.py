"""
Error taxonomy
==============

Generative failures (ExternalServiceError and subclasses) never leave the
resolver; they only show up in logs. PersistenceError never leaves the
request log writer.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Cause of a generative failure."""
    CONFIG = "config"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"


class RecommenderError(Exception):
    """Base class for every error raised by this package."""


class ExternalServiceError(RecommenderError):
    """
    Generative service call failed.

    Attributes:
        kind: ErrorKind of the cause
        status_code: HTTP status of the upstream reply, if one was received
        payload: decoded upstream body (or error object), if any
    """
    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class ConfigError(ExternalServiceError):
    """No credential configured; permanent until reconfigured."""
    kind = ErrorKind.CONFIG


class GenerationTimeoutError(ExternalServiceError):
    """The call exceeded the configured timeout."""
    kind = ErrorKind.TIMEOUT


class UpstreamError(ExternalServiceError):
    """Malformed, empty or explicit-error payload, or a failed transport."""
    kind = ErrorKind.UPSTREAM


class PersistenceError(RecommenderError):
    """Request log write failed."""

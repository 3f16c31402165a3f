"""
Error taxonomy for the gateway.

Client-facing failures are exceptions carrying the HTTP status they map to.
Upstream failures never raise: the orchestrator classifies them by kind and
decides whether to retry or move on.
"""

from enum import Enum


class GatewayError(Exception):
    """Base class for errors rendered to the client as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    status_code = 400


class ConfigurationError(GatewayError):
    status_code = 500


class UpstreamGenerationError(GatewayError):
    """Every model candidate was tried and none produced text."""

    status_code = 502


class UpstreamErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"   # 429
    NOT_FOUND = "not_found"         # 404
    FORBIDDEN = "forbidden"         # 403
    TRANSIENT = "transient"         # anything else, including transport failures

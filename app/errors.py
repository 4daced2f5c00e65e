"""Errors surfaced to ``/verify`` callers."""
from __future__ import annotations


class VerificationError(RuntimeError):
    """Base class for failures rendered as ``{"status": "failed", "message": ...}``."""

    status_code = 500
    message = "Internal server error while verifying PoH status"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class ClientInputError(VerificationError):
    status_code = 400


class MissingAddressError(ClientInputError):
    message = "Missing required parameter: address"


class InvalidAddressError(ClientInputError):
    message = "Invalid Ethereum address format"


class RateLimitExceededError(VerificationError):
    status_code = 429
    message = "Rate limit exceeded. Please try again later."


class UpstreamUnavailableError(VerificationError):
    """The PoH API signalled that it is throttling this proxy."""

    status_code = 503
    message = "Service temporarily unavailable. Please try again later."


class UpstreamFailureError(VerificationError):
    """Any other PoH API failure: bad status, bad body or transport error."""

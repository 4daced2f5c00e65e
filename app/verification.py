"""Request orchestration for ``/verify``."""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from app.cache import VerificationCache
from app.clients.linea_poh import LineaPohClient
from app.config import Settings
from app.errors import (
    InvalidAddressError,
    MissingAddressError,
    RateLimitExceededError,
    UpstreamFailureError,
    UpstreamUnavailableError,
)
from app.models import Verdict, VerificationResult, indicates_rate_limiting
from app.rate_limit import RateLimiter
from app.utils import is_valid_address

LOGGER = logging.getLogger(__name__)


class PohClient(Protocol):
    def verify(self, address: str) -> VerificationResult:
        ...


class VerificationService:
    """Owns the result cache and rate-limit windows for one process."""

    def __init__(self, client: PohClient, cache: VerificationCache, rate_limiter: RateLimiter) -> None:
        self.client = client
        self.cache = cache
        self.rate_limiter = rate_limiter

    @classmethod
    def from_settings(cls, settings: Settings) -> "VerificationService":
        return cls(
            client=LineaPohClient(settings),
            cache=VerificationCache(settings.cache_ttl_ms),
            rate_limiter=RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_ms),
        )

    def verify(self, client_id: str, address: Optional[str]) -> Verdict:
        """Resolve the PoH verdict for ``address`` on behalf of ``client_id``.

        Raises a ``VerificationError`` subclass for every non-verdict outcome.
        """

        if not self.rate_limiter.allow(client_id):
            LOGGER.warning(
                "rate limit exceeded",
                extra={
                    "address": address,
                    "client_ip": client_id,
                    "status": RateLimitExceededError.status_code,
                },
            )
            raise RateLimitExceededError()

        if not address:
            LOGGER.warning(
                "Missing address",
                extra={"client_ip": client_id, "status": MissingAddressError.status_code, "detail": MissingAddressError.message},
            )
            raise MissingAddressError()
        if not is_valid_address(address):
            LOGGER.warning(
                "Invalid address",
                extra={
                    "address": address,
                    "client_ip": client_id,
                    "status": InvalidAddressError.status_code,
                    "detail": InvalidAddressError.message,
                },
            )
            raise InvalidAddressError()

        cached = self.cache.get(address)
        if cached is not None:
            LOGGER.debug("cache hit", extra={"address": address})
            return cached

        result = self.client.verify(address)
        if isinstance(result, Verdict):
            self.cache.put(address, result)
            return result

        error_cls = UpstreamUnavailableError if indicates_rate_limiting(result) else UpstreamFailureError
        LOGGER.error(
            "Error verifying PoH",
            extra={
                "address": address,
                "client_ip": client_id,
                "status": error_cls.status_code,
                "detail": result.detail,
            },
        )
        raise error_cls(result.detail)

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            close()

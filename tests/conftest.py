from __future__ import annotations

from unittest import mock

import pytest

from app.cache import VerificationCache
from app.models import Verdict
from app.rate_limit import RateLimiter
from app.verification import VerificationService


class FakePohClient:
    def __init__(self) -> None:
        self.results = {}
        self.calls = []

    def verify(self, address):  # noqa: D401
        """Record the call and return the preset result for the address."""

        self.calls.append(address)
        return self.results.get(address, Verdict.NOT_HUMAN)


@pytest.fixture()
def fake_poh():
    return FakePohClient()


@pytest.fixture()
def clock():
    return mock.Mock(return_value=0.0)


@pytest.fixture()
def make_service(fake_poh, clock):
    def factory(*, limit: int = 100, window_ms: int = 60_000, ttl_ms: int = 300_000) -> VerificationService:
        return VerificationService(
            client=fake_poh,
            cache=VerificationCache(ttl_ms, clock=clock),
            rate_limiter=RateLimiter(limit, window_ms, clock=clock),
        )

    return factory

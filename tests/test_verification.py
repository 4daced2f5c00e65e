from __future__ import annotations

import logging

import pytest

from app.errors import (
    InvalidAddressError,
    MissingAddressError,
    RateLimitExceededError,
    UpstreamFailureError,
    UpstreamUnavailableError,
)
from app.models import TransportError, UpstreamFormatError, UpstreamStatusError, Verdict

HUMAN_ADDRESS = "0x" + "A" * 40
OTHER_ADDRESS = "0x" + "b" * 40


def test_human_verdict_is_cached(make_service, fake_poh):
    fake_poh.results[HUMAN_ADDRESS] = Verdict.HUMAN
    service = make_service()

    assert service.verify("c", HUMAN_ADDRESS) is Verdict.HUMAN
    assert service.verify("c", HUMAN_ADDRESS.lower()) is Verdict.HUMAN
    assert fake_poh.calls == [HUMAN_ADDRESS]


def test_not_human_verdict_is_cached(make_service, fake_poh):
    service = make_service()

    assert service.verify("c", OTHER_ADDRESS) is Verdict.NOT_HUMAN
    assert service.verify("c", OTHER_ADDRESS) is Verdict.NOT_HUMAN
    assert len(fake_poh.calls) == 1


def test_expired_entry_triggers_new_upstream_call(make_service, fake_poh, clock):
    fake_poh.results[HUMAN_ADDRESS] = Verdict.HUMAN
    service = make_service(ttl_ms=1_000)
    service.verify("c", HUMAN_ADDRESS)

    clock.return_value = 1_000.0
    service.verify("c", HUMAN_ADDRESS)

    assert len(fake_poh.calls) == 2


@pytest.mark.parametrize("address", [None, ""])
def test_missing_address(make_service, fake_poh, address):
    with pytest.raises(MissingAddressError):
        make_service().verify("c", address)
    assert fake_poh.calls == []


def test_invalid_address_never_reaches_upstream(make_service, fake_poh):
    service = make_service()

    with pytest.raises(InvalidAddressError):
        service.verify("c", "not-an-address")
    assert fake_poh.calls == []
    assert len(service.cache) == 0


def test_rate_limit_checked_before_validation(make_service):
    service = make_service(limit=1)
    with pytest.raises(MissingAddressError):
        service.verify("c", None)

    with pytest.raises(RateLimitExceededError):
        service.verify("c", HUMAN_ADDRESS)


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (UpstreamStatusError(code=429), UpstreamUnavailableError),
        (UpstreamStatusError(code=503, body="rate limit exceeded"), UpstreamUnavailableError),
        (UpstreamStatusError(code=503, body="Service Unavailable"), UpstreamFailureError),
        (UpstreamFormatError(raw="maybe"), UpstreamFailureError),
        (TransportError(message="Name or service not known"), UpstreamFailureError),
    ],
)
def test_upstream_errors_are_classified_and_not_cached(make_service, fake_poh, result, expected):
    fake_poh.results[HUMAN_ADDRESS] = result
    service = make_service()

    with pytest.raises(expected):
        service.verify("c", HUMAN_ADDRESS)
    with pytest.raises(expected):
        service.verify("c", HUMAN_ADDRESS)

    assert len(fake_poh.calls) == 2
    assert len(service.cache) == 0


def test_upstream_failure_is_logged_with_address_and_detail(make_service, fake_poh, caplog):
    caplog.set_level(logging.DEBUG, logger="app.verification")
    fake_poh.results[HUMAN_ADDRESS] = UpstreamStatusError(code=500)

    with pytest.raises(UpstreamFailureError):
        make_service().verify("c", HUMAN_ADDRESS)

    [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.address == HUMAN_ADDRESS
    assert "500" in record.detail
    assert record.status == 500


def test_missing_address_is_logged(make_service, caplog):
    caplog.set_level(logging.DEBUG, logger="app.verification")

    with pytest.raises(MissingAddressError):
        make_service().verify("10.0.0.1", None)

    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert record.client_ip == "10.0.0.1"
    assert record.status == 400
    assert record.detail == MissingAddressError.message


def test_invalid_address_is_logged_with_address(make_service, caplog):
    caplog.set_level(logging.DEBUG, logger="app.verification")

    with pytest.raises(InvalidAddressError):
        make_service().verify("c", "not-an-address")

    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert record.address == "not-an-address"
    assert record.detail == InvalidAddressError.message


def test_rate_limited_request_is_logged_with_address(make_service, caplog):
    service = make_service(limit=1)
    service.verify("c", OTHER_ADDRESS)
    caplog.set_level(logging.DEBUG, logger="app.verification")

    with pytest.raises(RateLimitExceededError):
        service.verify("c", OTHER_ADDRESS)

    [record] = caplog.records
    assert record.address == OTHER_ADDRESS
    assert record.status == 429

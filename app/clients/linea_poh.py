"""Linea Proof of Humanity API client."""
from __future__ import annotations

import logging
from typing import Optional

import requests
from requests import Response

from app.config import Settings
from app.models import (
    TransportError,
    UpstreamFormatError,
    UpstreamStatusError,
    Verdict,
    VerificationResult,
)

LOGGER = logging.getLogger(__name__)


class LineaPohClient:
    """Single-shot HTTP client for the PoH v2 endpoint.

    Failures come back as tagged results instead of exceptions. There are no
    retries, and unless ``poh_api_timeout_seconds`` is configured the request
    has no timeout.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._base_url = settings.poh_api_base_url.rstrip("/")
        self._timeout = settings.poh_api_timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "text/plain"})

    def verify(self, address: str) -> VerificationResult:
        """Ask the PoH API whether ``address`` belongs to a verified human."""

        url = f"{self._base_url}/{address}"
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            LOGGER.warning("poh request failed", extra={"address": address, "detail": str(exc)})
            return TransportError(message=str(exc))
        return self._interpret(response)

    def close(self) -> None:
        self._session.close()

    def _interpret(self, response: Response) -> VerificationResult:
        if not 200 <= response.status_code < 300:
            return UpstreamStatusError(code=response.status_code, body=response.text[:200])
        text = response.text.strip()
        if text == "true":
            return Verdict.HUMAN
        if text == "false":
            return Verdict.NOT_HUMAN
        return UpstreamFormatError(raw=text)

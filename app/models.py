"""Verification result types returned by the upstream client."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

RATE_LIMIT_MARKERS = ("rate limit", "too many requests")


class Verdict(str, Enum):
    """Successful PoH answer. Only these values are cached."""

    HUMAN = "human"
    NOT_HUMAN = "not_human"


@dataclass(frozen=True)
class UpstreamStatusError:
    """The PoH API answered with a non-success HTTP status."""

    code: int
    body: str = ""

    @property
    def detail(self) -> str:
        message = f"Linea PoH API returned status {self.code}"
        if self.body:
            message = f"{message}: {self.body[:200]}"
        return message


@dataclass(frozen=True)
class UpstreamFormatError:
    """The PoH API answered 2xx with something other than ``true``/``false``."""

    raw: str

    @property
    def detail(self) -> str:
        return f"Unexpected response from Linea PoH API: {self.raw[:200]}"


@dataclass(frozen=True)
class TransportError:
    """The request never produced an HTTP response."""

    message: str

    @property
    def detail(self) -> str:
        return f"Failed to call Linea PoH API: {self.message}"


UpstreamError = Union[UpstreamStatusError, UpstreamFormatError, TransportError]
VerificationResult = Union[Verdict, UpstreamError]


def indicates_rate_limiting(error: UpstreamError) -> bool:
    """Guess whether ``error`` means the PoH API is throttling us.

    A 429 status counts, as does any error text mentioning rate limiting. The
    upstream documents no throttling contract, so the text match is a
    heuristic.
    """

    if isinstance(error, UpstreamStatusError) and error.code == 429:
        return True
    text = error.detail.lower()
    return any(marker in text for marker in RATE_LIMIT_MARKERS)

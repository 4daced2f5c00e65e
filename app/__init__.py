"""Linea PoH proxy package; re-exports the pieces ``main`` wires together."""

from .config import Settings, get_settings
from .logging_config import configure_logging
from .models import Verdict
from .verification import VerificationService

__all__ = ["Settings", "get_settings", "configure_logging", "Verdict", "VerificationService"]

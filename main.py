"""FastAPI application proxying Linea Proof of Humanity checks for Layer3."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import VerificationError
from app.logging_config import configure_logging
from app.models import Verdict
from app.verification import VerificationService

settings = get_settings()
configure_logging(settings.log_level)
LOGGER = logging.getLogger(__name__)

verifier = VerificationService.from_settings(settings)


@asynccontextmanager
async def lifespan(_: FastAPI):
    LOGGER.info("%s server running on port %s", settings.service_name, settings.port)
    LOGGER.info("Health check: http://localhost:%s/health", settings.port)
    LOGGER.info("Verify endpoint: http://localhost:%s/verify?address=0x...", settings.port)
    yield
    verifier.close()


app = FastAPI(title=f"{settings.service_name} for Layer3", version=settings.version, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def client_ip_of(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@app.middleware("http")
async def log_unhandled_errors(request: Request, call_next):  # type: ignore[override]
    try:
        return await call_next(request)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Unhandled exception", extra={"client_ip": client_ip_of(request)})
        raise exc


@app.exception_handler(VerificationError)
async def verification_error_handler(_: Request, exc: VerificationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "failed", "message": exc.message},
    )


def get_verifier() -> VerificationService:
    """Provide the process-wide verification service."""

    return verifier


@app.get("/verify")
def verify(
    request: Request,
    address: Optional[str] = Query(None, description="Ethereum address, 0x followed by 40 hex chars."),
    service: VerificationService = Depends(get_verifier),
) -> dict:
    """Layer3 Custom API Integration endpoint."""

    verdict = service.verify(client_ip_of(request), address)
    if verdict is Verdict.HUMAN:
        return {"status": "success"}
    return {"status": "failed"}


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": settings.service_name}


@app.get("/")
def index() -> dict:
    """Describe the service and its active limits."""

    return {
        "service": f"{settings.service_name} for Layer3",
        "version": settings.version,
        "endpoints": {
            "verify": "/verify?address=0x...",
            "health": "/health",
        },
        "description": (
            "REST API proxy for Linea Proof of Humanity verification, "
            "compatible with Layer3 Custom API Integration"
        ),
        "cache": {"ttlMs": settings.cache_ttl_ms},
        "rateLimit": {
            "windowMs": settings.rate_limit_window_ms,
            "maxRequests": settings.rate_limit_max_requests,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=False)

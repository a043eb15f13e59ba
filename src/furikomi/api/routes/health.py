"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from furikomi.core.exceptions import ReferenceDataError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
def ready(request: Request) -> JSONResponse:
    """Ready once the bank reference table can be loaded."""
    try:
        banks = request.app.state.reference_data.get_banks()
    except ReferenceDataError as exc:
        return JSONResponse({"status": "unavailable", "detail": str(exc)}, status_code=503)
    return JSONResponse({"status": "ready", "banks": len(banks)})

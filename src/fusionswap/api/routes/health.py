"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from fusionswap.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "Server is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/test-api")
async def test_api_key():
    """Check that the 1inch API key is configured."""
    settings = get_settings()
    if not settings.inch_api_key:
        return JSONResponse(status_code=500, content={"error": "INCH_API_KEY not configured"})
    return {"message": "API key is configured", "keyLength": len(settings.inch_api_key)}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "fusionswap",
        "version": "0.1.0",
        "config": settings.get_safe_dict(),
    }

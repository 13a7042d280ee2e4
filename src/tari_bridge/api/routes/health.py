"""Health check endpoints."""

from fastapi import APIRouter

from tari_bridge import __version__
from tari_bridge.config import get_settings
from tari_bridge.signing.factory import get_signing_provider

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "tari-bridge"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration and signer status."""
    settings = get_settings()
    signer = get_signing_provider()
    signer_healthy = await signer.health_check()
    return {
        "status": "healthy" if signer_healthy else "degraded",
        "service": "tari-bridge",
        "version": __version__,
        "signer": {"class": signer.__class__.__name__, "healthy": signer_healthy},
        "config": settings.get_safe_dict(),
    }

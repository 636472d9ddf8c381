"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from config.config import Config
from server.dependencies import get_config
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(config: Config = Depends(get_config)):
    """Health check endpoint; lists missing provider settings without failing."""
    missing = config.missing_keys()
    return HealthResponseDTO(
        status="healthy" if not missing else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        missing_config=missing,
    )

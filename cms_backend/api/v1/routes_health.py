# File: cms_backend/api/v1/routes_health.py

from datetime import datetime, timezone

from fastapi import APIRouter

from cms_backend.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

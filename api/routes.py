"""
Service routes that sit outside the member API.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from database.session import check_database
from utils.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
@router.get("/api/health", include_in_schema=False)
async def health() -> Dict[str, Any]:
    """Liveness payload.  Always 200; ``database`` reports the store probe."""
    connected = await check_database()
    return HealthResponse(
        database="connected" if connected else "disconnected",
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")

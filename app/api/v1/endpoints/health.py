from fastapi import APIRouter
from datetime import datetime, timezone
from typing import Dict, Any

from app.core.config import settings
from app.engine.achievements import default_catalog
from app.engine.intent_classifier import RULE_PRIORITY
from app.engine.locale import SUPPORTED_CURRENCIES

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def health_check():
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready", response_model=Dict[str, Any])
async def readiness_check():
    try:
        catalog = default_catalog()
        return {
            "status": "ready",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "achievements": len(catalog),
            "currencies": len(SUPPORTED_CURRENCIES),
            "topics": [category.value for category in RULE_PRIORITY],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    except Exception as e:
        return {
            "status": "not_ready",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "error": str(e),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


@router.get("/live", response_model=Dict[str, Any])
async def liveness_check():
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

"""
Health check endpoints
"""

import psutil
from fastapi import APIRouter

from quizrank.core.config import settings
from quizrank.core.database import DatabaseHealthCheck

router = APIRouter()


@router.get("/health")
def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health/detailed")
def detailed_health_check():
    """Database connectivity and process resources"""
    database = DatabaseHealthCheck.check_connection()
    memory = psutil.virtual_memory()

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
        "checks": {
            "database": database,
            "resources": {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "memory_available_mb": memory.available / (1024 * 1024),
            },
        },
    }

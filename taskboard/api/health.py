"""Health check and monitoring endpoints"""

from fastapi import APIRouter
from taskboard.db.session import (
    POOL_CRITICAL_PERCENT,
    POOL_WARNING_PERCENT,
    log_pool_stats,
    pool_utilization,
)

router = APIRouter(prefix="/api/health", tags=["health"])


def pool_status(utilization: float) -> str:
    if utilization >= POOL_CRITICAL_PERCENT:
        return "critical"
    if utilization >= POOL_WARNING_PERCENT:
        return "warning"
    return "healthy"


@router.get("/pool")
async def get_pool_health():
    """
    Connection pool health.

    Returns the pool counters, the utilization of size + max_overflow and a
    status of healthy, warning or critical.
    """
    stats = log_pool_stats("health check")
    utilization = pool_utilization(stats)

    return {
        "status": pool_status(utilization),
        "pool_size": stats["size"],
        "max_overflow": stats["max_overflow"],
        "available": stats["checked_in"],
        "in_use": stats["checked_out"],
        "overflow": stats["overflow"],
        "utilization_percent": round(utilization, 2),
        "total_capacity": stats["size"] + stats["max_overflow"],
    }


@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "taskboard-backend",
    }

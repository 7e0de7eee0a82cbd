from fastapi import APIRouter
from taskboard.api import health
from taskboard.features.tasks import router as tasks_router, dashboard_router

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(tasks_router)
api_router.include_router(dashboard_router)

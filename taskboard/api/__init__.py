# API module exports
from taskboard.api import health
from taskboard.api.base import api_router

__all__ = ["health", "api_router"]

"""FastAPI dependencies resolving collaborators from app.state."""

from fastapi import Request

from app.cache.safe_cache import SafeCache
from app.services.resolution_service import ResolutionService


def get_resolution_service(request: Request) -> ResolutionService:
    return request.app.state.resolution_service


def get_cache(request: Request) -> SafeCache:
    return request.app.state.cache

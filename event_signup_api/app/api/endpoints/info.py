"""Service information endpoints."""

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health")
def health(request: Request) -> dict:
    """Liveness probe reporting the service name and version."""
    settings = request.app.state.settings
    return {"status": "ok", "name": settings.project_name, "version": settings.api_version}

"""
Health Router

The wizard calls GET /health before it starts a generation run.
"""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check - API is running."""
    return {"status": "OK", "message": "Server is running"}

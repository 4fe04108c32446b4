from fastapi import APIRouter
from pydantic import BaseModel, Field

from storefront.config import settings
from storefront.utils import utc_now

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status", example="healthy")
    timestamp: str = Field(..., description="Server time (UTC, ISO 8601)", example="2025-01-01T00:00:00.000Z")
    environment: str = Field(..., description="Deployment environment", example="dev")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="""
    Health check endpoint for monitoring and load balancer health checks.

    Returns the service status, server time, and environment.
    """,
    responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "timestamp": "2025-01-01T00:00:00.000Z",
                        "environment": "dev"
                    }
                }
            }
        }
    }
)
async def health():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        environment=settings.environment
    )

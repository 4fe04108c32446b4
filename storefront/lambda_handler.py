"""
AWS Lambda entry point.

API Gateway events are translated to ASGI by Mangum and served by the same
FastAPI app the web process runs.
"""
import json
import logging

from mangum import Mangum

from storefront.config import settings
from storefront.main import app
from storefront.utils import utc_now

logger = logging.getLogger(__name__)

# Lambda handler function
handler = Mangum(app, lifespan="off")


def health_check(event, context):
    """Standalone health handler that skips the ASGI stack"""
    logger.info("Lambda health check")
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({
            "status": "healthy",
            "timestamp": utc_now(),
            "environment": settings.environment,
        }),
    }

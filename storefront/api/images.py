from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import Optional
import base64
import logging

from storefront.exceptions import BadRequestError
from storefront.services import get_image_provider
from storefront.services.image_providers.base import ImageProvider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])

# Product images are immutable once uploaded
IMAGE_CACHE_CONTROL = "public, max-age=31536000"


class ImageFetchRequest(BaseModel):
    url: Optional[str] = Field(None, description="Public URL of an image in the product bucket")


class ImageFetchResponse(BaseModel):
    image: str = Field(..., description="Base64-encoded image bytes")
    contentType: str = Field(..., description="Image MIME type", example="image/jpeg")


@router.post(
    "/fetch-s3-image",
    response_model=ImageFetchResponse,
    summary="Fetch an image as base64",
    description="Read a product image from the bucket and return it base64-encoded.",
    responses={
        400: {"description": "URL missing or outside the product bucket"},
        404: {"description": "Image not found"}
    }
)
async def fetch_s3_image(
    request: ImageFetchRequest,
    image_provider: ImageProvider = Depends(get_image_provider)
):
    if not request.url or not request.url.strip():
        raise BadRequestError("URL is required")

    logger.info(f"Fetching image from S3: {request.url}")
    data, content_type, _ = image_provider.get_image(request.url.strip())
    return ImageFetchResponse(image=base64.b64encode(data).decode("ascii"), contentType=content_type)


@router.get(
    "/s3-image",
    summary="Proxy an image",
    description="Stream a product image from the bucket with long-lived cache headers.",
    responses={
        200: {"description": "Raw image bytes", "content": {"image/*": {}}},
        400: {"description": "URL missing or outside the product bucket"},
        404: {"description": "Image not found"}
    }
)
async def proxy_s3_image(
    url: Optional[str] = Query(None, description="Public URL of an image in the product bucket"),
    image_provider: ImageProvider = Depends(get_image_provider)
):
    if not url or not url.strip():
        raise BadRequestError("URL is required")

    data, content_type, content_length = image_provider.get_image(url.strip())
    return Response(
        content=data,
        media_type=content_type,
        headers={
            "Content-Length": str(content_length if content_length is not None else len(data)),
            "Cache-Control": IMAGE_CACHE_CONTROL,
        },
    )

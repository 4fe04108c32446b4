from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Any, Dict, List
import logging

from storefront.api.responses import created, success
from storefront.auth.dependencies import require_admin
from storefront.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from storefront.services.testimonial_service import TestimonialService, parse_testimonial_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Testimonials"])


class TestimonialListResponse(BaseModel):
    items: List[Dict[str, Any]] = Field(..., description="Testimonials ordered by id")


def get_testimonial_service() -> TestimonialService:
    """Dependency to get testimonial service"""
    return TestimonialService()


@router.get(
    "/testimonials-list",
    response_model=TestimonialListResponse,
    summary="List testimonials",
)
async def list_testimonials(testimonial_service: TestimonialService = Depends(get_testimonial_service)):
    testimonials = testimonial_service.list_testimonials()
    logger.info(f"Retrieved {len(testimonials)} testimonials")
    return {"items": testimonials}


@router.post(
    "/add-testimonial",
    summary="Add a testimonial",
    description="Store a testimonial under the next integer id. `rating` must be between 1 and 5.",
    responses={
        201: {"description": "Testimonial added successfully"},
        400: {"description": "Invalid request data"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"}
    }
)
async def add_testimonial(
    testimonial: TestimonialCreate,
    current_user: dict = Depends(require_admin),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
):
    stored = testimonial_service.add_testimonial(testimonial)
    logger.info(f"Testimonial added with id {stored['id']}")
    return created({"id": stored["id"], "message": "Testimonial added successfully"})


@router.put(
    "/update-testimonial/{testimonial_id}",
    summary="Update a testimonial",
    description="Update only the provided fields of a testimonial.",
    responses={
        200: {"description": "Testimonial updated successfully"},
        400: {"description": "Invalid id or request data"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "Testimonial not found"}
    }
)
async def update_testimonial(
    testimonial_id: str,
    testimonial: TestimonialUpdate,
    current_user: dict = Depends(require_admin),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
):
    parsed_id = parse_testimonial_id(testimonial_id)
    testimonial_service.update_testimonial(parsed_id, testimonial)
    return success({"id": parsed_id, "message": "Testimonial updated successfully"})


@router.delete(
    "/delete-testimonial/{testimonial_id}",
    summary="Delete a testimonial",
    responses={
        200: {"description": "Testimonial deleted successfully"},
        400: {"description": "Invalid id"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "Testimonial not found"}
    }
)
async def delete_testimonial(
    testimonial_id: str,
    current_user: dict = Depends(require_admin),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
):
    parsed_id = parse_testimonial_id(testimonial_id)
    testimonial_service.delete_testimonial(parsed_id)
    logger.info(f"Testimonial deleted: {parsed_id}")
    return success({"id": parsed_id, "message": "Testimonial deleted successfully"})

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Any, Dict, List
import logging

from storefront.api.responses import created
from storefront.auth.dependencies import require_admin
from storefront.schemas.enquiry import EnquiryCreate
from storefront.services.enquiry_service import EnquiryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Enquiries"])


class EnquiryListResponse(BaseModel):
    items: List[Dict[str, Any]]


def get_enquiry_service() -> EnquiryService:
    """Dependency to get enquiry service"""
    return EnquiryService()


@router.post(
    "/save-customer-enquiry",
    summary="Submit a customer enquiry",
    description="""
    Store an enquiry from the contact form and alert the shop by email and SMS
    when those channels are configured.

    **Validation:**
    - `name`, `email`, `phone` and `query` are required
    - `phone` accepts 7 to 20 digits, spaces, `+`, `-`, `.` and parentheses
    """,
    responses={
        201: {
            "description": "Enquiry submitted successfully",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "statusCode": 201,
                        "data": {
                            "message": "Enquiry submitted successfully",
                            "confirmationEmail": "asha@example.com",
                            "data": {"id": "9b2f7c1e-6a0f-4d7e-a1b2-0c3d4e5f6a7b"}
                        },
                        "timestamp": "2025-01-01T00:00:00.000Z"
                    }
                }
            }
        },
        400: {"description": "Missing field, invalid email or invalid phone number"}
    }
)
async def save_customer_enquiry(
    enquiry: EnquiryCreate,
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    stored = enquiry_service.create_enquiry(enquiry)
    return created({
        "message": "Enquiry submitted successfully",
        "confirmationEmail": enquiry.email,
        "data": stored,
    })


@router.get(
    "/enquiries-list",
    response_model=EnquiryListResponse,
    summary="List customer enquiries",
    responses={
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"}
    }
)
async def list_enquiries(
    current_user: dict = Depends(require_admin),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
):
    return {"items": enquiry_service.list_enquiries()}

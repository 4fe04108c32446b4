from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from storefront.schemas.enquiry import NotificationRequest
from storefront.services.enquiry_service import EnquiryService
from storefront.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notifications"])

FIELDS_REQUIRED = "All fields are required."


def get_enquiry_service() -> EnquiryService:
    return EnquiryService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def _fields_required() -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": FIELDS_REQUIRED})


@router.post(
    "/sendEmail",
    summary="Email an enquiry to the shop",
    description="Store the contact form enquiry, then email it to the shop owners.",
    responses={400: {"description": FIELDS_REQUIRED}}
)
async def send_email(
    enquiry: NotificationRequest,
    enquiry_service: EnquiryService = Depends(get_enquiry_service),
    notification_service: NotificationService = Depends(get_notification_service)
):
    if not enquiry.is_complete():
        return _fields_required()

    stored = enquiry_service.save_enquiry(enquiry.model_dump())
    if not notification_service.send_email(stored):
        return {"message": "Enquiry saved. Email notifications are not configured."}
    return {"message": "Email sent successfully."}


@router.post(
    "/sendSMS",
    summary="Text an enquiry to the shop",
    description="Send the contact form enquiry to every admin phone number by SMS.",
    responses={400: {"description": FIELDS_REQUIRED}}
)
async def send_sms(
    enquiry: NotificationRequest,
    notification_service: NotificationService = Depends(get_notification_service)
):
    if not enquiry.is_complete():
        return _fields_required()

    sent = notification_service.send_sms(enquiry.model_dump())
    logger.info(f"Enquiry SMS delivered to {len(sent)} number(s)")
    return {"message": "SMS sent successfully."}

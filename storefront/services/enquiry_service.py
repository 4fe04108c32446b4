from typing import Any, Dict, List, Optional
import logging
import uuid

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_table, scan_all, to_item
from storefront.exceptions import AppError
from storefront.schemas.enquiry import EnquiryCreate
from storefront.services.notification_service import NotificationService
from storefront.utils import utc_now

logger = logging.getLogger(__name__)


class EnquiryService:
    """Service layer for customer enquiries"""

    def __init__(self, table=None, notification_service: Optional[NotificationService] = None):
        self.table = table if table is not None else get_table(settings.enquiries_table)
        self.notification_service = notification_service or NotificationService()

    def save_enquiry(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store an enquiry record as given, stamped with an id and date"""
        item = {**data, "id": str(uuid.uuid4()), "date": utc_now()}
        try:
            self.table.put_item(Item=to_item(item))
        except ClientError as e:
            logger.error(f"Unable to store enquiry from {data.get('name')}: {e}", exc_info=True)
            raise
        return item

    def create_enquiry(self, data: EnquiryCreate) -> Dict[str, Any]:
        """Store a validated enquiry and alert the shop"""
        logger.info(f"Creating customer enquiry from: {data.name} ({data.email})")
        enquiry = self.save_enquiry(data.model_dump())

        try:
            self.notification_service.send_email(enquiry)
        except AppError as e:
            logger.warning(f"Enquiry {enquiry['id']} stored but email alert failed: {e.message}")
        self.notification_service.send_sms(enquiry)

        logger.info(f"Enquiry created successfully for: {data.name}")
        return enquiry

    def list_enquiries(self) -> List[Dict[str, Any]]:
        try:
            enquiries = scan_all(self.table)
        except ClientError as e:
            logger.error(f"Unable to fetch enquiries: {e}", exc_info=True)
            raise
        logger.info(f"Retrieved {len(enquiries)} enquiries")
        return enquiries

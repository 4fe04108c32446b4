from typing import Any, Dict, List
import logging

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_table, scan_all, to_item, from_item, build_update
from storefront.exceptions import BadRequestError, NotFoundError
from storefront.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from storefront.utils import utc_now

logger = logging.getLogger(__name__)


def parse_testimonial_id(raw: str) -> int:
    """Testimonial ids are integers; path parameters arrive as text"""
    if raw is None or not str(raw).strip():
        raise BadRequestError("Testimonial ID is required")
    try:
        return int(str(raw).strip())
    except ValueError:
        raise BadRequestError("Invalid testimonial ID format")


class TestimonialService:
    """Service layer for customer testimonials"""

    def __init__(self, table=None):
        self.table = table if table is not None else get_table(settings.testimonials_table)

    def list_testimonials(self) -> List[Dict[str, Any]]:
        try:
            testimonials = scan_all(self.table)
        except ClientError as e:
            logger.error(f"Unable to fetch testimonials: {e}", exc_info=True)
            raise
        return sorted(testimonials, key=lambda t: t.get("id", 0))

    def add_testimonial(self, data: TestimonialCreate) -> Dict[str, Any]:
        """Store a testimonial under the next free integer id"""
        existing = self.list_testimonials()
        new_id = max((t.get("id") or 0 for t in existing), default=0) + 1

        item = {
            "id": new_id,
            "category": data.category,
            "product": data.product,
            "product-id": data.product_id,
            "comments": data.comments,
            "rating": data.rating,
            "customerName": data.customer_name or "",
            "updatedAt": utc_now(),
        }
        item = {k: v for k, v in item.items() if v is not None}

        try:
            self.table.put_item(Item=to_item(item))
        except ClientError as e:
            logger.error(f"Unable to add testimonial: {e}", exc_info=True)
            raise
        return from_item(to_item(item))

    def update_testimonial(self, testimonial_id: int, data: TestimonialUpdate) -> Dict[str, Any]:
        updates = data.model_dump(by_alias=True, exclude_unset=True)
        if not updates:
            raise BadRequestError("Testimonial data is required")
        updates["updatedAt"] = utc_now()

        expression, names, values = build_update(updates)
        names["#pk"] = "id"

        try:
            result = self.table.update_item(
                Key={"id": testimonial_id},
                UpdateExpression=expression,
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise NotFoundError("Testimonial")
            logger.error(f"Unable to update testimonial with id {testimonial_id}: {e}", exc_info=True)
            raise
        return from_item(result.get("Attributes", {}))

    def delete_testimonial(self, testimonial_id: int) -> None:
        try:
            self.table.delete_item(
                Key={"id": testimonial_id},
                ConditionExpression="attribute_exists(#pk)",
                ExpressionAttributeNames={"#pk": "id"},
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise NotFoundError("Testimonial")
            logger.error(f"Unable to delete testimonial with id {testimonial_id}: {e}", exc_info=True)
            raise

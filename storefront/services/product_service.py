from typing import Any, Dict, List, Optional, Tuple
import logging
import uuid

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_table, scan_all, to_item, from_item, get_item, build_update
from storefront.exceptions import BadRequestError, NotFoundError
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.services import get_image_provider
from storefront.services.image_providers.base import ImageProvider
from storefront.utils import utc_now

logger = logging.getLogger(__name__)

# (filename, bytes, content type) of an uploaded image
ImageFile = Tuple[str, bytes, Optional[str]]


def in_category(product: Dict[str, Any], path: str) -> bool:
    """True when the product is filed under exactly this category path"""
    category = product.get("category")
    if isinstance(category, str):
        return category == path
    return path in (category or [])


class ProductService:
    """Service layer for product operations"""

    def __init__(self, table=None, image_provider: Optional[ImageProvider] = None):
        self.table = table if table is not None else get_table(settings.products_table)
        self.image_provider = image_provider or get_image_provider()

    def list_products(self) -> List[Dict[str, Any]]:
        """All products in the catalogue"""
        try:
            return scan_all(self.table)
        except ClientError as e:
            logger.error(f"Unable to fetch all products: {e}", exc_info=True)
            raise

    def list_products_by_category(self, category: str) -> List[Dict[str, Any]]:
        """Products tagged with a category path

        ``contains`` also matches substrings of string-valued categories, so
        scanned items are narrowed to exact path matches.
        """
        if not category or not category.strip():
            raise BadRequestError("Category is required")
        try:
            candidates = scan_all(self.table, FilterExpression=Attr("category").contains(category))
        except ClientError as e:
            logger.error(f"Unable to fetch data for category {category}: {e}", exc_info=True)
            raise
        return [p for p in candidates if in_category(p, category)]

    def get_product(self, product_id: str) -> Dict[str, Any]:
        if not product_id or not product_id.strip():
            raise BadRequestError("Product ID is required")
        product = get_item(self.table, {"id": product_id})
        if product is None:
            logger.warning(f"Product not found: {product_id}")
            raise NotFoundError(f"Product with ID {product_id}")
        return product

    def add_product(self, product_data: ProductCreate, files: Optional[List[ImageFile]] = None) -> Dict[str, Any]:
        """Create a product, uploading its images under <product id>/"""
        product_id = str(uuid.uuid4())
        image_urls = self.image_provider.upload_multiple(product_id, files or [])

        item = {
            **product_data.model_dump(by_alias=True, exclude_none=True),
            "id": product_id,
            "images": image_urls,
            "createdAt": utc_now(),
        }
        item["variants"] = [
            v.model_dump(by_alias=True, exclude_none=True) for v in product_data.variants
        ]

        try:
            self.table.put_item(Item=to_item(item))
        except ClientError as e:
            logger.error(f"Unable to insert product {product_data.name}: {e}", exc_info=True)
            raise

        logger.info(f"Product added successfully: {product_data.name} ({product_id})")
        return from_item(to_item(item))

    def update_product(
        self,
        product_id: str,
        product_data: ProductUpdate,
        files: Optional[List[ImageFile]] = None
    ) -> Dict[str, Any]:
        """Update a product and reconcile its images with S3

        Images missing from ``existing_images`` are deleted from S3, new files are
        uploaded, and the stored list becomes retained + new. When
        ``existing_images`` is omitted all current images are kept.
        """
        existing = self.get_product(product_id)
        old_images: List[str] = existing.get("images") or []

        if product_data.existing_images is None:
            retained = list(old_images)
        else:
            retained = list(product_data.existing_images)

        for url in old_images:
            if url not in retained:
                self.image_provider.delete_image(url)

        new_urls = self.image_provider.upload_multiple(product_id, files or [])
        final_images = retained + new_urls

        updates = product_data.model_dump(exclude_unset=True, exclude={"existing_images"})
        if product_data.variants is not None:
            updates["variants"] = [
                v.model_dump(by_alias=True, exclude_none=True) for v in product_data.variants
            ]
        updates["images"] = final_images
        updates["updatedAt"] = utc_now()

        expression, names, values = build_update(updates)

        try:
            result = self.table.update_item(
                Key={"id": product_id},
                UpdateExpression=expression,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            logger.error(f"Failed to update product {product_id}: {e}", exc_info=True)
            raise

        logger.info(f"Product updated successfully: {product_id}")
        return from_item(result.get("Attributes", {}))

    def delete_product(self, product_id: str) -> None:
        """Delete a product and every image it references"""
        product = self.get_product(product_id)

        for url in product.get("images") or []:
            self.image_provider.delete_image(url)

        try:
            self.table.delete_item(Key={"id": product_id})
        except ClientError as e:
            logger.error(f"Failed to delete product {product_id}: {e}", exc_info=True)
            raise

        logger.info(f"Product deleted successfully: {product_id}")

    def catalogue(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """Products for the downloadable catalogue, sorted by name"""
        if category and category != "all":
            products = self.list_products_by_category(category)
        else:
            products = self.list_products()
        return sorted(products, key=lambda p: (p.get("name") or "").lower())

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List
import logging

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_table, scan_all
from storefront.schemas.category import CategoryChanges
from storefront.services.product_service import ProductService
from storefront.utils import slugify, utc_now

logger = logging.getLogger(__name__)

# BatchWriteItem accepts at most 25 requests per call
DELETE_BATCH_SIZE = 25
UPDATE_BATCH_SIZE = 10


class CategoryService:
    """Service layer for category operations"""

    def __init__(self, table=None, product_service: ProductService = None):
        self.table = table if table is not None else get_table(settings.categories_table)
        self.product_service = product_service or ProductService()

    @property
    def products_table(self):
        return self.product_service.table

    def list_categories(self) -> List[Dict[str, Any]]:
        """All categories, ordered by name"""
        try:
            categories = scan_all(self.table)
        except ClientError as e:
            logger.error(f"Unable to fetch categories: {e}", exc_info=True)
            raise
        return sorted(categories, key=lambda c: (c.get("name") or "").lower())

    def save_categories(self, changes: CategoryChanges) -> List[Dict[str, Any]]:
        """Apply deletes, renames and additions, cascading to products

        Deleting a category deletes every product filed under it. Renaming one
        moves its products to the new path. Steps run in order with no
        rollback; a failure part way leaves earlier steps applied.
        """
        try:
            for category in changes.deleted_categories:
                products = self.product_service.list_products_by_category(category.path)
                if products:
                    self._batch_delete_products(products)
                    logger.info(f"Deleted {len(products)} products for category: {category.path}")
                self.table.delete_item(Key={"path": category.path})
                logger.info(f"Deleted category with path: {category.path}")

            for category in changes.modified_categories:
                new_path = slugify(category.new_name)
                products = self.product_service.list_products_by_category(category.path)
                if products:
                    self._batch_update_products(products, category.path, new_path)
                    logger.info(f"Updated {len(products)} products with new category name: {category.new_name}")
                self.table.delete_item(Key={"path": category.path})
                self.table.put_item(Item={"path": new_path, "name": category.new_name})
                logger.info(f"Updated category path {category.path} -> {new_path}")

            for category in changes.added_categories:
                self.table.put_item(Item={"path": slugify(category.name), "name": category.name})
                logger.info(f"Added new category: {category.name}")
        except ClientError as e:
            logger.error(f"Error updating categories: {e}", exc_info=True)
            raise

        logger.info("All categories processed successfully")
        return self.list_categories()

    def _batch_delete_products(self, products: List[Dict[str, Any]]) -> None:
        for start in range(0, len(products), DELETE_BATCH_SIZE):
            batch = products[start:start + DELETE_BATCH_SIZE]
            with self.products_table.batch_writer() as writer:
                for product in batch:
                    writer.delete_item(Key={"id": product["id"]})
            logger.info(f"Batch deleted {len(batch)} products")

    def _batch_update_products(self, products: List[Dict[str, Any]], old_path: str, new_path: str) -> None:
        def move(product: Dict[str, Any]) -> None:
            current = product.get("category") or []
            if isinstance(current, str):
                current = [current]
            categories = []
            for path in current:
                path = new_path if path == old_path else path
                if path not in categories:
                    categories.append(path)
            self.products_table.update_item(
                Key={"id": product["id"]},
                UpdateExpression="SET #category = :category, #updatedAt = :updatedAt",
                ExpressionAttributeNames={"#category": "category", "#updatedAt": "updatedAt"},
                ExpressionAttributeValues={":category": categories, ":updatedAt": utc_now()},
            )

        with ThreadPoolExecutor(max_workers=UPDATE_BATCH_SIZE) as executor:
            for start in range(0, len(products), UPDATE_BATCH_SIZE):
                batch = products[start:start + UPDATE_BATCH_SIZE]
                # list() surfaces the first exception raised by a worker
                list(executor.map(move, batch))
                logger.info(f"Batch updated {len(batch)} products with category: {new_path}")

"""
DynamoDB table definitions.

Creates the storefront tables when they are missing. Used by the seed CLI
for local stacks and by the test suite.
"""
import logging
from typing import Dict, List

from botocore.exceptions import ClientError

from storefront.config import settings
from storefront.db.dynamo import get_dynamodb

logger = logging.getLogger(__name__)


def table_definitions() -> Dict[str, Dict]:
    """Key schema for each table, keyed by configured table name"""
    return {
        settings.products_table: {"key": "id", "type": "S"},
        settings.categories_table: {"key": "path", "type": "S"},
        settings.testimonials_table: {"key": "id", "type": "N"},
        settings.enquiries_table: {"key": "id", "type": "S"},
        settings.users_table: {"key": "username", "type": "S"},
    }


def create_tables() -> List[str]:
    """Create any missing tables and return the names that were created"""
    dynamodb = get_dynamodb()
    existing = {table.name for table in dynamodb.tables.all()}
    created = []

    for name, definition in table_definitions().items():
        if name in existing:
            logger.info(f"Table already exists: {name}")
            continue
        try:
            table = dynamodb.create_table(
                TableName=name,
                KeySchema=[{"AttributeName": definition["key"], "KeyType": "HASH"}],
                AttributeDefinitions=[
                    {"AttributeName": definition["key"], "AttributeType": definition["type"]}
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()
            created.append(name)
            logger.info(f"Created table: {name}")
        except ClientError as e:
            logger.error(f"Failed to create table {name}: {e}", exc_info=True)
            raise

    return created

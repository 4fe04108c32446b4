"""
Process-wide AWS client pool and DynamoDB item helpers.

Clients are created lazily on first use and reused across requests. Under
Lambda every cold start gets a fresh pool.
"""
import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import boto3

from storefront.config import settings

logger = logging.getLogger(__name__)

_dynamodb = None
_s3_client = None
_notification_clients = {}


def get_dynamodb():
    """Get the shared DynamoDB resource"""
    global _dynamodb
    if _dynamodb is None:
        _dynamodb = boto3.resource(
            "dynamodb",
            region_name=settings.aws_region,
            endpoint_url=settings.dynamodb_endpoint_url,
        )
        logger.info("DynamoDB connection pool initialized")
    return _dynamodb


def get_table(name: str):
    """Get a DynamoDB Table by name"""
    return get_dynamodb().Table(name)


def get_s3_client():
    """Get the shared S3 client"""
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        logger.info("S3 connection pool initialized")
    return _s3_client


def get_notification_client(service: str):
    """Get the shared SES or SNS client"""
    if service not in _notification_clients:
        _notification_clients[service] = boto3.client(service, region_name=settings.aws_region)
    return _notification_clients[service]


def reset_clients() -> None:
    """Drop pooled clients so the next call builds new ones"""
    global _dynamodb, _s3_client
    _dynamodb = None
    _s3_client = None
    _notification_clients.clear()


def scan_all(table, **kwargs) -> List[Dict[str, Any]]:
    """Scan a table to exhaustion, following LastEvaluatedKey"""
    response = table.scan(**kwargs)
    items = response.get("Items", [])
    while response.get("LastEvaluatedKey"):
        kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        response = table.scan(**kwargs)
        items.extend(response.get("Items", []))
    return [from_item(item) for item in items]


def to_item(value: Any) -> Any:
    """Convert floats to Decimal so the value can be written to DynamoDB"""
    return json.loads(json.dumps(value), parse_float=Decimal)


def from_item(value: Any) -> Any:
    """Convert Decimals read from DynamoDB back to int/float"""
    if isinstance(value, list):
        return [from_item(v) for v in value]
    if isinstance(value, dict):
        return {k: from_item(v) for k, v in value.items()}
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def get_item(table, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    item = table.get_item(Key=key).get("Item")
    return from_item(item) if item is not None else None


def build_update(updates: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """UpdateExpression, attribute names and values that SET every key in ``updates``"""
    names = {}
    values = {}
    assignments = []
    for index, (field, value) in enumerate(updates.items()):
        names[f"#f{index}"] = field
        values[f":v{index}"] = value
        assignments.append(f"#f{index} = :v{index}")
    return "SET " + ", ".join(assignments), names, to_item(values)

"""
Unit tests for shared helpers: slugs, timestamps, DynamoDB conversions and settings.
"""

from decimal import Decimal

import pytest

from storefront.config import Settings, settings
from storefront.db.dynamo import build_update, from_item, get_table, scan_all, to_item
from storefront.utils import slugify, utc_now


class TestSlugify:
    @pytest.mark.parametrize("name, slug", [
        ("Home Decor", "home-decor"),
        ("  Home & Decor  ", "home-decor"),
        ("Wall-Art!!", "wall-art"),
        ("Kids' Toys (2+)", "kids-toys-2"),
        ("---", ""),
    ])
    def test_slugify(self, name, slug) -> None:
        assert slugify(name) == slug


class TestUtcNow:
    def test_millisecond_precision_with_z(self) -> None:
        stamp = utc_now()

        assert stamp.endswith("Z")
        assert len(stamp) == len("2025-01-01T00:00:00.000Z")


class TestItemConversion:
    def test_floats_become_decimals(self) -> None:
        item = to_item({"price": 12.5, "sizes": [1, 2.25]})

        assert item == {"price": Decimal("12.5"), "sizes": [1, Decimal("2.25")]}

    def test_decimals_come_back_as_numbers(self) -> None:
        value = from_item({"price": Decimal("1200"), "nested": [{"ratio": Decimal("0.5")}]})

        assert value == {"price": 1200, "nested": [{"ratio": 0.5}]}
        assert isinstance(value["price"], int)

    def test_build_update(self) -> None:
        expression, names, values = build_update({"name": "Vase", "price": 9.5})

        assert expression == "SET #f0 = :v0, #f1 = :v1"
        assert names == {"#f0": "name", "#f1": "price"}
        assert values == {":v0": "Vase", ":v1": Decimal("9.5")}



class PagedTable:
    """Serves pre-built scan pages chained by LastEvaluatedKey"""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def scan(self, **kwargs):
        self.calls.append(kwargs)
        return self.pages[len(self.calls) - 1]


class TestScanAll:
    def test_follows_last_evaluated_key(self) -> None:
        table = PagedTable([
            {"Items": [{"id": "a"}], "LastEvaluatedKey": {"id": "a"}},
            {"Items": [{"id": "b"}, {"id": "c"}], "LastEvaluatedKey": {"id": "c"}},
            {"Items": [{"id": "d"}]},
        ])

        items = scan_all(table, FilterExpression="f")

        assert [i["id"] for i in items] == ["a", "b", "c", "d"]
        assert "ExclusiveStartKey" not in table.calls[0]
        assert table.calls[1] == {"FilterExpression": "f", "ExclusiveStartKey": {"id": "a"}}
        assert table.calls[2]["ExclusiveStartKey"] == {"id": "c"}

    def test_pages_through_dynamodb(self, aws) -> None:
        table = get_table(settings.categories_table)
        for index in range(5):
            table.put_item(Item={"path": f"c{index}", "name": f"C{index}"})

        items = scan_all(table, Limit=2)

        assert sorted(i["path"] for i in items) == ["c0", "c1", "c2", "c3", "c4"]


class TestSettings:
    def test_derived_values(self) -> None:
        settings = Settings(
            ENVIRONMENT="prod",
            AWS_REGION="ap-south-1",
            S3_BUCKET_NAME=None,
            RECIPIENT_EMAIL="a@example.com, b@example.com,",
        )

        assert settings.bucket_name == "kalakala-corner-prod"
        assert settings.bucket_url == "https://kalakala-corner-prod.s3.ap-south-1.amazonaws.com/"
        assert settings.is_production is True
        assert settings.enable_detailed_errors is False
        assert settings.recipient_emails == ["a@example.com", "b@example.com"]

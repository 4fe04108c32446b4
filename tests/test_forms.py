"""
Unit tests for bracketed multipart field parsing.
"""

import pytest

from storefront.api.forms import decode_json_fields, nest_fields, split_key, validate_payload
from storefront.exceptions import BadRequestError, ValidationError
from storefront.schemas.product import ProductCreate


class TestSplitKey:
    @pytest.mark.parametrize("key, parts", [
        ("name", ["name"]),
        ("category[0]", ["category", "0"]),
        ("variants[1][discountedPrice]", ["variants", "1", "discountedPrice"]),
        ("notes[]", ["notes", ""]),
    ])
    def test_split(self, key, parts) -> None:
        assert split_key(key) == parts


class TestNestFields:
    def test_angular_form_shape(self) -> None:
        nested = nest_fields([
            ("name", "Vase"),
            ("category[0]", "home-decor"),
            ("category[1]", "gifts"),
            ("variants[0][size]", "12"),
            ("variants[0][price]", "1200"),
            ("variants[1][size]", "14"),
            ("notes[0]", "Fragile"),
        ])

        assert nested == {
            "name": "Vase",
            "category": ["home-decor", "gifts"],
            "variants": [{"size": "12", "price": "1200"}, {"size": "14"}],
            "notes": ["Fragile"],
        }

    def test_indices_sorted_numerically(self) -> None:
        pairs = [(f"notes[{i}]", str(i)) for i in (10, 2, 0, 1)]

        assert nest_fields(pairs) == {"notes": ["0", "1", "2", "10"]}

    def test_empty_brackets_append(self) -> None:
        assert nest_fields([("notes[]", "a"), ("notes[]", "b")]) == {"notes": ["a", "b"]}

    def test_conflicting_scalar_and_list(self) -> None:
        with pytest.raises(BadRequestError):
            nest_fields([("category", "x"), ("category[0][name]", "y")])


class TestDecodeJsonFields:
    def test_json_strings_decoded(self) -> None:
        data = decode_json_fields({"existingImages": '["https://a/1.png"]', "name": "[not json field]"})

        assert data == {"existingImages": ["https://a/1.png"], "name": "[not json field]"}

    def test_plain_strings_left_alone(self) -> None:
        assert decode_json_fields({"category": "home-decor"}) == {"category": "home-decor"}

    def test_malformed_json(self) -> None:
        with pytest.raises(BadRequestError, match="existingImages"):
            decode_json_fields({"existingImages": "[broken"})


class TestValidatePayload:
    def test_blank_prices_become_none(self) -> None:
        product = validate_payload(ProductCreate, {
            "name": " Vase ",
            "variants": [{"size": 12, "price": "1200", "discountedPrice": ""}],
            "category": "home-decor",
        })

        assert product.name == "Vase"
        assert product.variants[0].size == "12"
        assert product.variants[0].price == 1200
        assert product.variants[0].discounted_price is None
        assert product.category == ["home-decor"]

    def test_missing_name(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_payload(ProductCreate, {"desc": "x"})

        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "name is required"
        assert excinfo.value.details[0]["field"] == "name"

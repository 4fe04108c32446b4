"""
Product endpoint tests: CRUD over multipart and JSON bodies, S3 image handling
and the catalogue download.
"""

import inspect
import json

import pytest

from conftest import BUCKET_URL
from storefront.api.products import download_catalogue
from storefront.config import settings
from storefront.db.dynamo import get_table

PRODUCT_FORM = {
    "name": "Hand-painted Vase",
    "desc": "Terracotta vase painted by hand",
    "category[0]": "home-decor",
    "variants[0][size]": "12",
    "variants[0][measurement]": "inch",
    "variants[0][price]": "1200",
    "variants[0][discountedPrice]": "",
    "notes[0]": "Handle with care",
}


def add_product(client, admin_headers, png_bytes=None, **overrides):
    data = {**PRODUCT_FORM, **overrides}
    files = [("images", ("front.png", png_bytes, "image/png"))] if png_bytes else None
    response = client.post("/add-product", data=data, files=files, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["data"]


class TestAddProduct:
    def test_multipart_product_is_retrievable(self, client, admin_headers, png_bytes) -> None:
        created = add_product(client, admin_headers, png_bytes)

        response = client.get(f"/product/{created['id']}")
        assert response.status_code == 200
        product = response.json()["items"]
        assert product["name"] == "Hand-painted Vase"
        assert product["category"] == ["home-decor"]
        assert product["notes"] == ["Handle with care"]
        assert product["variants"] == [{"size": "12", "measurement": "inch", "price": 1200}]
        assert product["createdAt"].endswith("Z")

    def test_images_uploaded_under_product_id(self, client, admin_headers, png_bytes, s3) -> None:
        created = add_product(client, admin_headers, png_bytes)

        assert created["images"] == [f"{BUCKET_URL}{created['id']}/front.png"]
        stored = s3.get_object(Bucket="test-bucket", Key=f"{created['id']}/front.png")
        assert stored["Body"].read() == png_bytes
        assert stored["ContentType"] == "image/png"

    def test_envelope_shape(self, client, admin_headers) -> None:
        response = client.post("/add-product", data=PRODUCT_FORM, headers=admin_headers)

        body = response.json()
        assert body["success"] is True
        assert body["statusCode"] == 201
        assert body["data"]["message"] == "Product added successfully"
        assert body["timestamp"].endswith("Z")

    def test_json_body_with_json_encoded_lists(self, client, admin_headers) -> None:
        payload = {
            "name": "Wall Plate",
            "category": json.dumps(["wall-art", "gifts"]),
            "variants": [{"size": "8", "price": 450, "discountedPrice": 399}],
        }
        response = client.post("/add-product", json=payload, headers=admin_headers)

        assert response.status_code == 201
        product = response.json()["data"]["data"]
        assert product["category"] == ["wall-art", "gifts"]
        assert product["variants"][0]["discountedPrice"] == 399

    def test_created_prices_match_stored_prices(self, client, admin_headers) -> None:
        created = add_product(client, admin_headers)

        price = created["variants"][0]["price"]
        assert price == 1200
        assert isinstance(price, int)
        assert created == client.get(f"/product/{created['id']}").json()["items"]

    def test_name_required(self, client, admin_headers) -> None:
        response = client.post("/add-product", data={"desc": "no name"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_requires_token(self, client) -> None:
        response = client.post("/add-product", data=PRODUCT_FORM)

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "No token provided"


class TestListProducts:
    def test_list_all(self, client, admin_headers) -> None:
        add_product(client, admin_headers)
        add_product(client, admin_headers, name="Second")

        response = client.get("/products-list")

        assert response.status_code == 200
        assert {p["name"] for p in response.json()["items"]} == {"Hand-painted Vase", "Second"}

    def test_filter_by_category(self, client, admin_headers) -> None:
        add_product(client, admin_headers)
        add_product(client, admin_headers, name="Print", **{"category[0]": "wall-art"})

        response = client.get("/products-list/wall-art")

        assert [p["name"] for p in response.json()["items"]] == ["Print"]

    def test_string_category_matches_exactly(self, client) -> None:
        products = get_table(settings.products_table)
        products.put_item(Item={"id": "legacy-1", "name": "Mural", "category": "wall-art"})
        products.put_item(Item={"id": "legacy-2", "name": "Print", "category": "art"})

        response = client.get("/products-list/art")

        assert [p["id"] for p in response.json()["items"]] == ["legacy-2"]

    def test_empty_table(self, client) -> None:
        assert client.get("/products-list").json() == {"items": []}


class TestGetProduct:
    def test_unknown_id_is_404(self, client) -> None:
        response = client.get("/product/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "Product with ID does-not-exist not found"


class TestUpdateProduct:
    def test_updates_fields_and_sets_updated_at(self, client, admin_headers) -> None:
        created = add_product(client, admin_headers)

        response = client.post(
            f"/update-product/{created['id']}",
            data={"name": "Renamed Vase", "variants[0][size]": "14", "variants[0][price]": "1500"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == created["id"]
        assert data["data"]["name"] == "Renamed Vase"
        assert data["data"]["variants"] == [{"size": "14", "price": 1500}]
        assert data["data"]["desc"] == "Terracotta vase painted by hand"
        assert "updatedAt" in data["data"]

    def test_blank_name_rejected(self, client, admin_headers) -> None:
        created = add_product(client, admin_headers)

        response = client.post(f"/update-product/{created['id']}", data={"name": "   "}, headers=admin_headers)

        assert response.status_code == 400
        assert client.get(f"/product/{created['id']}").json()["items"]["name"] == "Hand-painted Vase"

    def test_blank_list_entries_dropped(self, client, admin_headers) -> None:
        created = add_product(client, admin_headers)

        response = client.post(
            f"/update-product/{created['id']}",
            data={"name": "  Trimmed  ", "category[0]": "", "category[1]": "gifts", "notes[0]": " "},
            headers=admin_headers,
        )

        product = response.json()["data"]["data"]
        assert product["name"] == "Trimmed"
        assert product["category"] == ["gifts"]
        assert product["notes"] == []

    def test_dropped_images_are_deleted_and_new_ones_appended(self, client, admin_headers, png_bytes, s3) -> None:
        created = add_product(client, admin_headers, png_bytes)
        old_url = created["images"][0]

        response = client.post(
            f"/update-product/{created['id']}",
            data={"existingImages": "[]"},
            files=[("images", ("side.png", png_bytes, "image/png"))],
            headers=admin_headers,
        )

        images = response.json()["data"]["data"]["images"]
        assert images == [f"{BUCKET_URL}{created['id']}/side.png"]
        keys = [o["Key"] for o in s3.list_objects_v2(Bucket="test-bucket").get("Contents", [])]
        assert old_url[len(BUCKET_URL):] not in keys

    def test_images_kept_when_existing_images_omitted(self, client, admin_headers, png_bytes) -> None:
        created = add_product(client, admin_headers, png_bytes)

        response = client.post(f"/update-product/{created['id']}", data={"desc": "new"}, headers=admin_headers)

        assert response.json()["data"]["data"]["images"] == created["images"]

    def test_unknown_id_is_404(self, client, admin_headers) -> None:
        response = client.post("/update-product/missing", data={"name": "x"}, headers=admin_headers)

        assert response.status_code == 404


class TestDeleteProduct:
    def test_deletes_item_and_images(self, client, admin_headers, png_bytes, s3) -> None:
        created = add_product(client, admin_headers, png_bytes)

        response = client.delete(f"/delete-product/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"id": created["id"], "message": "Product deleted successfully"}
        assert client.get(f"/product/{created['id']}").status_code == 404
        assert s3.list_objects_v2(Bucket="test-bucket").get("KeyCount") == 0

    def test_unknown_id_is_404(self, client, admin_headers) -> None:
        response = client.delete("/delete-product/missing", headers=admin_headers)

        assert response.status_code == 404


class TestDownloadCatalogue:
    def test_items_sorted_by_name(self, client, admin_headers) -> None:
        add_product(client, admin_headers, name="Zebra Mug")
        add_product(client, admin_headers, name="apple tray")

        response = client.get("/downloadPDF", headers=admin_headers)

        assert [p["name"] for p in response.json()["items"]] == ["apple tray", "Zebra Mug"]

    def test_category_filter(self, client, admin_headers) -> None:
        add_product(client, admin_headers)
        add_product(client, admin_headers, name="Print", **{"category[0]": "wall-art"})

        response = client.get("/downloadPDF/wall-art", headers=admin_headers)

        assert [p["name"] for p in response.json()["items"]] == ["Print"]

    def test_pdf_format(self, client, admin_headers, png_bytes) -> None:
        add_product(client, admin_headers, png_bytes)

        response = client.get("/downloadPDF/all?format=pdf", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_pdf_rendering_runs_off_the_event_loop(self) -> None:
        assert not inspect.iscoroutinefunction(download_catalogue)

    @pytest.mark.parametrize("path", ["/downloadPDF", "/downloadPDF/home-decor"])
    def test_requires_admin(self, client, path) -> None:
        assert client.get(path).status_code == 401

"""
Catalogue PDF rendering tests.
"""

import pytest

from storefront.exceptions import NotFoundError
from storefront.services.catalogue_pdf import (
    IMAGE_HEIGHT,
    MARGIN,
    PAGE_HEIGHT,
    CataloguePage,
    CatalogueRenderer,
    catalogue_title,
    format_price,
    variant_rows,
    wrap_description,
)


class StubImageProvider:
    """Serves one known image and reports every other URL as missing"""

    def __init__(self, images):
        self.images = images

    def get_image(self, url):
        if url not in self.images:
            raise NotFoundError("Image")
        data = self.images[url]
        return data, "image/png", len(data)


def product(name, images=(), variants=None, desc="A short description"):
    return {
        "id": name.lower(),
        "name": name,
        "desc": desc,
        "images": list(images),
        "variants": variants if variants is not None else [{"size": "10", "price": 500, "discountedPrice": 450}],
    }


class TestFormatting:
    @pytest.mark.parametrize("value, expected", [
        (1200, "Rs. 1200"),
        (99.5, "Rs. 99.5"),
        (0, "--"),
        (None, "--"),
        ("", "--"),
        ("abc", "--"),
    ])
    def test_format_price(self, value, expected) -> None:
        assert format_price(value) == expected

    def test_variant_rows(self) -> None:
        rows = variant_rows({"variants": [{"size": "S", "price": 100}, {"discountedPrice": 80}]})

        assert rows == [["S", "Rs. 100", "--"], ["--", "--", "Rs. 80"]]

    def test_titles(self) -> None:
        assert catalogue_title() == "Products Catalog - All Categories"
        assert catalogue_title("all") == "Products Catalog - All Categories"
        assert catalogue_title("Wall Art") == "Products Catalog - Wall Art"

    def test_wrap_description(self) -> None:
        lines = wrap_description("word " * 60)

        assert len(lines) > 1
        assert all(len(line) <= 95 for line in lines)
        assert wrap_description(None) == []


class TestRender:
    def test_renders_pdf_with_images_and_placeholders(self, png_bytes) -> None:
        provider = StubImageProvider({"https://img/ok.png": png_bytes})
        products = [product("Vase", images=["https://img/ok.png", "https://img/missing.png"])]

        pdf = CatalogueRenderer(provider).render(products, "Home Decor")

        assert pdf.startswith(b"%PDF")

    def test_long_catalogue_spans_pages(self) -> None:
        products = [product(f"Item {i}", images=["https://img/x.png"] * 4) for i in range(12)]

        pdf = CatalogueRenderer(StubImageProvider({})).render(products)

        assert pdf.count(b"/Type /Page") - pdf.count(b"/Type /Pages") >= 2

    def test_empty_catalogue(self) -> None:
        assert CatalogueRenderer().render([]).startswith(b"%PDF")

    def test_tall_product_continues_on_next_page(self, monkeypatch) -> None:
        placed = []
        draw_placeholder = CataloguePage.placeholder

        def record(page, x, y):
            placed.append((page, y))
            draw_placeholder(page, x, y)

        monkeypatch.setattr(CataloguePage, "placeholder", record)
        images = [f"https://img/{i}.png" for i in range(30)]

        CatalogueRenderer(StubImageProvider({})).render([product("Mural", images=images)])

        assert len(placed) == 30
        assert all(y + IMAGE_HEIGHT <= PAGE_HEIGHT - MARGIN for _, y in placed)
        assert len({id(page) for page, _ in placed}) >= 2

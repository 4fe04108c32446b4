"""
Catalogue PDF rendering.

Lays products out on A4 pages the way the storefront's printable catalogue
looks: a centred title, then one bordered section per product with its name,
wrapped description, a three-column image grid and a variant price table.

Drawing uses matplotlib's object API (``Figure`` + ``PdfPages``, no pyplot) on
a single axes whose data coordinates are millimetres measured from the top
left corner of the page.
"""
from io import BytesIO
from typing import Any, Dict, List, Optional
import logging
import textwrap

from botocore.exceptions import ClientError
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, Rectangle
from PIL import Image

from storefront.exceptions import AppError
from storefront.services.image_providers.base import ImageProvider

logger = logging.getLogger(__name__)

# A4 portrait, millimetres
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MM_PER_INCH = 25.4

MARGIN = 15.0
FIRST_SECTION_TOP = 40.0
IMAGE_WIDTH = 50.0
IMAGE_HEIGHT = 40.0
IMAGE_SPACING = 5.0
IMAGES_PER_ROW = 3
DESC_LINE_HEIGHT = 5.0
DESC_WRAP_CHARS = 95
TABLE_ROW_HEIGHT = 9.0
TABLE_COLUMN_WIDTH = 40.0
TABLE_HEADERS = ("Size", "Original Price", "Discounted Price")
TABLE_HEADER_COLOR = (1.0, 20 / 255, 147 / 255)
PLACEHOLDER_COLOR = (230 / 255, 230 / 255, 230 / 255)
PLACEHOLDER_TEXT_COLOR = (150 / 255, 150 / 255, 150 / 255)
BORDER_COLOR = (180 / 255, 180 / 255, 180 / 255)


def catalogue_title(category_name: Optional[str] = None) -> str:
    if not category_name or category_name == "all":
        return "Products Catalog - All Categories"
    return f"Products Catalog - {category_name}"


def format_price(value: Any) -> str:
    """``Rs. <n>`` for a positive price, ``--`` otherwise"""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return "--"
    if amount <= 0:
        return "--"
    return f"Rs. {value}"


def variant_rows(product: Dict[str, Any]) -> List[List[str]]:
    rows = []
    for variant in product.get("variants") or []:
        rows.append([
            str(variant.get("size") or "--"),
            format_price(variant.get("price")),
            format_price(variant.get("discountedPrice")),
        ])
    return rows


def wrap_description(desc: Optional[str]) -> List[str]:
    lines = []
    for paragraph in (desc or "").splitlines():
        lines.extend(textwrap.wrap(paragraph, DESC_WRAP_CHARS) or [""])
    return lines


class CataloguePage:
    """One A4 page; y grows downwards from the top edge"""

    def __init__(self):
        self.figure = Figure(figsize=(PAGE_WIDTH / MM_PER_INCH, PAGE_HEIGHT / MM_PER_INCH))
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_xlim(0, PAGE_WIDTH)
        self.ax.set_ylim(PAGE_HEIGHT, 0)
        self.ax.axis("off")

    def text(self, x: float, y: float, value: str, **kwargs) -> None:
        self.ax.text(x, y, value, va=kwargs.pop("va", "baseline"), **kwargs)

    def image(self, x: float, y: float, picture: Image.Image) -> None:
        self.ax.imshow(picture, extent=(x, x + IMAGE_WIDTH, y + IMAGE_HEIGHT, y), aspect="auto", zorder=2)

    def placeholder(self, x: float, y: float) -> None:
        self.ax.add_patch(Rectangle((x, y), IMAGE_WIDTH, IMAGE_HEIGHT, facecolor=PLACEHOLDER_COLOR, edgecolor="none"))
        self.text(x + 5, y + IMAGE_HEIGHT / 2, "Image not\navailable", fontsize=8, color=PLACEHOLDER_TEXT_COLOR)

    def table(self, x: float, y: float, rows: List[List[str]]) -> float:
        """Draw the variant grid and return the y just below it"""
        for row_index, row in enumerate([list(TABLE_HEADERS)] + rows):
            top = y + row_index * TABLE_ROW_HEIGHT
            header = row_index == 0
            for col_index, cell in enumerate(row):
                left = x + col_index * TABLE_COLUMN_WIDTH
                self.ax.add_patch(Rectangle(
                    (left, top),
                    TABLE_COLUMN_WIDTH,
                    TABLE_ROW_HEIGHT,
                    facecolor=TABLE_HEADER_COLOR if header else "white",
                    edgecolor=BORDER_COLOR,
                    linewidth=0.5,
                ))
                self.text(
                    left + 2,
                    top + TABLE_ROW_HEIGHT / 2,
                    cell,
                    va="center",
                    fontsize=9,
                    fontweight="bold" if header else "normal",
                    color="white" if header else "black",
                )
        return y + (len(rows) + 1) * TABLE_ROW_HEIGHT

    def border(self, top: float, bottom: float) -> None:
        self.ax.add_patch(FancyBboxPatch(
            (MARGIN, top),
            PAGE_WIDTH - 2 * MARGIN,
            bottom - top,
            boxstyle="round,pad=0,rounding_size=4",
            facecolor="none",
            edgecolor=BORDER_COLOR,
        ))


class PageCursor:
    """Tracks the current page and y position while sections are laid out

    Blocks are reserved one at a time; a block that does not fit closes the
    section's border on the current page and continues on a fresh one.
    """

    def __init__(self, pdf: PdfPages):
        self.pdf = pdf
        self.page = CataloguePage()
        self.y = FIRST_SECTION_TOP
        self.section_top = FIRST_SECTION_TOP

    @property
    def bottom(self) -> float:
        return PAGE_HEIGHT - MARGIN

    def new_page(self) -> None:
        self.pdf.savefig(self.page.figure)
        self.page = CataloguePage()
        self.y = MARGIN

    def begin_section(self, height: float, opening: float) -> None:
        """Start a section; one that fits a page is never split"""
        needed = height if height <= self.bottom - MARGIN else opening
        if self.y + needed > self.bottom:
            self.new_page()
        self.section_top = self.y

    def reserve(self, height: float) -> float:
        if self.y + height > self.bottom:
            self.page.border(self.section_top, self.y)
            self.new_page()
            self.section_top = self.y
        top = self.y
        self.y += height
        return top

    def end_section(self) -> None:
        self.page.border(self.section_top, self.y + 5)
        self.y += 10

    def finish(self) -> None:
        self.pdf.savefig(self.page.figure)


class CatalogueRenderer:
    """Render products into a catalogue PDF"""

    def __init__(self, image_provider: Optional[ImageProvider] = None):
        self.image_provider = image_provider

    def load_image(self, url: str) -> Optional[Image.Image]:
        if self.image_provider is None:
            return None
        try:
            data, _, _ = self.image_provider.get_image(url)
            picture = Image.open(BytesIO(data))
            picture.load()
            return picture.convert("RGB")
        except (AppError, ClientError, OSError) as e:
            logger.warning(f"Catalogue image unavailable {url}: {e}")
            return None

    def render(self, products: List[Dict[str, Any]], category_name: Optional[str] = None) -> bytes:
        buffer = BytesIO()
        with PdfPages(buffer) as pdf:
            cursor = PageCursor(pdf)
            cursor.page.text(PAGE_WIDTH / 2, 15, catalogue_title(category_name), ha="center", fontsize=16)
            for product in products:
                self.draw_product(cursor, product)
            cursor.finish()

        logger.info(f"Rendered catalogue PDF with {len(products)} products")
        return buffer.getvalue()

    def draw_product(self, cursor: PageCursor, product: Dict[str, Any]) -> None:
        desc_lines = wrap_description(product.get("desc"))
        images = product.get("images") or []
        rows = variant_rows(product)
        image_rows = -(-len(images) // IMAGES_PER_ROW)
        row_height = IMAGE_HEIGHT + IMAGE_SPACING
        table_height = (len(rows) + 1) * TABLE_ROW_HEIGHT
        height = 13 + len(desc_lines) * DESC_LINE_HEIGHT + 5 + image_rows * row_height + 3 + table_height + 5

        cursor.begin_section(height, opening=13 + DESC_LINE_HEIGHT)
        left = MARGIN + 5

        top = cursor.reserve(13)
        cursor.page.text(left, top + 10, product.get("name") or "", fontsize=13, fontweight="bold")
        for line in desc_lines:
            top = cursor.reserve(DESC_LINE_HEIGHT)
            cursor.page.text(left, top + DESC_LINE_HEIGHT, line, fontsize=10)
        cursor.reserve(5)

        for row_start in range(0, len(images), IMAGES_PER_ROW):
            top = cursor.reserve(row_height)
            for column, url in enumerate(images[row_start:row_start + IMAGES_PER_ROW]):
                x = left + column * (IMAGE_WIDTH + IMAGE_SPACING)
                picture = self.load_image(url)
                if picture is None:
                    cursor.page.placeholder(x, top)
                else:
                    cursor.page.image(x, top, picture)

        cursor.reserve(3)
        top = cursor.reserve(table_height)
        cursor.page.table(left, top, rows)
        cursor.end_section()

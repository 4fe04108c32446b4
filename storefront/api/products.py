from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from typing import Optional
import logging

from storefront.api.forms import parse_product_request, validate_payload
from storefront.api.responses import created, success
from storefront.auth.dependencies import require_admin
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductListResponse
from storefront.services import get_image_provider
from storefront.services.catalogue_pdf import CatalogueRenderer
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

PRODUCT_FORM_DESCRIPTION = """
    **Body** is either `multipart/form-data` or JSON.

    Multipart fields: `name`, `desc`, `category[i]`, `notes[i]`,
    `variants[i][size]`, `variants[i][price]`, `variants[i][discountedPrice]`,
    `variants[i][measurement]`, `existingImages` (JSON array of URLs, update only)
    and any number of `images` file parts. List fields may also be sent as a
    JSON-encoded string.
    """


def get_product_service() -> ProductService:
    """Dependency to get product service"""
    return ProductService()


def get_category_service() -> CategoryService:
    return CategoryService()


@router.get(
    "/products-list",
    response_model=ProductListResponse,
    summary="List all products",
    description="Every product in the catalogue. No pagination.",
)
async def list_products(product_service: ProductService = Depends(get_product_service)):
    products = product_service.list_products()
    logger.info(f"Fetched {len(products)} products")
    return {"items": products}


@router.get(
    "/products-list/{category}",
    response_model=ProductListResponse,
    summary="List products in a category",
    description="Products whose `category` list contains the given category path.",
)
async def list_products_by_category(
    category: str,
    product_service: ProductService = Depends(get_product_service)
):
    products = product_service.list_products_by_category(category)
    logger.info(f"Fetched {len(products)} products for category: {category}")
    return {"items": products}


@router.get(
    "/product/{product_id}",
    summary="Get product by ID",
    responses={
        200: {
            "description": "Product found",
            "content": {
                "application/json": {
                    "example": {
                        "items": {
                            "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                            "name": "Hand-painted Vase",
                            "desc": "Terracotta vase painted by hand",
                            "variants": [{"size": "12", "measurement": "inch", "price": 1200, "discountedPrice": 999}],
                            "notes": [],
                            "category": ["home-decor"],
                            "images": [],
                        }
                    }
                }
            }
        },
        404: {"description": "Product not found"}
    }
)
async def get_product(product_id: str, product_service: ProductService = Depends(get_product_service)):
    return {"items": product_service.get_product(product_id)}


@router.post(
    "/add-product",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a product and upload its images to S3 under `<product id>/`.\n" + PRODUCT_FORM_DESCRIPTION,
    responses={
        201: {"description": "Product created successfully"},
        400: {"description": "Invalid request data"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"}
    }
)
async def add_product(
    request: Request,
    current_user: dict = Depends(require_admin),
    product_service: ProductService = Depends(get_product_service)
):
    data, files = await parse_product_request(request)
    product_data = validate_payload(ProductCreate, data)
    product = product_service.add_product(product_data, files)
    return created({"message": "Product added successfully", "data": product})


@router.post(
    "/update-product/{product_id}",
    summary="Update a product",
    description="""
    Update the provided fields of a product.

    Images left out of `existingImages` are deleted from S3; uploaded files are
    appended. When `existingImages` is omitted every current image is kept.
    """ + PRODUCT_FORM_DESCRIPTION,
    responses={
        200: {"description": "Product updated successfully"},
        400: {"description": "Invalid request data"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "Product not found"}
    }
)
async def update_product(
    product_id: str,
    request: Request,
    current_user: dict = Depends(require_admin),
    product_service: ProductService = Depends(get_product_service)
):
    data, files = await parse_product_request(request)
    product_data = validate_payload(ProductUpdate, data)
    product = product_service.update_product(product_id, product_data, files)
    return success({"id": product_id, "message": "Product updated successfully", "data": product})


@router.delete(
    "/delete-product/{product_id}",
    summary="Delete a product",
    description="Delete a product and every image it references in S3.",
    responses={
        200: {"description": "Product deleted successfully"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "Product not found"}
    }
)
async def delete_product(
    product_id: str,
    current_user: dict = Depends(require_admin),
    product_service: ProductService = Depends(get_product_service)
):
    product_service.delete_product(product_id)
    return success({"id": product_id, "message": "Product deleted successfully"})


@router.get(
    "/downloadPDF",
    summary="Catalogue download (all categories)",
    description="Catalogue data as `{\"items\": [...]}`, or a rendered PDF with `?format=pdf`.",
)
@router.get(
    "/downloadPDF/{category}",
    summary="Catalogue download for one category",
    description="Catalogue data as `{\"items\": [...]}`, or a rendered PDF with `?format=pdf`.",
)
def download_catalogue(
    category: Optional[str] = None,
    format: str = Query("json", pattern="^(json|pdf)$", description="Response format"),
    current_user: dict = Depends(require_admin),
    product_service: ProductService = Depends(get_product_service),
    category_service: CategoryService = Depends(get_category_service)
):
    products = product_service.catalogue(category)
    if format != "pdf":
        return {"items": products}

    category_name = None
    if category and category != "all":
        names = {c.get("path"): c.get("name") for c in category_service.list_categories()}
        category_name = names.get(category, category)

    pdf = CatalogueRenderer(get_image_provider()).render(products, category_name)
    filename = f"products-catalog-{category}.pdf" if category_name else "products-catalog.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

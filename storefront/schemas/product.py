from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional


class Variant(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    size: Optional[str] = Field(None, description="Size label", example="12 inch")
    measurement: Optional[str] = Field(None, description="Unit of measurement", example="inch")
    price: Optional[float] = Field(None, ge=0, description="Original price", example=1200)
    discounted_price: Optional[float] = Field(None, ge=0, alias="discountedPrice", description="Discounted price", example=999)

    @field_validator("size", "measurement", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("price", "discounted_price", mode="before")
    @classmethod
    def blank_is_none(cls, value: Any) -> Any:
        # Multipart forms send unset numbers as ""
        if isinstance(value, str) and value.strip() in ("", "null", "undefined"):
            return None
        return value


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=500, description="Product name", example="Hand-painted Vase")
    desc: Optional[str] = Field(None, description="Product description", example="Terracotta vase painted by hand")
    variants: List[Variant] = Field(default_factory=list, description="Size/price variants")
    notes: List[str] = Field(default_factory=list, description="Additional notes shown on the product page")
    category: List[str] = Field(default_factory=list, description="Category paths the product belongs to", example=["home-decor"])

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("notes", "category", mode="before")
    @classmethod
    def as_list(cls, value: Any) -> Any:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("notes", "category")
    @classmethod
    def drop_blank(cls, value: List[str]) -> List[str]:
        return [v for v in value if v and v.strip()]


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=500, description="Product name")
    desc: Optional[str] = Field(None, description="Product description")
    variants: Optional[List[Variant]] = Field(None, description="Size/price variants")
    notes: Optional[List[str]] = Field(None, description="Additional notes")
    category: Optional[List[str]] = Field(None, description="Category paths")
    existing_images: Optional[List[str]] = Field(None, alias="existingImages", description="Image URLs to keep; others are deleted")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("notes", "category", mode="before")
    @classmethod
    def as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value] if value else []
        return value

    @field_validator("notes", "category")
    @classmethod
    def drop_blank(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return [v for v in value if v and v.strip()]


class ProductResponse(BaseModel):
    id: str = Field(..., description="Product id (uuid4)", example="0f8fad5b-d9cb-469f-a165-70867728950e")
    name: str = Field(..., description="Product name")
    desc: Optional[str] = Field(None, description="Product description")
    variants: List[Dict[str, Any]] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    category: Any = Field(None, description="Category paths")
    images: List[str] = Field(default_factory=list, description="Public S3 image URLs")
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class ProductListResponse(BaseModel):
    items: List[ProductResponse]

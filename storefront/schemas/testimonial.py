from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


def _check_rating(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Rating must be a number")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("Rating must be a whole number")
    if value < 1 or value > 5:
        raise ValueError("Rating must be between 1 and 5")
    return int(value)


class TestimonialCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = Field(None, description="Category path of the reviewed product")
    product: str = Field(..., min_length=1, description="Product name", example="Hand-painted Vase")
    product_id: Optional[str] = Field(None, alias="product-id", description="Product id")
    comments: str = Field(..., min_length=1, description="Review text")
    rating: int = Field(..., description="Rating from 1 to 5", example=5)
    customer_name: Optional[str] = Field(None, alias="customerName", description="Reviewer name")

    @field_validator("rating", mode="before")
    @classmethod
    def rating_in_range(cls, value: Any) -> Any:
        return _check_rating(value)


class TestimonialUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = None
    product: Optional[str] = Field(None, min_length=1)
    product_id: Optional[str] = Field(None, alias="product-id")
    comments: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = None
    customer_name: Optional[str] = Field(None, alias="customerName")

    @field_validator("rating", mode="before")
    @classmethod
    def rating_in_range(cls, value: Any) -> Any:
        if value is None:
            return value
        return _check_rating(value)

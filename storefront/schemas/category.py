from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List

from storefront.utils import slugify


def _check_slug(name: str) -> str:
    if not slugify(name):
        raise ValueError("Category name must contain letters or digits")
    return name


class CategoryResponse(BaseModel):
    path: str = Field(..., description="Category slug (primary key)", example="home-decor")
    name: str = Field(..., description="Category display name", example="Home Decor")


class DeletedCategory(BaseModel):
    path: str = Field(..., min_length=1)


class ModifiedCategory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., min_length=1, description="Current category path")
    new_name: str = Field(..., min_length=1, alias="newName", description="New display name")

    @field_validator("new_name")
    @classmethod
    def has_slug(cls, value: str) -> str:
        return _check_slug(value)


class AddedCategory(BaseModel):
    name: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def has_slug(cls, value: str) -> str:
        return _check_slug(value)


class CategoryChanges(BaseModel):
    """Batch of category edits submitted by the admin category editor"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "deletedCategories": [{"path": "old-stuff"}],
                "modifiedCategories": [{"path": "home-decor", "newName": "Home & Decor"}],
                "addedCategories": [{"name": "Wall Art"}],
            }
        },
    )

    deleted_categories: List[DeletedCategory] = Field(default_factory=list, alias="deletedCategories")
    modified_categories: List[ModifiedCategory] = Field(default_factory=list, alias="modifiedCategories")
    added_categories: List[AddedCategory] = Field(default_factory=list, alias="addedCategories")

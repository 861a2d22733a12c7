import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Request schema for adding a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    has_two_sizes: bool = Field(
        default=False, description="Dishes carry a Large and a Small price"
    )


class CategoryRename(BaseModel):
    """Request schema for renaming a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100, description="New name")


class CategoryResponse(BaseModel):
    """Response schema for a category."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    order: int
    has_two_sizes: bool


class CategoryRenameResponse(BaseModel):
    category: CategoryResponse
    affected_dish_ids: list[uuid.UUID] = Field(
        default_factory=list, description="Dishes now listed under the new name"
    )


class CategoryDeleteResponse(BaseModel):
    name: str
    deleted_dish_ids: list[uuid.UUID] = Field(default_factory=list)


class DishFields(BaseModel):
    """Mutable dish fields shared by create and update requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200, description="Dish name")
    price: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Large (or only) price"
    )
    second_price: Optional[float] = Field(
        default=None, gt=0, allow_inf_nan=False, description="Small price"
    )
    available: bool = Field(default=True, description="Shown to customers")
    image_url: str = Field(default="", max_length=500)


class DishCreate(DishFields):
    """Request schema for adding a dish to a category."""

    category_id: uuid.UUID


class DishUpdate(DishFields):
    """Request schema for editing a dish; order, category and badge are kept."""


class DishResponse(BaseModel):
    """Response schema for a single dish."""

    id: uuid.UUID
    name: str
    category_id: uuid.UUID
    category: str
    price: float
    second_price: Optional[float] = None
    available: bool
    is_top_seller: bool
    description: str = ""
    image_url: str = ""
    order: int


class MenuSection(BaseModel):
    """Dishes of one category, in display order."""

    category: CategoryResponse
    items: list[DishResponse] = Field(default_factory=list)


class MenuResponse(BaseModel):
    """Response schema for the menu bundle."""

    categories: list[CategoryResponse] = Field(default_factory=list)
    items: list[DishResponse] = Field(default_factory=list)
    menu_note: str = ""
    sections: list[MenuSection] = Field(
        default_factory=list, description="Dishes grouped by category"
    )


class MenuNoteUpdate(BaseModel):
    note: str = Field(default="", max_length=2000)

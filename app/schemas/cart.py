import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.config import settings


class Size(str, Enum):
    SINGLE = "Single"
    LARGE = "Large"
    SMALL = "Small"


class SizeQuantity(BaseModel):
    """Quantity of one size of a dish, priced at the time it was added."""

    size: Size
    price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int


class CartItemCreate(BaseModel):
    """Request schema for adding a dish to the cart."""

    model_config = ConfigDict(str_strip_whitespace=True)

    menu_item_id: uuid.UUID
    dish_name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    image_url: str = Field(default="", max_length=500)
    quantities: list[SizeQuantity] = Field(..., min_length=1)
    special_instructions: str = Field(
        default="", max_length=settings.max_special_instructions
    )

    @model_validator(mode="after")
    def check_quantities(self) -> "CartItemCreate":
        if any(q.quantity < 0 for q in self.quantities):
            raise ValueError("Quantities cannot be negative")
        if not any(q.quantity > 0 for q in self.quantities):
            raise ValueError("Select at least one item")
        sizes = [q.size for q in self.quantities]
        if len(set(sizes)) != len(sizes):
            raise ValueError("Each size can only be listed once")
        return self


class QuantityUpdate(BaseModel):
    """Sets the absolute quantity of one size; zero or less removes it."""

    size: Size
    quantity: int


class CartLine(BaseModel):
    """A cart line item as decoded from the store."""

    id: uuid.UUID
    user_id: str
    menu_item_id: uuid.UUID
    dish_name: str
    category: str
    image_url: str = ""
    quantities: list[SizeQuantity] = Field(default_factory=list)
    special_instructions: str = ""
    added_at: datetime


class CartResponse(BaseModel):
    """Response schema for the whole cart with derived totals."""

    items: list[CartLine] = Field(default_factory=list)
    count: int = Field(default=0, description="Total units across all lines")
    total: float = Field(default=0.0, description="Sum of price * quantity")


class CartClearResponse(BaseModel):
    deleted: int

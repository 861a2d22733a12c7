from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.category import Base, utcnow


class CartItem(Base):
    """One dish's quantities-by-size in one user's cart."""

    __tablename__ = "carts"
    __table_args__ = (
        UniqueConstraint("user_id", "menu_item_id", name="uq_cart_user_dish"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    # Snapshot reference; deleting the dish leaves the line in place
    menu_item_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    dish_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(500))
    special_instructions: Mapped[Optional[str]] = mapped_column(String(2000))

    # [{"size": "Large", "price": 10.0, "quantity": 2}, ...]
    quantities: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSON)

    added_at: Mapped[datetime] = mapped_column(default=utcnow)

    def __repr__(self) -> str:
        return f"<CartItem(dish_name='{self.dish_name}', user_id='{self.user_id}')>"

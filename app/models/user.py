from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.category import Base, utcnow


class UserProfile(Base):
    """Profile of a user signed in through the external auth provider."""

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    display_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    phone_number: Mapped[Optional[str]] = mapped_column(String(20))
    email_verified: Mapped[bool] = mapped_column(nullable=False, default=False)

    # "customer" or "admin"
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="customer")

    # "active", "suspended" or "pending_verification"
    account_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="pending_verification"
    )

    last_login: Mapped[Optional[datetime]] = mapped_column()
    password_changed_at: Mapped[Optional[datetime]] = mapped_column()

    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"<UserProfile(uid='{self.uid}', role='{self.role}')>"


class Order(Base):
    """A past order; written by the order pipeline, read-only here."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    # [{"item_id": ..., "name": ..., "quantity": 2, "size": "Large", "price": 10.0}]
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False, default="cash")
    special_instructions: Mapped[Optional[str]] = mapped_column(Text)
    order_date: Mapped[datetime] = mapped_column(default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Order(id='{self.id}', status='{self.status}')>"

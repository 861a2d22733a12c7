import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.category import Base, Category, utcnow


class MenuItem(Base):
    """A single dish on the menu, with one or two price tiers."""

    __tablename__ = "menu_items"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    category_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Large (or only) price; Small price when the category has two sizes
    price: Mapped[float] = mapped_column(Float, nullable=False)
    second_price: Mapped[float | None] = mapped_column(Float)

    available: Mapped[bool] = mapped_column(nullable=False, default=True)
    is_top_seller: Mapped[bool] = mapped_column(nullable=False, default=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    order: Mapped[int] = mapped_column(nullable=False, default=1)

    category: Mapped[Category] = relationship(lazy="joined")

    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @property
    def category_name(self) -> str:
        return self.category.name

    def __repr__(self) -> str:
        return f"<MenuItem(name='{self.name}', price={self.price}, category_id={self.category_id})>"

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.category import Base

MENU_SETTINGS_KEY = "menu"


class MenuSetting(Base):
    """Key/value settings document; the ``menu`` row holds the menu note."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")

from app.models.cart_item import CartItem
from app.models.category import Base, Category
from app.models.menu_item import MenuItem
from app.models.menu_setting import MENU_SETTINGS_KEY, MenuSetting
from app.models.user import Order, UserProfile

__all__ = [
    "Base",
    "CartItem",
    "Category",
    "MENU_SETTINGS_KEY",
    "MenuItem",
    "MenuSetting",
    "Order",
    "UserProfile",
]

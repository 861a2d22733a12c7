from app.schemas.address import AddressDetails, AddressSearchResponse, AddressSuggestion
from app.schemas.cart import (
    CartClearResponse,
    CartItemCreate,
    CartLine,
    CartResponse,
    QuantityUpdate,
    Size,
    SizeQuantity,
)
from app.schemas.menu import (
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryRename,
    CategoryRenameResponse,
    CategoryResponse,
    DishCreate,
    DishResponse,
    DishUpdate,
    MenuNoteUpdate,
    MenuResponse,
    MenuSection,
)
from app.schemas.user import (
    OrderResponse,
    PasswordChange,
    PasswordChangeResponse,
    UserProfileCreate,
    UserProfileResponse,
    UserProfileUpdate,
)

__all__ = [
    "AddressDetails",
    "AddressSearchResponse",
    "AddressSuggestion",
    "CartClearResponse",
    "CartItemCreate",
    "CartLine",
    "CartResponse",
    "CategoryCreate",
    "CategoryDeleteResponse",
    "CategoryRename",
    "CategoryRenameResponse",
    "CategoryResponse",
    "DishCreate",
    "DishResponse",
    "DishUpdate",
    "MenuNoteUpdate",
    "MenuResponse",
    "MenuSection",
    "OrderResponse",
    "PasswordChange",
    "PasswordChangeResponse",
    "QuantityUpdate",
    "Size",
    "SizeQuantity",
    "UserProfileCreate",
    "UserProfileResponse",
    "UserProfileUpdate",
]

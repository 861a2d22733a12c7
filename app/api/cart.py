"""Cart API endpoints for the signed-in user."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_session
from app.models.user import UserProfile
from app.schemas.cart import CartClearResponse, CartItemCreate, CartResponse, QuantityUpdate
from app.services import cart

router = APIRouter(prefix="/api/cart", tags=["cart"])


async def _cart_response(session: AsyncSession, user_id: str) -> CartResponse:
    items = await cart.get_cart(session, user_id)
    return CartResponse(
        items=items, count=cart.cart_count(items), total=cart.cart_total(items)
    )


@router.get("", response_model=CartResponse)
async def read_cart(
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CartResponse:
    return await _cart_response(session, user.uid)


@router.post(
    "/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED
)
async def add_item(
    request: CartItemCreate,
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CartResponse:
    """
    Add a dish to the cart and return the refreshed cart.

    Adding a dish that is already in the cart adds to its quantities.
    """
    await cart.add_to_cart(session, user.uid, request)
    return await _cart_response(session, user.uid)


@router.patch("/items/{cart_item_id}", response_model=CartResponse)
async def update_item_quantity(
    cart_item_id: uuid.UUID,
    request: QuantityUpdate,
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CartResponse:
    await cart.update_cart_item_quantity(
        session, user.uid, cart_item_id, request.size, request.quantity
    )
    return await _cart_response(session, user.uid)


@router.delete("/items/{cart_item_id}", response_model=CartResponse)
async def remove_item(
    cart_item_id: uuid.UUID,
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CartResponse:
    await cart.remove_from_cart(session, user.uid, cart_item_id)
    return await _cart_response(session, user.uid)


@router.delete("", response_model=CartClearResponse)
async def clear(
    user: UserProfile = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CartClearResponse:
    deleted = await cart.clear_cart(session, user.uid)
    return CartClearResponse(deleted=deleted)

"""Cart service: per-user cart lines with merge-on-add and collapse-on-zero."""

import logging
import uuid
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import atomic
from app.models.cart_item import CartItem
from app.models.category import utcnow
from app.schemas.cart import CartItemCreate, CartLine, Size, SizeQuantity
from app.services.errors import DeserializationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_quantities_adapter = TypeAdapter(list[SizeQuantity])


def _decode(row: CartItem) -> CartLine:
    """Turn a stored cart row into a CartLine, rejecting malformed documents."""
    try:
        quantities = _quantities_adapter.validate_python(row.quantities or [])
    except SchemaError as e:
        raise DeserializationError(f"Cart item {row.id} has malformed quantities") from e

    return CartLine(
        id=row.id,
        user_id=row.user_id,
        menu_item_id=row.menu_item_id,
        dish_name=row.dish_name,
        category=row.category,
        image_url=row.image_url or "",
        quantities=quantities,
        special_instructions=row.special_instructions or "",
        added_at=row.added_at,
    )


def _encode(quantities: list[SizeQuantity]) -> list[dict[str, Any]]:
    return [q.model_dump(mode="json") for q in quantities]


def merge_quantities(
    existing: list[SizeQuantity], incoming: list[SizeQuantity]
) -> list[SizeQuantity]:
    """
    Add incoming quantities onto existing ones, size by size.

    A size already present keeps its position and price and gains the
    incoming quantity; a new size is appended.
    """
    merged = [q.model_copy() for q in existing]
    for new in incoming:
        match = next((q for q in merged if q.size == new.size), None)
        if match is not None:
            match.quantity += new.quantity
        else:
            merged.append(new.model_copy())
    return merged


def merge_instructions(existing: str, incoming: str) -> str:
    if existing and incoming:
        return f"{existing}\n{incoming}"
    return existing or incoming


def cart_count(items: list[CartLine]) -> int:
    """Total number of units across every line and size."""
    return sum(q.quantity for item in items for q in item.quantities)


def cart_total(items: list[CartLine]) -> float:
    """Sum of price * quantity across every line and size."""
    return sum(q.price * q.quantity for item in items for q in item.quantities)


async def _get_line(
    session: AsyncSession, user_id: str, cart_item_id: uuid.UUID
) -> CartItem:
    result = await session.execute(
        select(CartItem).where(
            CartItem.id == cart_item_id, CartItem.user_id == user_id
        )
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError("Cart item not found")
    return row


async def get_cart(session: AsyncSession, user_id: str) -> list[CartLine]:
    """
    Get every cart line of a user.

    Args:
        session: Database session
        user_id: Owner of the cart

    Returns:
        Lines ordered by when they were last added to

    Raises:
        DeserializationError: If a stored line is malformed
    """
    async with atomic(session):
        result = await session.execute(
            select(CartItem)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.added_at)
        )
        return [_decode(row) for row in result.scalars().all()]


async def add_to_cart(
    session: AsyncSession, user_id: str, item: CartItemCreate
) -> CartLine:
    """
    Add a dish to the cart, merging into the existing line for that dish.

    Quantities of sizes already in the line are increased, not replaced;
    special instructions are appended on a new line.

    Args:
        session: Database session
        user_id: Owner of the cart
        item: Dish snapshot and the quantities to add

    Returns:
        The resulting cart line

    Raises:
        ValidationError: If no size has a positive quantity
    """
    incoming = [q for q in item.quantities if q.quantity > 0]
    if not incoming:
        raise ValidationError("Select at least one item")

    async with atomic(session):
        result = await session.execute(
            select(CartItem).where(
                CartItem.user_id == user_id,
                CartItem.menu_item_id == item.menu_item_id,
            )
        )
        row = result.scalars().first()

        if row is None:
            row = CartItem(
                user_id=user_id,
                menu_item_id=item.menu_item_id,
                dish_name=item.dish_name,
                category=item.category,
                image_url=item.image_url,
                quantities=_encode(merge_quantities([], incoming)),
                special_instructions=item.special_instructions,
                added_at=utcnow(),
            )
            session.add(row)
            logger.info("New cart line for user %s, dish %s", user_id, item.menu_item_id)
        else:
            current = _decode(row)
            row.quantities = _encode(merge_quantities(current.quantities, incoming))
            row.special_instructions = merge_instructions(
                current.special_instructions, item.special_instructions
            )
            row.added_at = utcnow()
            logger.info("Merged into cart line %s for user %s", row.id, user_id)

    return _decode(row)


async def update_cart_item_quantity(
    session: AsyncSession,
    user_id: str,
    cart_item_id: uuid.UUID,
    size: Size,
    quantity: int,
) -> Optional[CartLine]:
    """
    Set the quantity of one size in a cart line.

    Sizes left at zero or below are dropped; when none remain the whole
    line is deleted.

    Returns:
        The updated line, or None if the line was deleted

    Raises:
        NotFoundError: If the line does not exist or belongs to another user
    """
    async with atomic(session):
        row = await _get_line(session, user_id, cart_item_id)
        current = _decode(row)

        updated = [
            q.model_copy(update={"quantity": quantity}) if q.size == size else q
            for q in current.quantities
        ]
        remaining = [q for q in updated if q.quantity > 0]

        if not remaining:
            await session.delete(row)
            logger.info("Cart line %s emptied and removed", cart_item_id)
            return None

        row.quantities = _encode(remaining)

    return _decode(row)


async def remove_from_cart(
    session: AsyncSession, user_id: str, cart_item_id: uuid.UUID
) -> None:
    """Delete one of the user's cart lines; a missing line is not an error."""
    async with atomic(session):
        await session.execute(
            delete(CartItem).where(
                CartItem.id == cart_item_id, CartItem.user_id == user_id
            )
        )

    logger.info("Removed cart line %s for user %s", cart_item_id, user_id)


async def clear_cart(session: AsyncSession, user_id: str) -> int:
    """
    Delete every line in the user's cart in one transaction.

    Returns:
        Number of lines deleted
    """
    async with atomic(session):
        result = await session.execute(
            delete(CartItem).where(CartItem.user_id == user_id)
        )

    logger.info("Cleared %d cart lines for user %s", result.rowcount, user_id)
    return result.rowcount

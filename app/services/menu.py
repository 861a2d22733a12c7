"""Menu catalog service: categories, dishes and the menu note."""

import logging
import uuid
from dataclasses import dataclass, field

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import atomic
from app.models.category import Category
from app.models.menu_item import MenuItem
from app.models.menu_setting import MENU_SETTINGS_KEY, MenuSetting
from app.schemas.menu import DishCreate, DishUpdate
from app.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class MenuData:
    """Categories and dishes in display order, plus the free-text menu note."""

    categories: list[Category] = field(default_factory=list)
    items: list[MenuItem] = field(default_factory=list)
    menu_note: str = ""


async def _get_category_by_name(session: AsyncSession, name: str) -> Category:
    result = await session.execute(select(Category).where(Category.name == name))
    category = result.scalar_one_or_none()
    if category is None:
        raise NotFoundError(f"Category '{name}' not found")
    return category


async def _dish_ids_in(session: AsyncSession, category_id: uuid.UUID) -> list[uuid.UUID]:
    result = await session.execute(
        select(MenuItem.id)
        .where(MenuItem.category_id == category_id)
        .order_by(MenuItem.order)
    )
    return list(result.scalars().all())


def _clean_name(name: str, what: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"Please enter a {what} name")
    return cleaned


async def add_category(
    session: AsyncSession, name: str, has_two_sizes: bool = False
) -> Category:
    """
    Add a category at the end of the menu.

    Args:
        session: Database session
        name: Display name (trimmed, must not be empty)
        has_two_sizes: Whether its dishes carry a second (Small) price

    Returns:
        The new Category, ordered one past the current maximum

    Raises:
        ValidationError: If the name is empty
    """
    name = _clean_name(name, "category")

    async with atomic(session):
        max_order = await session.scalar(select(func.max(Category.order)))
        category = Category(
            name=name,
            has_two_sizes=has_two_sizes,
            order=(max_order or 0) + 1,
        )
        session.add(category)

    logger.info("Added category %r at order %d", category.name, category.order)
    return category


async def update_category_name(
    session: AsyncSession, old_name: str, new_name: str
) -> tuple[Category, list[uuid.UUID]]:
    """
    Rename a category.

    Dishes point at the category by id, so the rename touches only the
    category row; every dish that was listed under ``old_name`` is listed
    under ``new_name`` once the transaction commits.

    Args:
        session: Database session
        old_name: Current category name
        new_name: Replacement name (trimmed, must not be empty)

    Returns:
        The renamed Category and the ids of the dishes now listed under
        the new name

    Raises:
        NotFoundError: If no category is named ``old_name``
        ValidationError: If the new name is empty or already taken
    """
    new_name = _clean_name(new_name, "category")

    async with atomic(session):
        category = await _get_category_by_name(session, old_name)
        affected = await _dish_ids_in(session, category.id)
        category.name = new_name

    logger.info(
        "Renamed category %r to %r (%d dishes)", old_name, new_name, len(affected)
    )
    return category, affected


async def delete_category(session: AsyncSession, name: str) -> list[uuid.UUID]:
    """
    Delete a category together with every dish in it, in one transaction.

    There is no soft delete; cart lines that reference the removed dishes
    are left as they are.

    Returns:
        Ids of the deleted dishes

    Raises:
        NotFoundError: If no category is named ``name``
    """
    async with atomic(session):
        category = await _get_category_by_name(session, name)
        deleted = await _dish_ids_in(session, category.id)
        await session.execute(delete(MenuItem).where(MenuItem.category_id == category.id))
        await session.execute(delete(Category).where(Category.id == category.id))

    logger.info("Deleted category %r and %d dishes", name, len(deleted))
    return deleted


async def add_dish(session: AsyncSession, data: DishCreate) -> MenuItem:
    """
    Add a dish at the end of its category.

    Raises:
        NotFoundError: If the category does not exist
        ValidationError: If a second price is given for a single-size category
    """
    name = _clean_name(data.name, "dish")

    async with atomic(session):
        category = await session.get(Category, data.category_id)
        if category is None:
            raise NotFoundError(f"Category {data.category_id} not found")
        if data.second_price is not None and not category.has_two_sizes:
            raise ValidationError(
                f"Category '{category.name}' has a single size; leave the second price empty"
            )

        max_order = await session.scalar(
            select(func.max(MenuItem.order)).where(MenuItem.category_id == category.id)
        )
        dish = MenuItem(
            name=name,
            category=category,
            price=data.price,
            second_price=data.second_price,
            available=data.available,
            image_url=data.image_url,
            is_top_seller=False,
            description="",
            order=(max_order or 0) + 1,
        )
        session.add(dish)

    logger.info("Added dish %r to %r at order %d", dish.name, category.name, dish.order)
    return dish


async def update_dish(
    session: AsyncSession, dish_id: uuid.UUID, data: DishUpdate
) -> MenuItem:
    """
    Overwrite a dish's editable fields.

    Order, category and the top-seller badge are not touched.

    Raises:
        NotFoundError: If the dish does not exist
        ValidationError: If a second price is given for a single-size category
    """
    name = _clean_name(data.name, "dish")

    async with atomic(session):
        dish = await session.get(MenuItem, dish_id)
        if dish is None:
            raise NotFoundError(f"Dish {dish_id} not found")
        if data.second_price is not None and not dish.category.has_two_sizes:
            raise ValidationError(
                f"Category '{dish.category.name}' has a single size; leave the second price empty"
            )

        dish.name = name
        dish.price = data.price
        dish.second_price = data.second_price
        dish.available = data.available
        dish.image_url = data.image_url

    logger.info("Updated dish %s", dish_id)
    return dish


async def delete_dish(session: AsyncSession, dish_id: uuid.UUID) -> None:
    """Delete a dish by id; deleting a missing dish is not an error."""
    async with atomic(session):
        await session.execute(delete(MenuItem).where(MenuItem.id == dish_id))

    logger.info("Deleted dish %s", dish_id)


async def get_menu_note(session: AsyncSession) -> str:
    setting = await session.get(MenuSetting, MENU_SETTINGS_KEY)
    return setting.note if setting is not None else ""


async def set_menu_note(session: AsyncSession, note: str) -> str:
    """Create or replace the free-text note shown above the menu."""
    async with atomic(session):
        setting = await session.get(MenuSetting, MENU_SETTINGS_KEY)
        if setting is None:
            setting = MenuSetting(key=MENU_SETTINGS_KEY)
            session.add(setting)
        setting.note = note.strip()

    return setting.note


async def get_menu_data(session: AsyncSession) -> MenuData:
    """
    Fetch the whole menu: categories, dishes and the menu note.

    Both collections are sorted by ``order`` ascending. Any failing read
    fails the whole call.

    Args:
        session: Database session

    Returns:
        MenuData bundle, unfiltered (unavailable dishes included)
    """
    async with atomic(session):
        categories = await session.execute(
            select(Category).order_by(Category.order, Category.name)
        )
        items = await session.execute(
            select(MenuItem).order_by(MenuItem.order, MenuItem.name)
        )
        menu_note = await get_menu_note(session)

        return MenuData(
            categories=list(categories.scalars().all()),
            items=list(items.scalars().all()),
            menu_note=menu_note,
        )


def visible_dishes(items: list[MenuItem], is_admin: bool) -> list[MenuItem]:
    """Hide unavailable dishes from everyone but admins."""
    if is_admin:
        return list(items)
    return [item for item in items if item.available]


def group_by_category(
    categories: list[Category], items: list[MenuItem], is_admin: bool
) -> list[tuple[Category, list[MenuItem]]]:
    """
    Group dishes under their categories, in category order.

    Admins see every category, even empty ones, so they can add dishes;
    other viewers only see categories with at least one visible dish.
    """
    shown = visible_dishes(items, is_admin)
    sections = []
    for category in categories:
        dishes = [item for item in shown if item.category_id == category.id]
        if is_admin or dishes:
            sections.append((category, dishes))
    return sections

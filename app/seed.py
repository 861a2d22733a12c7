"""Database seeder for the restaurant menu."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import AsyncSessionLocal, atomic, engine
from app.models import Base, Category, MenuItem, MenuSetting, MENU_SETTINGS_KEY
from app.services.validation import validate_price

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_MENU_FILE = Path("data/menu.json")


async def seed_menu(session: AsyncSession, data: dict[str, Any]) -> tuple[int, int]:
    """
    Replace the menu with the categories and dishes in ``data``.

    ``data`` holds ``items`` (``category``, ``name``, ``price``, optional
    ``secondPrice`` and ``isTopSeller``) and an optional ``note``.
    Categories are created in first-seen order and get two sizes when any
    of their dishes has a second price; dishes keep file order.

    Returns:
        Number of categories and dishes created
    """
    items = data.get("items", [])

    # Group by category, preserving first-seen order
    grouped: dict[str, list[dict[str, Any]]] = {}
    for entry in items:
        name = entry.get("name", "").strip()
        category_name = entry.get("category", "").strip()
        if not name or not category_name:
            continue
        grouped.setdefault(category_name, []).append(entry)

    total_dishes = 0
    async with atomic(session):
        # Clear the existing menu before re-import
        await session.execute(delete(MenuItem))
        await session.execute(delete(Category))

        for cat_order, (category_name, entries) in enumerate(grouped.items(), 1):
            category = Category(
                name=category_name,
                order=cat_order,
                has_two_sizes=any(e.get("secondPrice") for e in entries),
            )
            session.add(category)

            for dish_order, entry in enumerate(entries, 1):
                second_price = entry.get("secondPrice")
                session.add(
                    MenuItem(
                        name=entry["name"].strip()[:200],
                        category=category,
                        price=validate_price(entry["price"]),
                        second_price=(
                            validate_price(second_price, "second price")
                            if second_price
                            else None
                        ),
                        is_top_seller=bool(entry.get("isTopSeller", False)),
                        available=bool(entry.get("available", True)),
                        description=(entry.get("description") or "")[:500],
                        order=dish_order,
                    )
                )
                total_dishes += 1

        setting = await session.get(MenuSetting, MENU_SETTINGS_KEY)
        if setting is None:
            setting = MenuSetting(key=MENU_SETTINGS_KEY)
            session.add(setting)
        setting.note = data.get("note", "")

    logger.info("Seeded %d categories with %d dishes", len(grouped), total_dishes)
    return len(grouped), total_dishes


async def seed_from_json(file_path: str) -> None:
    """
    Seed the database from a JSON menu file.

    Args:
        file_path: Path to JSON file with menu data
    """
    path = Path(file_path)
    if not path.exists():
        logger.error("File not found: %s", file_path)
        return

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not data.get("items"):
        logger.warning("No menu items found in JSON file")
        return

    async with AsyncSessionLocal() as session:
        await seed_menu(session, data)


async def main() -> None:
    """Main seeding function."""
    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    json_file = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_MENU_FILE
    await seed_from_json(str(json_file))
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

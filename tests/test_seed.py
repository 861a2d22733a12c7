"""Tests for the menu seeder."""

import json
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Category, MenuItem
from app.seed import seed_menu
from app.services import menu

MENU_FILE = Path(__file__).resolve().parent.parent / "data" / "menu.json"

DATA = {
    "note": "Ask about today's specials.",
    "items": [
        {"category": "Pies", "name": "Spinach Pie", "price": 80, "secondPrice": 70, "isTopSeller": True},
        {"category": "Salads", "name": "Greek Salad", "price": 12},
        {"category": "Pies", "name": "Cheese Pie", "price": 75, "secondPrice": 65},
        {"category": "Salads", "name": "", "price": 9},
    ],
}


async def test_seed_menu_groups_in_file_order(session: AsyncSession) -> None:
    """Test categories keep first-seen order and dishes keep file order."""
    counts = await seed_menu(session, DATA)

    assert counts == (2, 3)

    data = await menu.get_menu_data(session)
    assert [(c.name, c.order, c.has_two_sizes) for c in data.categories] == [
        ("Pies", 1, True),
        ("Salads", 2, False),
    ]
    pies = [i for i in data.items if i.category_name == "Pies"]
    assert [(i.name, i.order) for i in pies] == [("Spinach Pie", 1), ("Cheese Pie", 2)]
    assert pies[0].is_top_seller is True
    assert data.menu_note == "Ask about today's specials."


async def test_seed_menu_replaces_existing(
    session: AsyncSession, sample_menu: dict[str, Category]
) -> None:
    """Test seeding again clears the previous menu."""
    await seed_menu(session, DATA)

    names = await session.execute(select(MenuItem.name))
    assert sorted(names.scalars().all()) == ["Cheese Pie", "Greek Salad", "Spinach Pie"]


async def test_seed_bundled_menu(session: AsyncSession) -> None:
    """Test the bundled menu file loads."""
    data = json.loads(MENU_FILE.read_text(encoding="utf-8"))

    categories, dishes = await seed_menu(session, data)

    assert categories > 0
    assert dishes == len(data["items"])


async def test_seed_menu_accepts_null_description(session: AsyncSession) -> None:
    """Test a dish with a null description is stored with an empty one."""
    data = {
        "items": [
            {"category": "Desserts", "name": "Baklava", "price": 6, "description": None},
        ]
    }

    assert await seed_menu(session, data) == (1, 1)

    dish = await session.scalar(select(MenuItem).where(MenuItem.name == "Baklava"))
    assert dish.description == ""

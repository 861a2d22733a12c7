"""Menu API endpoints: public menu and admin menu management."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_optional_user, require_admin
from app.database import get_session
from app.models.category import Category
from app.models.menu_item import MenuItem
from app.models.user import UserProfile
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
from app.services import menu

router = APIRouter(prefix="/api/menu", tags=["menu"])


def _category_to_schema(category: Category) -> CategoryResponse:
    return CategoryResponse.model_validate(category)


def _dish_to_schema(item: MenuItem) -> DishResponse:
    return DishResponse(
        id=item.id,
        name=item.name,
        category_id=item.category_id,
        category=item.category_name,
        price=item.price,
        second_price=item.second_price,
        available=item.available,
        is_top_seller=item.is_top_seller,
        description=item.description,
        image_url=item.image_url,
        order=item.order,
    )


@router.get("", response_model=MenuResponse)
async def read_menu(
    session: AsyncSession = Depends(get_session),
    viewer: Optional[UserProfile] = Depends(get_optional_user),
) -> MenuResponse:
    """
    Get the menu as seen by the caller.

    Unavailable dishes are hidden from everyone but admins, and only admins
    get sections for categories without dishes.
    """
    is_admin = viewer is not None and viewer.is_admin
    data = await menu.get_menu_data(session)

    sections = [
        MenuSection(
            category=_category_to_schema(category),
            items=[_dish_to_schema(item) for item in items],
        )
        for category, items in menu.group_by_category(
            data.categories, data.items, is_admin
        )
    ]

    return MenuResponse(
        categories=[_category_to_schema(c) for c in data.categories],
        items=[_dish_to_schema(i) for i in menu.visible_dishes(data.items, is_admin)],
        menu_note=data.menu_note,
        sections=sections,
    )


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_category(
    request: CategoryCreate, session: AsyncSession = Depends(get_session)
) -> CategoryResponse:
    category = await menu.add_category(session, request.name, request.has_two_sizes)
    return _category_to_schema(category)


@router.patch(
    "/categories/{name}",
    response_model=CategoryRenameResponse,
    dependencies=[Depends(require_admin)],
)
async def rename_category(
    name: str, request: CategoryRename, session: AsyncSession = Depends(get_session)
) -> CategoryRenameResponse:
    category, affected = await menu.update_category_name(session, name, request.name)
    return CategoryRenameResponse(
        category=_category_to_schema(category), affected_dish_ids=affected
    )


@router.delete(
    "/categories/{name}",
    response_model=CategoryDeleteResponse,
    dependencies=[Depends(require_admin)],
)
async def remove_category(
    name: str, session: AsyncSession = Depends(get_session)
) -> CategoryDeleteResponse:
    deleted = await menu.delete_category(session, name)
    return CategoryDeleteResponse(name=name, deleted_dish_ids=deleted)


@router.post(
    "/dishes",
    response_model=DishResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_dish(
    request: DishCreate, session: AsyncSession = Depends(get_session)
) -> DishResponse:
    dish = await menu.add_dish(session, request)
    return _dish_to_schema(dish)


@router.put(
    "/dishes/{dish_id}",
    response_model=DishResponse,
    dependencies=[Depends(require_admin)],
)
async def edit_dish(
    dish_id: uuid.UUID, request: DishUpdate, session: AsyncSession = Depends(get_session)
) -> DishResponse:
    dish = await menu.update_dish(session, dish_id, request)
    return _dish_to_schema(dish)


@router.delete(
    "/dishes/{dish_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def remove_dish(
    dish_id: uuid.UUID, session: AsyncSession = Depends(get_session)
) -> Response:
    await menu.delete_dish(session, dish_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/note",
    response_model=MenuNoteUpdate,
    dependencies=[Depends(require_admin)],
)
async def update_menu_note(
    request: MenuNoteUpdate, session: AsyncSession = Depends(get_session)
) -> MenuNoteUpdate:
    note = await menu.set_menu_note(session, request.note)
    return MenuNoteUpdate(note=note)

"""Tests for menu API endpoints."""

from httpx import AsyncClient

from app.models import Category, UserProfile


async def test_public_menu_hides_unavailable_dishes(
    client: AsyncClient, sample_menu: dict[str, Category]
) -> None:
    """Test anonymous viewers only see available dishes and non-empty categories."""
    response = await client.get("/api/menu")

    assert response.status_code == 200
    data = response.json()

    names = [item["name"] for item in data["items"]]
    assert "Pastourma Pie" not in names
    assert len(names) == 4
    assert [s["category"]["name"] for s in data["sections"]] == ["Salads", "Pies"]
    assert [c["name"] for c in data["categories"]] == ["Salads", "Pies", "Desserts"]
    assert data["menu_note"] == ""


async def test_admin_menu_shows_everything(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test admins see unavailable dishes and empty categories."""
    response = await client.get("/api/menu", headers={"X-User-Id": admin.uid})

    assert response.status_code == 200
    data = response.json()
    assert len(data["items"]) == 5
    sections = {s["category"]["name"]: s["items"] for s in data["sections"]}
    assert sections["Desserts"] == []
    assert len(sections["Pies"]) == 2


async def test_admin_routes_require_sign_in(client: AsyncClient) -> None:
    """Test anonymous callers get 401 from admin routes."""
    response = await client.post("/api/menu/categories", json={"name": "Soups"})
    assert response.status_code == 401


async def test_admin_routes_reject_customers(
    client: AsyncClient, customer: UserProfile
) -> None:
    """Test customers get 403 from admin routes."""
    response = await client.post(
        "/api/menu/categories",
        json={"name": "Soups"},
        headers={"X-User-Id": customer.uid},
    )
    assert response.status_code == 403


async def test_create_category_and_dish(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test an admin adds a category and a dish to it."""
    headers = {"X-User-Id": admin.uid}

    response = await client.post(
        "/api/menu/categories",
        json={"name": "Lamb Dishes", "has_two_sizes": True},
        headers=headers,
    )
    assert response.status_code == 201
    category = response.json()
    assert category["order"] == 4

    response = await client.post(
        "/api/menu/dishes",
        json={
            "name": "Lamb Kleftiko",
            "category_id": category["id"],
            "price": 95,
            "second_price": 85,
        },
        headers=headers,
    )
    assert response.status_code == 201
    dish = response.json()
    assert dish["category"] == "Lamb Dishes"
    assert dish["order"] == 1
    assert dish["is_top_seller"] is False


async def test_create_dish_rejects_bad_price(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test zero and negative prices fail request validation."""
    for price in (0, -5):
        response = await client.post(
            "/api/menu/dishes",
            json={
                "name": "Free Salad",
                "category_id": str(sample_menu["Salads"].id),
                "price": price,
            },
            headers={"X-User-Id": admin.uid},
        )
        assert response.status_code == 422


async def test_create_dish_cross_field_violation(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test a second price on a single-size category returns 422."""
    response = await client.post(
        "/api/menu/dishes",
        json={
            "name": "Beet Salad",
            "category_id": str(sample_menu["Salads"].id),
            "price": 10,
            "second_price": 8,
        },
        headers={"X-User-Id": admin.uid},
    )
    assert response.status_code == 422
    assert "single size" in response.json()["detail"]


async def test_rename_category(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test renaming a category through the API relabels its dishes."""
    response = await client.patch(
        "/api/menu/categories/Salads",
        json={"name": "Greek Salads"},
        headers={"X-User-Id": admin.uid},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["category"]["name"] == "Greek Salads"
    assert len(data["affected_dish_ids"]) == 3

    menu = (await client.get("/api/menu")).json()
    salads = [i for i in menu["items"] if i["category_id"] == data["category"]["id"]]
    assert {i["category"] for i in salads} == {"Greek Salads"}


async def test_rename_missing_category(
    client: AsyncClient, admin: UserProfile
) -> None:
    """Test renaming a missing category returns 404."""
    response = await client.patch(
        "/api/menu/categories/Soups",
        json={"name": "Hot Soups"},
        headers={"X-User-Id": admin.uid},
    )
    assert response.status_code == 404


async def test_delete_category(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test deleting a category removes its dishes from the menu."""
    response = await client.delete(
        "/api/menu/categories/Pies", headers={"X-User-Id": admin.uid}
    )

    assert response.status_code == 200
    assert len(response.json()["deleted_dish_ids"]) == 2

    menu = (await client.get("/api/menu", headers={"X-User-Id": admin.uid})).json()
    assert all(item["category"] != "Pies" for item in menu["items"])
    assert "Pies" not in [c["name"] for c in menu["categories"]]


async def test_update_and_delete_dish(
    client: AsyncClient, sample_menu: dict[str, Category], admin: UserProfile
) -> None:
    """Test editing then deleting a dish."""
    headers = {"X-User-Id": admin.uid}
    menu = (await client.get("/api/menu", headers=headers)).json()
    dish = next(i for i in menu["items"] if i["name"] == "Horiatiki")

    response = await client.put(
        f"/api/menu/dishes/{dish['id']}",
        json={"name": "Horiatiki Salad", "price": 15, "available": False},
        headers=headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Horiatiki Salad"
    assert updated["available"] is False
    assert updated["order"] == dish["order"]

    response = await client.delete(f"/api/menu/dishes/{dish['id']}", headers=headers)
    assert response.status_code == 204

    menu = (await client.get("/api/menu", headers=headers)).json()
    assert dish["id"] not in [i["id"] for i in menu["items"]]


async def test_update_missing_dish(client: AsyncClient, admin: UserProfile) -> None:
    """Test editing a missing dish returns 404."""
    response = await client.put(
        "/api/menu/dishes/00000000-0000-0000-0000-000000000000",
        json={"name": "Ghost", "price": 5},
        headers={"X-User-Id": admin.uid},
    )
    assert response.status_code == 404


async def test_menu_note(client: AsyncClient, admin: UserProfile) -> None:
    """Test an admin sets the note shown with the menu."""
    response = await client.put(
        "/api/menu/note",
        json={"note": "Baklava contains nuts."},
        headers={"X-User-Id": admin.uid},
    )
    assert response.status_code == 200

    menu = (await client.get("/api/menu")).json()
    assert menu["menu_note"] == "Baklava contains nuts."

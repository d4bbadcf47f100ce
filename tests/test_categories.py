import pytest

from app.models.category import slugify

CATEGORIES_URL = "/api/categories"


@pytest.mark.parametrize(
    "name, slug",
    [
        ("Fresh Eggs!!", "fresh-eggs"),
        ("fresh eggs", "fresh-eggs"),
        ("Fresh Herbs!", "fresh-herbs"),
        ("fresh--herbs", "fresh-herbs"),
        ("  Jams & Preserves  ", "jams-preserves"),
        ("--Honey--", "honey"),
        ("Crème Fraîche", "cr-me-fra-che"),
        ("!!!", ""),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


async def test_admin_creates_category_with_derived_slug(client, admin_headers):
    response = await client.post(
        CATEGORIES_URL,
        json={"name": "Fresh Eggs!!", "description": "Free-range."},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "fresh-eggs"
    assert body["name"] == "Fresh Eggs!!"


@pytest.mark.parametrize(
    "first, second",
    [("Fresh Eggs!!", "fresh eggs"), ("Fresh Herbs!", "fresh--herbs")],
)
async def test_names_with_same_slug_conflict(client, store, admin_headers, first, second):
    created = await client.post(CATEGORIES_URL, json={"name": first}, headers=admin_headers)
    duplicate = await client.post(CATEGORIES_URL, json={"name": second}, headers=admin_headers)

    assert created.status_code == 201
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "Category with this name already exists"
    assert await store.categories.count_documents({}) == 1


async def test_name_without_slug_characters_is_rejected(client, admin_headers):
    response = await client.post(CATEGORIES_URL, json={"name": "!!!"}, headers=admin_headers)
    assert response.status_code == 400


async def test_non_admin_cannot_create_category(client, farmer_headers, consumer_headers):
    for headers in (farmer_headers, consumer_headers):
        response = await client.post(CATEGORIES_URL, json={"name": "Meat"}, headers=headers)
        assert response.status_code == 401

    assert (await client.post(CATEGORIES_URL, json={"name": "Meat"})).status_code == 401


async def test_list_categories_is_public_and_sorted(client, admin_headers):
    for name in ("Honey", "Dairy", "Vegetables"):
        await client.post(CATEGORIES_URL, json={"name": name}, headers=admin_headers)

    response = await client.get(CATEGORIES_URL)

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Dairy", "Honey", "Vegetables"]

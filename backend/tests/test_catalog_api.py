# backend/tests/test_catalog_api.py
"""
Pruebas de los endpoints del catálogo contra SQLite en memoria.
"""

from sqlalchemy import func, select

from app.db.models.product_model import ProductCareInstruction, ProductColor
from app.db.models.region_model import RegionCategoryMapping, RegionProductMapping, RegionSubCategoryMapping

API = "/api/v1"


async def _create_region(client, name="Dubai", code="AE", **extra):
    response = await client.post(f"{API}/regions/", json={"name": name, "code": code, **extra})
    assert response.status_code == 201, response.text
    return response.json()


async def _create_category(client, name="Rugs", region_ids=None, **extra):
    payload = {"name": name, "region_ids": region_ids or [], **extra}
    response = await client.post(f"{API}/categories/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_subcategory(client, name, category_id, region_ids=None, **extra):
    payload = {"name": name, "category_id": category_id, "region_ids": region_ids or [], **extra}
    response = await client.post(f"{API}/subcategories/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_product(client, name, subcategory_id, **extra):
    response = await client.post(f"{API}/products/", json={"name": name, "subcategory_id": subcategory_id, **extra})
    assert response.status_code == 201, response.text
    return response.json()


async def _count(db_session, model):
    return await db_session.scalar(select(func.count()).select_from(model))


# ========================================
# REGIONES
# ========================================

async def test_region_requires_name_and_code(client):
    response = await client.post(f"{API}/regions/", json={"name": "Dubai", "code": "  "})
    assert response.status_code == 422

    response = await client.post(f"{API}/regions/", json={"code": "AE"})
    assert response.status_code == 422


async def test_region_code_is_unique(client):
    await _create_region(client, code="AE")
    response = await client.post(f"{API}/regions/", json={"name": "Other", "code": "AE"})
    assert response.status_code == 409


async def test_region_update_keeps_immutable_fields(client):
    region = await _create_region(client, name="Dubai", code="AE", locale="en")

    response = await client.put(
        f"{API}/regions/{region['id']}",
        json={"name": "Changed", "code": "XX", "locale": "fr", "city": "Dubai", "enable_business_hours": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["name"], body["code"], body["locale"]) == ("Dubai", "AE", "en")
    assert body["city"] == "Dubai"
    assert body["enable_business_hours"] is True


async def test_region_category_assignments(client):
    region = await _create_region(client)
    rugs = await _create_category(client, "Rugs")
    await _create_category(client, "Curtains")

    response = await client.put(f"{API}/regions/{region['id']}", json={"category_ids": [rugs["id"]]})
    assert response.status_code == 200

    response = await client.get(f"{API}/regions/{region['id']}/categories")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Rugs"]


async def test_regions_are_listed_by_name(client):
    await _create_region(client, name="Qatar", code="QA")
    await _create_region(client, name="Bahrain", code="BH")

    response = await client.get(f"{API}/regions/")
    assert [r["name"] for r in response.json()] == ["Bahrain", "Qatar"]


# ========================================
# CATEGORÍAS
# ========================================

async def test_category_create_update_delete(client):
    region = await _create_region(client)
    category = await _create_category(client, "Cotton Rugs", region_ids=[region["id"]])

    assert category["slug"] == "cotton-rugs"
    assert [r["code"] for r in category["regions"]] == ["AE"]

    response = await client.put(f"{API}/categories/{category['id']}", json={"name": "Wool Rugs", "region_ids": []})
    assert response.status_code == 200
    assert response.json()["slug"] == "wool-rugs"
    assert response.json()["regions"] == []

    response = await client.delete(f"{API}/categories/{category['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Wool Rugs"

    response = await client.get(f"{API}/categories/{category['id']}")
    assert response.status_code == 404


async def test_category_delete_removes_region_mappings(client, db_session):
    region = await _create_region(client)
    category = await _create_category(client, "Rugs", region_ids=[region["id"]])

    response = await client.delete(f"{API}/categories/{category['id']}")
    assert response.status_code == 200

    assert await _count(db_session, RegionCategoryMapping) == 0


async def test_names_without_letters_or_digits_are_rejected(client):
    response = await client.post(f"{API}/categories/", json={"name": "!!!"})
    assert response.status_code == 422

    rugs = await _create_category(client, "Rugs")
    response = await client.put(f"{API}/categories/{rugs['id']}", json={"name": "---"})
    assert response.status_code == 422

    response = await client.post(f"{API}/subcategories/", json={"name": "??", "category_id": rugs["id"]})
    assert response.status_code == 422

    wool = await _create_subcategory(client, "Wool", rugs["id"])
    product = await _create_product(client, "Nomad", wool["id"])
    response = await client.put(f"{API}/products/{product['id']}", json={"name": "*&^"})
    assert response.status_code == 422


async def test_category_with_unknown_region_is_rejected(client):
    response = await client.post(f"{API}/categories/", json={"name": "Rugs", "region_ids": [999]})
    assert response.status_code == 404
    assert "999" in response.json()["detail"]


async def test_category_list_filters_by_region_and_text(client):
    uae = await _create_region(client, "Dubai", "AE")
    qatar = await _create_region(client, "Qatar", "QA")
    await _create_category(client, "Rugs", region_ids=[uae["id"]], order_index=2)
    await _create_category(client, "Curtains", region_ids=[qatar["id"]], order_index=1, description="Sheer rugs")

    response = await client.get(f"{API}/categories/")
    assert [c["name"] for c in response.json()] == ["Curtains", "Rugs"]

    response = await client.get(f"{API}/categories/", params={"region_ids": [uae["id"]]})
    assert [c["name"] for c in response.json()] == ["Rugs"]

    response = await client.get(f"{API}/categories/", params={"search": "rug"})
    assert [c["name"] for c in response.json()] == ["Curtains", "Rugs"]


# ========================================
# SUBCATEGORÍAS
# ========================================

async def test_subcategory_requires_existing_category(client):
    response = await client.post(f"{API}/subcategories/", json={"name": "Wool", "category_id": 42})
    assert response.status_code == 404


async def test_subcategory_delete_removes_region_mappings(client, db_session):
    region = await _create_region(client)
    rugs = await _create_category(client, "Rugs")
    wool = await _create_subcategory(client, "Wool", rugs["id"], region_ids=[region["id"]])

    response = await client.delete(f"{API}/subcategories/{wool['id']}")
    assert response.status_code == 200

    assert await _count(db_session, RegionSubCategoryMapping) == 0


async def test_subcategory_search_includes_parent_category_name(client):
    rugs = await _create_category(client, "Rugs")
    curtains = await _create_category(client, "Curtains")
    await _create_subcategory(client, "Wool", rugs["id"])
    await _create_subcategory(client, "Silk", rugs["id"])
    await _create_subcategory(client, "Sheer", curtains["id"])

    response = await client.get(f"{API}/subcategories/", params={"search": "rug"})
    assert sorted(sc["name"] for sc in response.json()) == ["Silk", "Wool"]
    assert all(sc["category"]["name"] == "Rugs" for sc in response.json())


async def test_subcategory_options_follow_category(client):
    rugs = await _create_category(client, "Rugs")
    curtains = await _create_category(client, "Curtains")
    await _create_subcategory(client, "Wool", rugs["id"])
    await _create_subcategory(client, "Sheer", curtains["id"])

    response = await client.get(f"{API}/subcategories/options", params={"category_id": curtains["id"]})
    assert [sc["name"] for sc in response.json()] == ["Sheer"]

    response = await client.get(f"{API}/subcategories/options")
    assert len(response.json()) == 2


# ========================================
# PRODUCTOS
# ========================================

async def test_product_keeps_a_single_default_color(client):
    rugs = await _create_category(client, "Rugs")
    wool = await _create_subcategory(client, "Wool", rugs["id"])

    product = await _create_product(
        client,
        "Nomad Rug",
        wool["id"],
        colors=[
            {"name": "Red", "is_default": True},
            {"name": "Blue", "is_default": True},
            {"name": "Green"},
        ],
        care_instructions=["Dry clean only"],
    )

    assert product["slug"] == "nomad-rug"
    assert [(c["name"], c["is_default"]) for c in product["colors"]] == [
        ("Red", False), ("Blue", True), ("Green", False)
    ]
    assert [i["instruction"] for i in product["care_instructions"]] == ["Dry clean only"]
    assert product["subcategory"]["category"]["name"] == "Rugs"


async def test_product_update_replaces_sent_lists_only(client):
    region = await _create_region(client)
    rugs = await _create_category(client, "Rugs")
    wool = await _create_subcategory(client, "Wool", rugs["id"])
    product = await _create_product(
        client, "Nomad", wool["id"], region_ids=[region["id"]], colors=[{"name": "Red", "is_default": True}]
    )

    response = await client.put(
        f"{API}/products/{product['id']}",
        json={"colors": [{"name": "Blue", "is_default": True}], "price": 120.5},
    )

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body["colors"]] == ["Blue"]
    assert [r["id"] for r in body["regions"]] == [region["id"]]
    assert body["price"] == 120.5
    assert body["name"] == "Nomad"


async def test_product_list_combines_filters(client):
    uae = await _create_region(client, "Dubai", "AE")
    rugs = await _create_category(client, "Rugs")
    curtains = await _create_category(client, "Curtains")
    wool = await _create_subcategory(client, "Wool", rugs["id"])
    sheer = await _create_subcategory(client, "Sheer", curtains["id"])
    await _create_product(client, "Nomad", wool["id"], region_ids=[uae["id"]], reference="N-1")
    await _create_product(client, "Dune", wool["id"])
    await _create_product(client, "Veil", sheer["id"], region_ids=[uae["id"]])

    response = await client.get(f"{API}/products/", params={"category_id": rugs["id"]})
    assert [p["name"] for p in response.json()] == ["Dune", "Nomad"]

    response = await client.get(f"{API}/products/", params={"region_ids": [uae["id"]]})
    assert [p["name"] for p in response.json()] == ["Nomad", "Veil"]

    response = await client.get(f"{API}/products/", params={"search": "n-1"})
    assert [p["name"] for p in response.json()] == ["Nomad"]


async def test_product_list_ignores_subcategory_from_other_category(client):
    rugs = await _create_category(client, "Rugs")
    curtains = await _create_category(client, "Curtains")
    wool = await _create_subcategory(client, "Wool", rugs["id"])
    sheer = await _create_subcategory(client, "Sheer", curtains["id"])
    await _create_product(client, "Nomad", wool["id"])
    await _create_product(client, "Veil", sheer["id"])

    response = await client.get(
        f"{API}/products/", params={"category_id": curtains["id"], "subcategory_id": wool["id"]}
    )
    assert [p["name"] for p in response.json()] == ["Veil"]


async def test_product_delete_removes_dependent_rows(client, db_session):
    region = await _create_region(client)
    rugs = await _create_category(client, "Rugs")
    wool = await _create_subcategory(client, "Wool", rugs["id"])
    product = await _create_product(
        client,
        "Nomad",
        wool["id"],
        region_ids=[region["id"]],
        colors=[{"name": "Red"}, {"name": "Blue"}],
        care_instructions=["Dry clean only", "Keep away from sunlight"],
    )

    response = await client.delete(f"{API}/products/{product['id']}")
    assert response.status_code == 200

    assert (await client.get(f"{API}/products/{product['id']}")).status_code == 404
    assert (await client.get(f"{API}/products/")).json() == []

    assert await _count(db_session, RegionProductMapping) == 0
    assert await _count(db_session, ProductColor) == 0
    assert await _count(db_session, ProductCareInstruction) == 0


async def test_product_requires_existing_subcategory(client):
    response = await client.post(f"{API}/products/", json={"name": "Nomad", "subcategory_id": 7})
    assert response.status_code == 404

import pytest

from catalog_admin.categories.service import CategoryService
from catalog_admin.dashboard.service import DashboardService
from catalog_admin.inquiries.service import InquiryService
from catalog_admin.logs.service import LogService
from catalog_admin.notifications.service import NotificationService
from catalog_admin.products.service import ProductService
from catalog_admin.users.service import UserService
from catalog_admin.utils.exceptions import DuplicateError, NotFoundError, ValidationError
from catalog_admin.whats_new.service import WhatsNewService

ACTOR = "master@example.com"


def _actions(db) -> list[str]:
    return [entry["action"] for entry in db["logs"].docs]


# ── Categories ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_category_is_keyed_by_title_slug(db):
    svc = CategoryService(db, ACTOR)

    category = await svc.create_category({"title": "Cutting Wheels 125mm", "description": ""})

    assert category["id"] == "cutting-wheels-125mm"
    assert await svc.exists("cutting-wheels-125mm")
    assert db["logs"].docs[0]["uid"] == ACTOR
    assert db["logs"].docs[0]["details"]["category_id"] == "cutting-wheels-125mm"


@pytest.mark.asyncio
async def test_category_duplicate_and_empty_slug(db):
    svc = CategoryService(db, ACTOR)
    await svc.create_category({"title": "Grinding"})

    with pytest.raises(DuplicateError):
        await svc.create_category({"title": "grinding"})
    with pytest.raises(ValidationError):
        await svc.create_category({"title": "!!!"})


@pytest.mark.asyncio
async def test_category_rename_keeps_slug_and_lists_by_title(db):
    svc = CategoryService(db, ACTOR)
    await svc.create_category({"title": "Zirconia"})
    await svc.create_category({"title": "Alumina"})

    renamed = await svc.update_category("zirconia", {"title": "Abrasive Belts", "description": None})
    assert renamed["id"] == "zirconia"
    assert renamed["title"] == "Abrasive Belts"

    titles = [c["title"] for c in await svc.list_categories()]
    assert titles == ["Abrasive Belts", "Alumina"]

    await svc.delete_category("alumina")
    with pytest.raises(NotFoundError):
        await svc.get_category("alumina")
    with pytest.raises(NotFoundError):
        await svc.delete_category("alumina")

    assert _actions(db) == [
        "category_created",
        "category_created",
        "category_updated",
        "category_deleted",
    ]


# ── Products ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_product_requires_existing_category(db):
    svc = ProductService(db, ACTOR)

    with pytest.raises(NotFoundError):
        await svc.create_product({"category_id": "missing", "title": "Disc"})
    assert db["products"].docs == []


@pytest.mark.asyncio
async def test_product_crud_and_filters(db):
    await CategoryService(db, ACTOR).create_category({"title": "Wheels"})
    svc = ProductService(db, ACTOR)

    disc = await svc.create_product(
        {"category_id": "wheels", "title": "Flap Disc", "material_number": "FD-120", "featured": True}
    )
    await svc.create_product(
        {"category_id": "wheels", "title": "Cut-off Wheel", "material_number": "CW-1", "featured": False}
    )

    found, total = await svc.list_products(query="flap")
    assert total == 1 and found[0]["id"] == disc["id"]

    found, total = await svc.list_products(query="cw-")
    assert total == 1 and found[0]["title"] == "Cut-off Wheel"

    _, total = await svc.list_products(featured=True)
    assert total == 1

    _, total = await svc.list_products(category_id="wheels")
    assert total == 2

    with pytest.raises(NotFoundError):
        await svc.update_product(disc["id"], {"category_id": "ghost"})

    updated = await svc.update_product(disc["id"], {"product_price": 12.5, "title": None})
    assert updated["product_price"] == 12.5
    assert updated["title"] == "Flap Disc"

    await svc.delete_product(disc["id"])
    with pytest.raises(NotFoundError):
        await svc.get_product(disc["id"])
    with pytest.raises(NotFoundError):
        await svc.get_product("bogus")

    assert _actions(db)[-3:] == ["product_created", "product_updated", "product_deleted"]


# ── Broadcasts ───────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("service_cls", [NotificationService, WhatsNewService])
async def test_broadcast_lifecycle(db, service_cls):
    svc = service_cls(db, ACTOR)
    kind = service_cls.kind

    item = await svc.create({"name": "Spring sale", "description": "20% off discs"})
    assert "time" in item
    assert len(db[service_cls.collection_name].docs) == 1

    items, total = await svc.list_items()
    assert total == 1 and items[0]["id"] == item["id"]

    updated = await svc.update(item["id"], {"link": "https://example.com/sale", "name": None})
    assert updated["link"] == "https://example.com/sale"
    assert updated["name"] == "Spring sale"

    await svc.delete(item["id"])
    with pytest.raises(NotFoundError):
        await svc.get(item["id"])

    assert _actions(db) == [f"{kind}_created", f"{kind}_updated", f"{kind}_deleted"]


# ── Inquiries ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_inquiry_submit_and_triage(db):
    svc = InquiryService(db, ACTOR)
    inquiry_id = await svc.submit(
        {
            "name": "Buyer",
            "email": "buyer@example.com",
            "phone": "5550001111",
            "product_ids": ["p1"],
            "message": "Price for 100 units?",
        }
    )

    inquiry = await svc.get_inquiry(inquiry_id)
    assert inquiry["status"] == "new"
    assert db["logs"].docs == []

    updated = await svc.update_inquiry(inquiry_id, {"status": "resolved", "notes": "Quoted"})
    assert updated["status"] == "resolved"

    _, open_total = await svc.list_inquiries(status="new")
    _, resolved_total = await svc.list_inquiries(status="resolved")
    assert (open_total, resolved_total) == (0, 1)
    assert db["logs"].docs[0]["details"] == {"inquiry_id": inquiry_id, "status": "resolved"}

    with pytest.raises(NotFoundError):
        await svc.update_inquiry("nope", {"status": "resolved"})


# ── Staff users ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_search_terms_match_literally(db):
    await CategoryService(db, ACTOR).create_category({"title": "Wheels"})
    svc = ProductService(db, ACTOR)
    await svc.create_product({"category_id": "wheels", "title": "C++ Grinder Disc"})
    await svc.create_product({"category_id": "wheels", "title": "CCC Grinder Disc"})

    found, total = await svc.list_products(query="c++")
    assert total == 1 and found[0]["title"] == "C++ Grinder Disc"

    _, total = await svc.list_products(query="(")
    assert total == 0

    _, total = await UserService(db, ACTOR).list_users(query="a.b[")
    assert total == 0


@pytest.mark.asyncio
async def test_staff_user_management(db):
    svc = UserService(db, ACTOR)
    user = await svc.create_user(
        {"name": "Ada", "email": "Ada@Example.com", "password": "secret123", "role": "user", "status": "active"}
    )
    assert user["email"] == "ada@example.com"
    assert "password" not in user

    with pytest.raises(DuplicateError):
        await svc.create_user(
            {"name": "Ada", "email": "ada@example.com", "password": "x" * 6, "role": "user"}
        )

    found, total = await svc.list_users(query="ada")
    assert total == 1 and found[0]["id"] == user["id"]

    promoted = await svc.update_user(user["id"], {"role": "admin", "phone": None})
    assert promoted["role"] == "admin"
    assert db["logs"].docs[-1]["details"] == {"user_id": user["id"], "fields": ["role"]}

    await svc.delete_user(user["id"])
    with pytest.raises(NotFoundError):
        await svc.get_user(user["id"])


# ── Activity log ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_log_listing_filters(db):
    logs = LogService(db)
    await logs.log("a@example.com", "product_created", {"product_id": "1"})
    await logs.log("b@example.com", "product_deleted")
    await logs.log("a@example.com", "category_created")

    entries, total = await logs.list_logs(uid="a@example.com")
    assert total == 2
    assert {e["action"] for e in entries} == {"product_created", "category_created"}

    _, total = await logs.list_logs(action="product_deleted")
    assert total == 1
    assert len(await logs.recent(2)) == 2


# ── Dashboard ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_dashboard_counts_only_readable_resources(db):
    await CategoryService(db, ACTOR).create_category({"title": "Wheels"})

    user_stats = await DashboardService(db).stats("user")
    assert set(user_stats["counts"]) == {
        "products", "categories", "notifications", "whats_new", "inquiries",
    }
    assert user_stats["counts"]["categories"] == 1
    assert "recent_logs" not in user_stats

    admin_stats = await DashboardService(db).stats("admin")
    assert {"users", "app_users"} <= set(admin_stats["counts"])
    assert admin_stats["recent_logs"][0]["action"] == "category_created"

    assert await DashboardService(db).stats("pending") == {"counts": {}}

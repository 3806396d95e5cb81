import pytest
from sqlalchemy import select

from app.core.errors import InvalidArgument, NotFound
from app.models.content import ContentItem, Page
from app.schemas.content import BulkContentUpsert, ContentUpsert
from app.services import content as content_service
from app.services import languages as languages_service
from app.services.content import attribute_name


def _upsert(page="home", section="hero", key="title", language_code="en", content="Hi"):
    return ContentUpsert(page=page, section=section, key=key, language_code=language_code, content=content)


async def test_upsert_then_simple_projection(db):
    await content_service.upsert(db, _upsert())

    simple = await content_service.get_simple(db, "en")

    assert simple["data"]["home"]["hero_title"]["content"] == "Hi"
    assert simple["language_name"] == "English"
    assert simple["total_items"] == 1


async def test_upsert_updates_in_place(db):
    first = await content_service.upsert(db, _upsert(content="Hi"))
    second = await content_service.upsert(db, _upsert(content="Hello"))

    assert first.id == second.id
    rows = (await db.execute(select(ContentItem))).scalars().all()
    assert [r.content for r in rows] == ["Hello"]


async def test_upsert_rejects_unknown_language(db):
    with pytest.raises(InvalidArgument, match="Language not found or inactive"):
        await content_service.upsert(db, _upsert(language_code="zz"))


async def test_simple_without_language_annotates_items(db):
    await content_service.upsert(db, _upsert(language_code="es", content="Hola"))

    simple = await content_service.get_simple(db)

    assert simple["data"]["home"]["hero_title"] == {"content": "Hola", "language": "es", "language_name": "Spanish"}


async def test_missing_translation_is_omitted_not_backfilled(db):
    await content_service.upsert(db, _upsert(content="Hi"))
    await content_service.upsert(db, _upsert(key="subtitle", content="Welcome"))
    await content_service.upsert(db, _upsert(language_code="es", content="Hola"))

    spanish = await content_service.get_by_language(db, "es")

    assert list(spanish["data"]["home"]["sections"]["hero"]) == ["title"]


async def test_get_all_groups_by_page_language_section(db):
    db.add(Page(slug="home", title="Home Page"))
    await db.commit()
    await content_service.upsert(db, _upsert(content="Hi"))
    await content_service.upsert(db, _upsert(language_code="es", content="Hola"))

    result = await content_service.get_all(db)

    home = result["data"]["home"]
    assert home["page_title"] == "Home Page"
    assert home["languages"]["es"]["language_name"] == "Spanish"
    assert home["languages"]["en"]["sections"]["hero"]["title"]["content"] == "Hi"
    assert result["total_items"] == 2


async def test_bulk_upsert_is_all_or_nothing(db):
    bad = BulkContentUpsert(page="home", section="hero", key="title", translations=[
        {"language_code": "en", "content": "Hi"},
        {"language_code": "xx", "content": "??"},
    ])
    with pytest.raises(InvalidArgument, match="xx"):
        await content_service.bulk_upsert(db, bad)
    assert (await db.execute(select(ContentItem))).scalars().all() == []

    good = BulkContentUpsert(page="home", section="hero", key="title", translations=[
        {"language_code": "en", "content": "Hi"},
        {"language_code": "es", "content": "Hola"},
    ])
    assert await content_service.bulk_upsert(db, good) == 2


async def test_deleting_language_removes_only_its_content(db):
    await content_service.upsert(db, _upsert(content="Hi"))
    await content_service.upsert(db, _upsert(language_code="es", content="Hola"))
    spanish = next(lang for lang in await languages_service.list_languages(db) if lang.code == "es")

    await languages_service.delete_language(db, spanish.id)

    rows = (await db.execute(select(ContentItem.language_code, ContentItem.content))).all()
    assert rows == [("en", "Hi")]


async def test_update_and_delete_missing_content(db):
    with pytest.raises(NotFound):
        await content_service.update_content(db, 404, "x")
    with pytest.raises(NotFound):
        await content_service.delete_content(db, 404)


def test_attribute_name():
    assert attribute_name("hero", "title") == "hero_title"
    assert attribute_name("", "title") == "title"
    assert attribute_name("hero", None) == "hero"


async def test_public_reads_and_admin_writes(client, admin_headers):
    payload = {"page": "home", "section": "hero", "key": "title", "language_code": "en", "content": "Hi"}

    assert (await client.post("/api/content", json=payload)).status_code == 401
    created = await client.post("/api/content", json=payload, headers=admin_headers)
    assert created.status_code == 201
    item_id = created.json()["data"]["id"]

    simple = (await client.get("/api/content/simple/en")).json()
    assert simple["success"] is True
    assert simple["data"]["home"]["hero_title"]["content"] == "Hi"

    structure = (await client.get("/api/content/structure/home")).json()["data"]
    assert structure == [{"section": "hero", "key": "title"}]

    by_page = (await client.get("/api/content/home/en")).json()["data"]
    assert [row["id"] for row in by_page] == [item_id]

    updated = await client.put(f"/api/content/{item_id}", json={"content": "Hey"}, headers=admin_headers)
    assert updated.json()["data"]["content"] == "Hey"

    assert (await client.delete(f"/api/content/{item_id}", headers=admin_headers)).status_code == 200
    assert (await client.delete(f"/api/content/{item_id}", headers=admin_headers)).status_code == 404


async def test_bulk_endpoint_reports_count(client, admin_headers):
    response = await client.post("/api/content/bulk", headers=admin_headers, json={
        "page": "about", "section": "main", "key": "title",
        "translations": [{"language_code": "en", "content": "About"}, {"language_code": "hi", "content": "बारे में"}],
    })
    assert response.status_code == 200
    assert response.json()["updatedCount"] == 2

    by_name = (await client.get("/api/content/language/Hindi")).json()
    assert by_name["language_code"] == "hi"
    assert by_name["data"]["about"]["sections"]["main"]["title"]["content"] == "बारे में"
    assert (await client.get("/api/content/language/Klingon")).status_code == 404

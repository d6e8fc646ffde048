"""
Terms endpoint tests
"""
import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from catalog_api.models.term import Term


VALID_TERM = {
    "language": "sv",
    "section_key": "refunds",
    "title": "Återbetalning",
    "content": "Pengarna betalas tillbaka inom 14 dagar.",
}


# ===================== LIST =====================


@pytest.mark.parametrize("language", ["en", "sv", "fr"])
async def test_list_terms_by_language(client, make_term, language):
    await make_term(language="en", title="English")
    await make_term(language="sv", title="Svenska")
    await make_term(language="fr", title="Français")
    await make_term(language=language, title="Hidden", is_active=False)

    r = await client.get(f"/api/terms/{language}")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert len(body["data"]) == 1
    assert body["data"][0]["language"] == language
    assert body["data"][0]["is_active"] is True


@pytest.mark.parametrize("path", ["/api/terms/de", "/api/terms/EN", "/api/terms/de/privacy"])
async def test_list_terms_invalid_language(client, path):
    r = await client.get(path)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Invalid language parameter"
    assert body["supported"] == ["en", "sv", "fr"]


async def test_list_terms_newest_first(client, make_term):
    start = datetime(2025, 3, 1, 8, 0, 0)
    for i in range(3):
        await make_term(title=f"T{i}", created_at=start + timedelta(hours=i))

    titles = [t["title"] for t in (await client.get("/api/terms/en")).json()["data"]]
    assert titles == ["T2", "T1", "T0"]


async def test_list_terms_by_section(client, make_term):
    await make_term(section_key="privacy", title="Privacy 1", order_index=1)
    await make_term(section_key="privacy", title="Privacy 2", order_index=2)
    await make_term(section_key="cookies", title="Cookies")
    await make_term(section_key="privacy", language="sv", title="Integritet")
    await make_term(section_key="privacy", title="Old", is_active=False)

    r = await client.get("/api/terms/en/privacy")
    assert r.status_code == 200
    data = r.json()["data"]
    assert {t["title"] for t in data} == {"Privacy 1", "Privacy 2"}
    assert {t["order_index"] for t in data} == {1, 2}

    r = await client.get("/api/terms/en/unknown-section")
    assert r.status_code == 200
    assert r.json()["data"] == []


# ===================== CREATE =====================


async def test_create_term(client):
    r = await client.post("/api/terms", json=VALID_TERM)
    assert r.status_code == 201
    data = r.json()["data"]
    uuid.UUID(data["id"])
    assert data["language"] == "sv"
    assert data["title"] == "Återbetalning"
    assert data["order_index"] == 0
    assert data["is_active"] is True

    listed = (await client.get("/api/terms/sv/refunds")).json()["data"]
    assert [t["id"] for t in listed] == [data["id"]]


@pytest.mark.parametrize("field", ["language", "section_key", "title", "content"])
async def test_create_term_missing_field(client, db_session, field):
    payload = {k: v for k, v in VALID_TERM.items() if k != field}
    r = await client.post("/api/terms", json=payload)
    assert r.status_code == 400
    assert r.json()["missing"] == [field]

    count = (await db_session.execute(select(func.count()).select_from(Term))).scalar_one()
    assert count == 0


async def test_create_term_unsupported_language(client):
    r = await client.post("/api/terms", json={**VALID_TERM, "language": "de"})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "language"


async def test_create_term_empty_body(client):
    r = await client.post("/api/terms")
    assert r.status_code == 400
    assert r.json()["success"] is False


# ===================== UPDATE / DELETE =====================


async def test_update_term(client, make_term):
    term = await make_term(title="Draft", order_index=3)
    term_id = str(term.id)

    r = await client.put(f"/api/terms/{term_id}", json={"title": "Final", "is_active": False})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["title"] == "Final"
    assert data["is_active"] is False
    assert data["order_index"] == 3

    assert (await client.get("/api/terms/en")).json()["data"] == []


async def test_update_term_rejects_bad_values(client, make_term):
    term = await make_term()
    r = await client.put(f"/api/terms/{term.id}", json={"language": "de"})
    assert r.status_code == 400
    r = await client.put(f"/api/terms/{term.id}", json={"title": None})
    assert r.status_code == 400


@pytest.mark.parametrize("term_id", [str(uuid.uuid4()), "nope"])
async def test_update_missing_term(client, term_id):
    r = await client.put(f"/api/terms/{term_id}", json={"title": "x"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Term not found"}


async def test_delete_term(client, make_term):
    term = await make_term()
    term_id = str(term.id)

    r = await client.delete(f"/api/terms/{term_id}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Term deleted successfully"}

    r = await client.delete(f"/api/terms/{term_id}")
    assert r.status_code == 404

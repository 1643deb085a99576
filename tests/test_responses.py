"""Response Normalizer - error envelope and status mapping.

Invariants:
    - Every error body is {"error": ..., "detail": ...}
    - Store failures are 500 with the driver message, never the SQL text
    - Request-shape errors are 400, not 422
"""

from sqlalchemy import text

from nallore_api.errors import (
    NoOpError,
    NotFound,
    StoreError,
    Unauthorized,
    ValidationError,
)


def test_taxonomy_status_codes():
    assert ValidationError("x").status_code == 400
    assert NoOpError().status_code == 400
    assert Unauthorized().status_code == 401
    assert NotFound("event", 3).status_code == 404
    assert StoreError("boom").status_code == 500


def test_not_found_message_names_resource():
    assert NotFound("event", 3).to_response() == {
        "error": "Not found", "detail": "event 3 does not exist",
    }


async def test_store_failure_is_500_without_statement_text(client, test_db):
    await test_db.execute(text("DROP TABLE events"))
    await test_db.commit()

    res = await client.get("/api/events")
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Store error"
    assert "no such table" in body["detail"]
    assert "SELECT" not in body["detail"]
    assert "Traceback" not in body["detail"]


async def test_store_failure_on_write_is_500(client, admin_headers, test_db):
    await test_db.execute(text("DROP TABLE team_members"))
    await test_db.commit()

    res = await client.post(
        "/api/admin/team", json={"name": "Ana", "level": "core"}, headers=admin_headers,
    )
    assert res.status_code == 500
    assert "INSERT" not in res.json()["detail"]


async def test_malformed_json_body_is_400(client, admin_headers):
    res = await client.post(
        "/api/admin/gallery",
        content=b"{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Validation error"


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found", "detail": "Not Found"}


async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "healthy"}
    db = (await client.get("/health/db")).json()
    assert db["database"] == "connected"


def test_not_found_accepts_string_keys():
    assert NotFound("gallery category", "urban").to_response()["detail"] == (
        "gallery category urban does not exist"
    )

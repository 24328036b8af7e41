import asyncio

import pytest
from httpx import AsyncClient

from fakes import bearer
from techconnect.settings import settings


@pytest.mark.asyncio
async def test_club_member_posts_and_lists(api_client: AsyncClient, fake_db):
    headers = bearer("iet")

    response = await api_client.post(
        "/api/iet/add", json={"title": "Hackathon", "message": "Sat 10am"}, headers=headers
    )
    assert response.status_code == 201
    created = response.json()
    assert created["club"] == "iet"
    assert created["title"] == "Hackathon"

    response = await api_client.get("/api/iet/get", headers=headers)
    assert response.status_code == 200
    items = response.json()
    assert [item["id"] for item in items] == [created["id"]]
    assert items[0]["message"] == "Sat 10am"


@pytest.mark.asyncio
async def test_other_club_cannot_post(api_client: AsyncClient, fake_db):
    response = await api_client.post(
        "/api/iet/add", json={"title": "Hijack", "message": "nope"}, headers=bearer("ieee")
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "forbidden"
    assert fake_db.announcements("iet") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["admin", "user", "acm"])
async def test_list_is_club_scoped_by_default(api_client: AsyncClient, fake_db, role):
    response = await api_client.get("/api/iet/get", headers=bearer(role))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_authenticated_read_policy_opens_lists(api_client: AsyncClient, fake_db):
    settings.announcement_read_policy = "authenticated"
    await api_client.post("/api/acm/add", json={"title": "Contest", "message": "Fri"}, headers=bearer("acm"))

    response = await api_client.get("/api/acm/get", headers=bearer("user"))
    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Contest"]

    # Writes stay club-scoped under either policy
    response = await api_client.post("/api/acm/add", json={"title": "x", "message": "y"}, headers=bearer("user"))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_or_expired_token_is_unauthenticated(api_client: AsyncClient, fake_db):
    response = await api_client.get("/api/iet/get")
    assert response.status_code == 401

    response = await api_client.get("/api/iet/get", headers=bearer("iet", ttl_seconds=-60))
    assert response.status_code == 401
    assert response.json()["detail"] == "invalid_token"
    assert response.headers["WWW-Authenticate"] == "Bearer"

    response = await api_client.get("/api/iet/get", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_concurrent_creates_both_land(api_client: AsyncClient, fake_db):
    headers = bearer("ieee")
    first, second = await asyncio.gather(
        api_client.post("/api/ieee/add", json={"title": "One", "message": "1"}, headers=headers),
        api_client.post("/api/ieee/add", json={"title": "Two", "message": "2"}, headers=headers),
    )
    assert first.status_code == second.status_code == 201

    response = await api_client.get("/api/ieee/get", headers=headers)
    titles = {item["title"] for item in response.json()}
    assert titles == {"One", "Two"}
    assert len({first.json()["id"], second.json()["id"]}) == 2


@pytest.mark.asyncio
async def test_list_keeps_insertion_order(api_client: AsyncClient, fake_db):
    headers = bearer("iste")
    for title in ("first", "second", "third"):
        await api_client.post("/api/iste/add", json={"title": title, "message": "m"}, headers=headers)

    response = await api_client.get("/api/iste/get", headers=headers)
    assert [item["title"] for item in response.json()] == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_delete_then_list(api_client: AsyncClient, fake_db):
    headers = bearer("ie")
    keep = (await api_client.post("/api/ie/add", json={"title": "Keep", "message": "k"}, headers=headers)).json()
    drop = (await api_client.post("/api/ie/add", json={"title": "Drop", "message": "d"}, headers=headers)).json()

    response = await api_client.delete(f"/api/ie/delete/{drop['id']}", headers=headers)
    assert response.status_code == 204
    assert response.content == b""

    response = await api_client.get("/api/ie/get", headers=headers)
    assert [item["id"] for item in response.json()] == [keep["id"]]


@pytest.mark.asyncio
async def test_delete_unknown_or_malformed_id(api_client: AsyncClient, fake_db):
    headers = bearer("iet")
    response = await api_client.delete("/api/iet/delete/00000000-0000-0000-0000-00000000abcd", headers=headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "announcement_not_found"

    response = await api_client.delete("/api/iet/delete/garbage", headers=headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_by_other_club_is_forbidden(api_client: AsyncClient, fake_db):
    created = (
        await api_client.post("/api/iet/add", json={"title": "Mine", "message": "m"}, headers=bearer("iet"))
    ).json()

    response = await api_client.delete(f"/api/iet/delete/{created['id']}", headers=bearer("admin"))
    assert response.status_code == 403
    assert len(fake_db.announcements("iet")) == 1


@pytest.mark.asyncio
async def test_clubs_do_not_share_announcements(api_client: AsyncClient, fake_db):
    await api_client.post("/api/iet/add", json={"title": "IET only", "message": "m"}, headers=bearer("iet"))

    response = await api_client.get("/api/ieee/get", headers=bearer("ieee"))
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"title": "", "message": "m"}, {"title": "   ", "message": "m"}, {"title": "t"}, {"title": "t", "message": "\n"}],
)
async def test_blank_fields_are_rejected(api_client: AsyncClient, fake_db, body):
    response = await api_client.post("/api/iet/add", json=body, headers=bearer("iet"))
    assert response.status_code == 422
    assert response.json()["detail"] == "validation_error"
    assert fake_db.announcements("iet") == []


@pytest.mark.asyncio
async def test_unknown_club_route(api_client: AsyncClient, fake_db):
    response = await api_client.get("/api/chess/get", headers=bearer("iet"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_long_title_and_message_are_accepted(api_client: AsyncClient, fake_db):
    headers = bearer("iet")
    body = {"title": "T" * 201, "message": "m" * 5001}

    response = await api_client.post("/api/iet/add", json=body, headers=headers)
    assert response.status_code == 201

    response = await api_client.get("/api/iet/get", headers=headers)
    items = response.json()
    assert [(item["title"], item["message"]) for item in items] == [(body["title"], body["message"])]

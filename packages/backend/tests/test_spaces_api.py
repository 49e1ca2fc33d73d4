"""Spaces API tests: list, create, delete, host lookup.

Each test creates its own data via the API. The fresh-database-per-test
fixture in conftest.py keeps them isolated.

Pattern: test_<verb>_<noun>_<scenario>
"""

import pytest

from muzer.auth.jwt import create_session_token

from conftest import TEST_USER_ID


def _bearer(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user_id)}"}


async def _create(client, name="Test Space", **kwargs):
    r = await client.post("/api/spaces", json={"spaceName": name}, **kwargs)
    assert r.status_code == 201, r.text
    return r.json()["space"]


# ═══════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_space(client):
    r = await client.post("/api/spaces", json={"spaceName": "Friday Jams"})
    assert r.status_code == 201
    data = r.json()
    assert data["success"] is True
    assert data["message"] == "Space created successfully"
    space = data["space"]
    assert space["name"] == "Friday Jams"
    assert space["hostId"] == TEST_USER_ID
    assert space["isActive"] is True
    assert space["startTime"] is None
    assert space["endTime"] is None
    assert space["id"]


@pytest.mark.asyncio
async def test_create_space_strips_name(client):
    space = await _create(client, "  Lo-fi  ")
    assert space["name"] == "Lo-fi"


@pytest.mark.asyncio
async def test_create_space_empty_name_rejected(client):
    r = await client.post("/api/spaces", json={"spaceName": ""})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Space name is required"}


@pytest.mark.asyncio
async def test_create_space_missing_name_rejected(client):
    r = await client.post("/api/spaces", json={})
    assert r.status_code == 400
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_create_space_wrong_type_rejected(client):
    r = await client.post("/api/spaces", json={"spaceName": ["a", "b"]})
    assert r.status_code == 400
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_create_space_name_too_long(client):
    r = await client.post("/api/spaces", json={"spaceName": "x" * 101})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_create_space_requires_session(unauthenticated_client):
    r = await unauthenticated_client.post("/api/spaces", json={"spaceName": "Nope"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Unauthorized"}


# ═══════════════════════════════════════════════════════════
# List
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_spaces_empty(client):
    r = await client.get("/api/spaces")
    assert r.status_code == 200
    assert r.json() == {"success": True, "spaces": []}


@pytest.mark.asyncio
async def test_list_spaces_in_creation_order(client):
    first = await _create(client, "A")
    second = await _create(client, "B")

    r = await client.get("/api/spaces")
    assert r.status_code == 200
    ids = [s["id"] for s in r.json()["spaces"]]
    assert ids == [first["id"], second["id"]]


@pytest.mark.asyncio
async def test_list_spaces_scoped_to_host(unauthenticated_client):
    await _create(unauthenticated_client, "Mine", headers=_bearer("alice"))
    await _create(unauthenticated_client, "Theirs", headers=_bearer("bob"))

    r = await unauthenticated_client.get("/api/spaces", headers=_bearer("alice"))
    names = [s["name"] for s in r.json()["spaces"]]
    assert names == ["Mine"]


@pytest.mark.asyncio
async def test_list_spaces_requires_session(unauthenticated_client):
    r = await unauthenticated_client.get("/api/spaces")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_get_space_host(client):
    space = await _create(client)
    r = await client.get("/api/spaces", params={"spaceId": space["id"]})
    assert r.status_code == 200
    assert r.json() == {"success": True, "hostId": TEST_USER_ID}


@pytest.mark.asyncio
async def test_get_space_host_not_found(client):
    r = await client.get("/api/spaces", params={"spaceId": "missing"})
    assert r.status_code == 404
    assert r.json()["message"] == "Space not found"


# ═══════════════════════════════════════════════════════════
# Delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_delete_space(client):
    space = await _create(client)
    r = await client.delete(f"/api/spaces/?spaceId={space['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Space deleted successfully"}


@pytest.mark.asyncio
async def test_delete_space_without_trailing_slash(client):
    space = await _create(client)
    r = await client.delete("/api/spaces", params={"spaceId": space["id"]})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_delete_space_missing_id(client):
    r = await client.delete("/api/spaces/")
    assert r.status_code == 400
    assert r.json()["message"] == "Space Id is required"


@pytest.mark.asyncio
async def test_delete_space_not_found(client):
    r = await client.delete("/api/spaces/?spaceId=does-not-exist")
    assert r.status_code == 404
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_delete_space_of_other_host_forbidden(unauthenticated_client):
    space = await _create(unauthenticated_client, "Alice's", headers=_bearer("alice"))

    r = await unauthenticated_client.delete(
        f"/api/spaces/?spaceId={space['id']}", headers=_bearer("bob")
    )
    assert r.status_code == 403
    assert r.json()["success"] is False

    # Still there for its host
    r = await unauthenticated_client.get("/api/spaces", headers=_bearer("alice"))
    assert [s["id"] for s in r.json()["spaces"]] == [space["id"]]


@pytest.mark.asyncio
async def test_delete_space_requires_session(unauthenticated_client):
    r = await unauthenticated_client.delete("/api/spaces/?spaceId=anything")
    assert r.status_code == 401


# ═══════════════════════════════════════════════════════════
# Round trip
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_create_delete_round_trip(client):
    """A created space shows up in the next list and is gone after delete."""
    space = await _create(client, "Test Space")

    r = await client.get("/api/spaces")
    assert space["id"] in {s["id"] for s in r.json()["spaces"]}

    r = await client.delete(f"/api/spaces/?spaceId={space['id']}")
    assert r.status_code == 200

    r = await client.get("/api/spaces")
    assert space["id"] not in {s["id"] for s in r.json()["spaces"]}

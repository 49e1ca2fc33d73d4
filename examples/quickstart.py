#!/usr/bin/env python3
"""
Muzer Quickstart: the whole spaces lifecycle in one script.

Mints a dev session → lists spaces → creates one → generates an app
token for it → deletes it.
Run with: python examples/quickstart.py

Requires: pip install -e .
Backend must be running (muzer serve) with the same MUZER_SESSION_SECRET
as this script, since the session is minted locally in place of a real
auth provider.
"""

import sys
import uuid

import httpx

from muzer.auth.jwt import create_session_token

BASE = "http://localhost:8000/api"


def main():
    user_id = f"demo-{uuid.uuid4().hex[:8]}"
    session = create_session_token(user_id)
    client = httpx.Client(
        base_url=BASE,
        timeout=10,
        headers={"Authorization": f"Bearer {session}"},
    )

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}. Start it with: muzer serve")
        sys.exit(1)
    health = resp.json()
    print(f"  Database: {'✓' if health['database'] == 'ok' else '✗'}")
    print(f"  Redis:    {'✓' if health['redis'] == 'ok' else '✗ (rate limiting off)'}")

    # ── List (empty for a fresh user) ─────────────────────────────
    print(f"\n1. Listing spaces for {user_id}...")
    data = client.get("/spaces").json()
    assert data["success"], data
    print(f"   {len(data['spaces'])} space(s)")

    # ── Create ────────────────────────────────────────────────────
    print("\n2. Creating a space...")
    data = client.post("/spaces", json={"spaceName": "Quickstart Jams"}).json()
    assert data["success"], data
    space = data["space"]
    print(f"   {data['message']}: {space['name']} ({space['id'][:8]}...)")

    # ── App token ─────────────────────────────────────────────────
    print("\n3. Generating an app token for this creator...")
    data = client.post("/generate-token", json={"creatorId": user_id}).json()
    assert data["success"], data
    print(f"   Token: {data['token'][:24]}...")

    # ── Delete ────────────────────────────────────────────────────
    print("\n4. Deleting the space...")
    data = client.delete("/spaces/", params={"spaceId": space["id"]}).json()
    assert data["success"], data
    print(f"   {data['message']}")

    remaining = client.get("/spaces").json()["spaces"]
    assert all(s["id"] != space["id"] for s in remaining)
    print("\nDone.")


if __name__ == "__main__":
    main()

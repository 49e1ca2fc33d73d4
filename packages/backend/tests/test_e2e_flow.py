"""End-to-end: list controller → SpacesClient → real app → database.

Exercises the whole flow a user sees: mount, create, delete, with the
session guard and envelope handling in the loop.
"""

import pytest
from httpx import ASGITransport

from muzer.auth.jwt import create_session_token
from muzer.client import SpaceListController, SpacesClient, render_spaces
from muzer.main import app


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def _spaces_client(session_token=None) -> SpacesClient:
    return SpacesClient(
        "http://test",
        session_token=session_token,
        transport=ASGITransport(app=app),
    )


@pytest.mark.asyncio
async def test_mount_create_delete(client):
    notifier = RecordingNotifier()
    async with _spaces_client() as api:
        controller = SpaceListController(client=api, notifier=notifier)

        await controller.load()
        assert controller.state.spaces == []
        assert render_spaces(controller.state, controller.delete_space) == []

        controller.open_create_dialog()
        controller.set_space_name("Test Space")
        created = await controller.create_space()
        assert created is not None
        assert [s.id for s in controller.state.spaces] == [created.id]

        # The server agrees
        assert [s.id for s in await api.list_spaces()] == [created.id]

        cards = render_spaces(controller.state, controller.delete_space)
        assert await cards[0].delete() is True
        assert controller.state.spaces == []
        assert await api.list_spaces() == []

    assert notifier.successes == [
        "Space created successfully",
        "Space deleted successfully",
    ]
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_without_session_everything_fails_visibly(unauthenticated_client):
    notifier = RecordingNotifier()
    async with _spaces_client() as api:
        controller = SpaceListController(client=api, notifier=notifier)
        await controller.load()
        controller.open_create_dialog()
        controller.set_space_name("Nope")
        await controller.create_space()

    assert controller.state.spaces is None
    assert controller.state.loading is False
    assert notifier.errors == ["Error fetching spaces", "Unauthorized"]


@pytest.mark.asyncio
async def test_real_session_token(unauthenticated_client):
    notifier = RecordingNotifier()
    async with _spaces_client(create_session_token("dj-1")) as api:
        controller = SpaceListController(client=api, notifier=notifier)
        await controller.load()
        controller.open_create_dialog()
        controller.set_space_name("Mine")
        space = await controller.create_space()
        token = await api.generate_token("creator-7")

    assert space.host_id == "dj-1"
    assert token
    assert notifier.errors == []

"""List view model tests."""

import pytest

from muzer.client import (
    SKELETON_COUNT,
    LocalListState,
    SkeletonCard,
    SpaceCard,
    render_spaces,
)
from muzer.schemas.space import SpaceRead

S1 = SpaceRead(id="s1", name="A", host_id="u1", is_active=True)
S2 = SpaceRead(id="s2", name="B", host_id="u1", is_active=False)


async def _no_delete(space_id):
    raise AssertionError("delete should not be called")


def test_loading_renders_fixed_skeletons():
    cards = render_spaces(LocalListState(spaces=[S1, S2], loading=True), _no_delete)
    assert cards == [SkeletonCard(index=i) for i in range(SKELETON_COUNT)]


def test_loading_with_no_data_still_renders_skeletons():
    cards = render_spaces(LocalListState(spaces=None, loading=True), _no_delete)
    assert len(cards) == SKELETON_COUNT


def test_spaces_render_in_order():
    cards = render_spaces(LocalListState(spaces=[S1, S2]), _no_delete)
    assert [c.space.id for c in cards] == ["s1", "s2"]
    assert all(isinstance(c, SpaceCard) for c in cards)


@pytest.mark.parametrize("spaces", [None, []])
def test_empty_renders_nothing(spaces):
    assert render_spaces(LocalListState(spaces=spaces), _no_delete) == []


@pytest.mark.asyncio
async def test_card_delete_is_bound_to_its_space():
    deleted = []

    async def on_delete(space_id):
        deleted.append(space_id)

    cards = render_spaces(LocalListState(spaces=[S1, S2]), on_delete)
    await cards[1].delete()
    assert deleted == ["s2"]

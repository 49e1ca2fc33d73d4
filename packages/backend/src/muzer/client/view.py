"""List view model.

render_spaces() is a pure function of (loading, spaces). What the cards
look like is up to the front-end; the CLI prints them as text.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from muzer.client.state import LocalListState
from muzer.schemas.space import SpaceRead as Space

# Placeholders shown while the first list is loading
SKELETON_COUNT = 2

DeleteHandler = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True)
class SkeletonCard:
    index: int


@dataclass(frozen=True)
class SpaceCard:
    space: Space
    on_delete: DeleteHandler

    def delete(self) -> Awaitable[Any]:
        """Trigger delete for this card's space."""
        return self.on_delete(self.space.id)


Card = Union[SkeletonCard, SpaceCard]


def render_spaces(state: LocalListState, on_delete: DeleteHandler) -> list[Card]:
    if state.loading:
        return [SkeletonCard(index=i) for i in range(SKELETON_COUNT)]
    if state.spaces:
        return [SpaceCard(space=s, on_delete=on_delete) for s in state.spaces]
    return []

"""Local list state and its reconciliation.

SpaceListController is the only writer of LocalListState. It runs on a
single event loop; several calls may be in flight at once (a delete
while a create is pending) and each one applies its own incremental
update when its response arrives: nothing is queued or cancelled, and
create/delete never trigger a full re-fetch.

Stale-read guard: every call takes a sequence number. A list response
is applied only if it belongs to the newest list request, and creates
or deletes that landed while that list was in flight are replayed on
top of its snapshot, so a slow list cannot wipe out a newer create.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

import structlog

from muzer.client.errors import ClientError
from muzer.client.http import SpacesClient
from muzer.schemas.space import SpaceRead as Space

logger = structlog.get_logger()


class Notifier(Protocol):
    """Transient, non-blocking user notifications (toasts)."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass
class LocalListState:
    spaces: Optional[list[Space]] = None
    loading: bool = False


@dataclass
class CreateDialog:
    """Input collection for a new space.

    The tracked space_name is exactly what the input shows: it starts
    empty each time the dialog opens.
    """

    open: bool = False
    space_name: str = ""


@dataclass(frozen=True)
class _Created:
    space: Space


@dataclass(frozen=True)
class _Deleted:
    space_id: str


_Mutation = Union[_Created, _Deleted]


def apply_mutation(
    spaces: Optional[list[Space]], mutation: _Mutation
) -> Optional[list[Space]]:
    """Return spaces with one create/delete folded in. Never mutates the input."""
    if isinstance(mutation, _Created):
        current = spaces or []
        if any(s.id == mutation.space.id for s in current):
            return list(current)
        return [*current, mutation.space]
    if spaces is None:
        return None
    return [s for s in spaces if s.id != mutation.space_id]


@dataclass
class SpaceListController:
    """Owns LocalListState and the create dialog for one list instance."""

    client: SpacesClient
    notifier: Notifier
    state: LocalListState = field(default_factory=LocalListState)
    dialog: CreateDialog = field(default_factory=CreateDialog)
    _seq: int = field(default=0, init=False, repr=False)
    _pending_list_seq: Optional[int] = field(default=None, init=False, repr=False)
    _replay: list[_Mutation] = field(default_factory=list, init=False, repr=False)

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    # ─── List ───────────────────────────────────────────

    async def load(self) -> None:
        """Fetch the whole collection (on mount). No automatic retry."""
        seq = self._next_seq()
        self._pending_list_seq = seq
        self._replay = []
        self.state.loading = True

        try:
            spaces = await self.client.list_spaces()
        except ClientError as e:
            logger.info("spaces.list_failed", seq=seq, error=e.message)
            if seq == self._pending_list_seq:
                self._pending_list_seq = None
                self._replay = []
                self.state.loading = False
            self.notifier.error("Error fetching spaces")
            return

        if seq != self._pending_list_seq:
            logger.debug("spaces.list_superseded", seq=seq, newest=self._pending_list_seq)
            return

        snapshot: Optional[list[Space]] = list(spaces)
        for mutation in self._replay:
            snapshot = apply_mutation(snapshot, mutation)
        self.state.spaces = snapshot
        self.state.loading = False
        self._pending_list_seq = None
        self._replay = []

    # ─── Create ─────────────────────────────────────────

    def open_create_dialog(self) -> None:
        self.dialog = CreateDialog(open=True, space_name="")

    def set_space_name(self, name: str) -> None:
        self.dialog.space_name = name

    def cancel_create_dialog(self) -> None:
        self.dialog.open = False

    async def create_space(self) -> Optional[Space]:
        """Create a space from the dialog's tracked name.

        The dialog closes before the request goes out and stays closed
        whatever the outcome. The name is not validated here; the server
        decides whether it is acceptable.
        """
        self.dialog.open = False
        seq = self._next_seq()

        try:
            created = await self.client.create_space(self.dialog.space_name)
        except ClientError as e:
            logger.info("spaces.create_failed", seq=seq, error=e.message)
            self.notifier.error(e.message or "Error Creating Space")
            return None

        self._apply(_Created(created.space))
        self.notifier.success(created.message)
        return created.space

    # ─── Delete ─────────────────────────────────────────

    async def delete_space(self, space_id: str) -> bool:
        """Delete by id once the server confirms. No optimistic removal."""
        seq = self._next_seq()

        try:
            message = await self.client.delete_space(space_id)
        except ClientError as e:
            logger.info("spaces.delete_failed", seq=seq, space_id=space_id, error=e.message)
            self.notifier.error(e.message or "Error Deleting Space")
            return False

        self._apply(_Deleted(space_id))
        self.notifier.success(message)
        return True

    def _apply(self, mutation: _Mutation) -> None:
        self.state.spaces = apply_mutation(self.state.spaces, mutation)
        if self._pending_list_seq is not None:
            self._replay.append(mutation)

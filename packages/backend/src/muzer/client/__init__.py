"""Client side of the spaces flow.

SpacesClient talks HTTP; SpaceListController owns the local list state
and reconciles it one server response at a time; render_spaces turns
that state into cards.
"""

from muzer.client.errors import ApiError, ClientError, NetworkFailure
from muzer.client.http import SpacesClient
from muzer.client.state import (
    CreateDialog,
    LocalListState,
    Notifier,
    SpaceListController,
)
from muzer.client.view import SKELETON_COUNT, SkeletonCard, SpaceCard, render_spaces

__all__ = [
    "ApiError",
    "ClientError",
    "CreateDialog",
    "LocalListState",
    "NetworkFailure",
    "Notifier",
    "SKELETON_COUNT",
    "SkeletonCard",
    "SpaceCard",
    "SpaceListController",
    "SpacesClient",
    "render_spaces",
]

"""Muzer CLI: serve the API and manage your spaces from a terminal.

Usage:
    muzer serve                          # Run the API server
    muzer spaces list                    # Show your spaces
    muzer spaces create "Friday Jams"    # Create a space
    muzer spaces delete <space-id>       # Delete a space
    muzer token <creator-id>             # Generate an app token

The spaces commands drive the same list controller a UI would: mount
(list), then one create/delete, then render. Notifications print as
one-line toasts; any error toast makes the command exit 1.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import sys

import click

from muzer import __version__
from muzer.client import (
    ClientError,
    SkeletonCard,
    SpaceCard,
    SpaceListController,
    SpacesClient,
    render_spaces,
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("MUZER_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> SpacesClient:
    """Build a spaces client pointed at the Muzer backend."""
    return SpacesClient(
        base_url=_api_url(),
        session_token=os.environ.get("MUZER_SESSION_TOKEN"),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous click handler.

    When already inside an event loop (e.g. CliRunner in an async test)
    the coroutine runs on a fresh loop in a worker thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


class ToastNotifier:
    """Notifier that prints toasts and remembers whether any failed."""

    def __init__(self):
        self.errors = 0

    def success(self, message: str) -> None:
        click.secho(f"✓ {message}", fg="green")

    def error(self, message: str) -> None:
        self.errors += 1
        click.secho(f"✗ {message}", fg="red", err=True)


def _print_cards(controller: SpaceListController) -> None:
    cards = render_spaces(controller.state, controller.delete_space)
    if not cards:
        # None: the list never loaded
        if controller.state.spaces is not None:
            click.echo("No spaces yet.")
        return
    for card in cards:
        if isinstance(card, SkeletonCard):
            click.secho("  ░░░░░░░░░░░░░░░░", dim=True)
        elif isinstance(card, SpaceCard):
            space = card.space
            status = click.style(
                "active" if space.is_active else "inactive",
                fg="green" if space.is_active else "yellow",
            )
            click.echo(f"  {space.name:<30}  {status:<8}  {space.id}")


async def _with_controller(action) -> int:
    """Mount a list controller, run action(controller), render, return exit code."""
    notifier = ToastNotifier()
    async with _client() as client:
        controller = SpaceListController(client=client, notifier=notifier)
        await controller.load()
        if action is not None:
            await action(controller)
    _print_cards(controller)
    return 1 if notifier.errors else 0


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="muzer")
def main():
    """Muzer: spaces and app tokens."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: MUZER_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: MUZER_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    from muzer.config import settings

    uvicorn.run(
        "muzer.main:app",
        host=host or settings.host,
        port=settings.port if port is None else port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# muzer spaces ...
# ---------------------------------------------------------------------------


@main.group()
def spaces():
    """List, create and delete your spaces."""


@spaces.command("list")
def list_cmd():
    """Show your spaces."""
    sys.exit(_run(_with_controller(None)))


@spaces.command("create")
@click.argument("name")
def create_cmd(name: str):
    """Create a space called NAME."""

    async def action(controller: SpaceListController) -> None:
        controller.open_create_dialog()
        controller.set_space_name(name)
        await controller.create_space()

    sys.exit(_run(_with_controller(action)))


@spaces.command("delete")
@click.argument("space_id")
def delete_cmd(space_id: str):
    """Delete the space with id SPACE_ID."""

    async def action(controller: SpaceListController) -> None:
        await controller.delete_space(space_id)

    sys.exit(_run(_with_controller(action)))


# ---------------------------------------------------------------------------
# muzer token
# ---------------------------------------------------------------------------


@main.command()
@click.argument("creator_id")
def token(creator_id: str):
    """Generate an app token for CREATOR_ID."""

    async def _impl() -> str:
        async with _client() as client:
            return await client.generate_token(creator_id)

    try:
        value = _run(_impl())
    except ClientError as e:
        click.secho(f"✗ {e.message}", fg="red", err=True)
        sys.exit(1)
    click.echo(value)


if __name__ == "__main__":
    main()

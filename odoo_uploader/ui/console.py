"""Console implementations of the picker, confirmation and notification surfaces."""

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from odoo_uploader.coordinator.upload_coordinator import FAILURE_MESSAGE, SUCCESS_MESSAGE
from odoo_uploader.models.credentials import Credentials
from odoo_uploader.parsers.image_collector import expand_image_paths, is_image_file
from odoo_uploader.settings.store import CredentialStore


class ConsoleNotifier:
    """Prints status messages to the console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def notify(self, message: str) -> None:
        if message == SUCCESS_MESSAGE:
            self.console.print(f"[green]✓[/green] {escape(message)}")
        elif message == FAILURE_MESSAGE:
            self.console.print(f"[red]✗ {escape(message)}[/red]")
        else:
            self.console.print(f"[yellow]{escape(message)}[/yellow]")


class ConsoleConfirmer:
    """Yes/no prompt that runs off the event loop."""

    def __init__(self, console: Console, assume_yes: bool = False) -> None:
        """Initialize the confirmer.

        Args:
            console: Console to prompt on
            assume_yes: Approve every confirmation without asking
        """
        self.console = console
        self.assume_yes = assume_yes

    def _ask(self, message: str) -> bool:
        try:
            return Confirm.ask(message, console=self.console, default=False)
        except (EOFError, KeyboardInterrupt):
            # Closed input is a "no"
            self.console.print()
            return False

    async def confirm(self, message: str) -> bool:
        if self.assume_yes:
            self.console.print(f"[dim]{escape(message)} (yes)[/dim]")
            return True
        return await asyncio.to_thread(self._ask, message)


class ConsolePicker:
    """Selects images by path instead of a gallery or camera."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def pick_multiple(self) -> list[Path]:
        """Ask for image files and/or folders.

        Returns:
            Images found, in the order given. Empty if the user enters nothing.
        """
        try:
            raw = Prompt.ask(
                "Images or folders (space separated, blank to cancel)",
                console=self.console,
                default="",
                show_default=False,
            )
        except (EOFError, KeyboardInterrupt):
            return []
        if not raw.strip():
            return []
        try:
            tokens = shlex.split(raw)
        except ValueError as e:
            self.console.print(f"[red]Could not parse paths: {escape(str(e))}[/red]")
            return []
        return expand_image_paths(Path(t) for t in tokens)

    def capture_one(self) -> Path | None:
        """Ask for a single freshly taken photo.

        Returns:
            The image path, or None if cancelled or not an image
        """
        try:
            raw = Prompt.ask(
                "Path of the captured photo (blank to cancel)",
                console=self.console,
                default="",
                show_default=False,
            )
        except (EOFError, KeyboardInterrupt):
            return None
        raw = raw.strip()
        if not raw:
            return None
        path = Path(raw).expanduser()
        if not is_image_file(path):
            self.console.print(f"[red]Not an image file: {escape(str(path))}[/red]")
            return None
        return path


def edit_settings(
    console: Console,
    store: CredentialStore,
    api_key: str | None = None,
    api_endpoint: str | None = None,
) -> Credentials:
    """Update the stored API key and endpoint.

    Values not passed in are prompted for, defaulting to the stored ones.

    Args:
        console: Console to prompt on
        store: Credential store to update
        api_key: New API key, or None to prompt
        api_endpoint: New endpoint URL, or None to prompt

    Returns:
        The reloaded credentials
    """
    current = store.load()

    if api_endpoint is None:
        api_endpoint = Prompt.ask(
            "API endpoint",
            console=console,
            default=current.api_endpoint or "",
            show_default=bool(current.api_endpoint),
        )
    if api_key is None:
        api_key = Prompt.ask(
            f"API key [dim](current: {escape(current.masked_key)})[/dim]",
            console=console,
            default=current.api_key or "",
            show_default=False,
            password=True,
        )

    credentials = store.save(api_key, api_endpoint)
    if credentials.is_configured:
        console.print("[green]✓[/green] API settings saved")
    else:
        console.print("[yellow]API settings saved, but the key or endpoint is empty[/yellow]")
    return credentials

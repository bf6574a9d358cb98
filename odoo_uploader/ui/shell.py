"""Interactive console session for building and sending an image batch."""

from __future__ import annotations

import asyncio
import logging
import shlex
from pathlib import Path
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from odoo_uploader.coordinator.upload_coordinator import UploadCoordinator
from odoo_uploader.errors import CollectionBusyError
from odoo_uploader.models.credentials import Credentials
from odoo_uploader.settings.store import CredentialStore
from odoo_uploader.state.collection import ImageCollection
from odoo_uploader.ui.console import ConsolePicker, edit_settings

logger = logging.getLogger(__name__)

HELP_TEXT = """\
[bold]Commands[/bold]
  pick            add images or whole folders
  capture         add a single photo
  list            show the selected images
  remove N        remove image number N
  folder NAME     set the package ID / folder name
  upload          upload all images to the folder
  settings        edit the API key and endpoint
  help            show this help
  quit            leave"""


@final
class UploaderShell:
    """Command loop holding the image list, folder name and credentials."""

    def __init__(
        self,
        console: Console,
        store: CredentialStore,
        coordinator: UploadCoordinator,
        picker: ConsolePicker,
        collection: ImageCollection | None = None,
    ) -> None:
        self.console = console
        self.store = store
        self.coordinator = coordinator
        self.picker = picker
        self.collection = collection or ImageCollection()
        self.folder_name = ""
        self.credentials: Credentials = store.load()
        self._upload_task: asyncio.Task | None = None

    def reload_credentials(self) -> None:
        self.credentials = self.store.load()

    def show_images(self) -> None:
        if self.collection.is_empty:
            self.console.print("[dim]No images selected[/dim]")
            return

        table = Table(title=f"Images for folder: {escape(self.folder_name) or '<not set>'}")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("File")
        table.add_column("Size", justify="right")
        for index, path in enumerate(self.collection, start=1):
            try:
                size = f"{path.stat().st_size / 1024:.1f} KB"
            except OSError:
                size = "[red]missing[/red]"
            table.add_row(str(index), escape(str(path)), size)
        self.console.print(table)

    def _add(self, images: list[Path]) -> None:
        try:
            added = self.collection.extend(images)
        except CollectionBusyError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return
        self.console.print(f"Added {added} image(s), {len(self.collection)} selected")

    def _remove(self, args: list[str]) -> None:
        if len(args) != 1 or not args[0].isdigit():
            self.console.print("[red]Usage: remove N[/red]")
            return
        index = int(args[0]) - 1
        try:
            removed = self.collection.remove_at(index)
        except IndexError:
            self.console.print(f"[red]No image number {args[0]}[/red]")
            return
        except CollectionBusyError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return
        self.console.print(f"Removed {escape(removed.name)}")

    @property
    def uploading(self) -> bool:
        return self._upload_task is not None and not self._upload_task.done()

    def _upload_finished(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Upload task failed: %s", error, exc_info=error)
            self.console.print(f"[red]Upload error: {escape(str(error))}[/red]")

    async def upload(self) -> None:
        """Start an upload in the background.

        Returns after the confirmation prompt: immediately if the attempt
        ended there, otherwise once the request is on its way. Other
        commands keep working while it is in flight.
        """
        if self.coordinator.is_busy:
            self.console.print("[yellow]Still uploading, please wait[/yellow]")
            return

        started = asyncio.Event()
        task = asyncio.create_task(
            self.coordinator.attempt_upload(
                self.collection, self.folder_name, self.credentials, on_start=started.set
            )
        )
        task.add_done_callback(self._upload_finished)
        self._upload_task = task

        waiter = asyncio.create_task(started.wait())
        try:
            _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            _ = waiter.cancel()
        if not task.done():
            self.console.print("[dim]Uploading in the background...[/dim]")

    async def wait_for_upload(self) -> None:
        """Wait for the background upload, if any, to finish."""
        task = self._upload_task
        if task is None:
            return
        _ = await asyncio.wait({task})

    async def handle(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the session should end
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit", "q"):
            return False
        if command == "pick":
            images = await asyncio.to_thread(self.picker.pick_multiple)
            if images:
                self._add(images)
        elif command == "capture":
            photo = await asyncio.to_thread(self.picker.capture_one)
            if photo is not None:
                self._add([photo])
        elif command in ("list", "ls"):
            self.show_images()
        elif command in ("remove", "rm"):
            self._remove(args)
        elif command == "folder":
            self.folder_name = " ".join(args)
            self.console.print(f"Folder set to {escape(self.folder_name.strip()) or '<empty>'}")
        elif command == "upload":
            await self.upload()
        elif command == "settings":
            _ = await asyncio.to_thread(edit_settings, self.console, self.store)
            self.reload_credentials()
        elif command == "help":
            self.console.print(HELP_TEXT)
        else:
            self.console.print(f"[red]Unknown command: {escape(command)}[/red] (try 'help')")
        return True

    async def run(self) -> None:
        self.console.print("[bold blue]Send Images to Odoo[/bold blue]")
        if not self.credentials.is_configured:
            self.console.print("[yellow]API settings not configured, use 'settings' first[/yellow]")
        self.console.print("Type 'help' for commands.\n")

        while True:
            try:
                line = await asyncio.to_thread(self.console.input, "[bold]> [/bold]")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not await self.handle(line):
                break

        if self.uploading:
            self.console.print("Waiting for the upload to finish...")
            await self.wait_for_upload()

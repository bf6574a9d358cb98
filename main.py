#!/usr/bin/env python3
"""
Odoo Image Upload Script

A command-line tool for collecting local images and uploading them to an Odoo
folder as one multipart batch, authenticated with a bearer token.

Usage:
    uv run main.py                          # interactive session
    uv run main.py upload FOLDER PATH...    # one-shot upload
    uv run main.py settings                 # edit API key and endpoint
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from odoo_uploader.config import AppConfig
from odoo_uploader.coordinator import UploadCoordinator
from odoo_uploader.errors import ConfigurationError
from odoo_uploader.log import setup_logging
from odoo_uploader.models import UploadOutcome
from odoo_uploader.parsers import expand_image_paths
from odoo_uploader.settings import CredentialStore
from odoo_uploader.state import ImageCollection
from odoo_uploader.ui import (
    ConsoleConfirmer,
    ConsoleNotifier,
    ConsolePicker,
    UploaderShell,
    edit_settings,
)
from odoo_uploader.uploaders import NOT_CONFIGURED, MultipartUploader

# Initialize Rich console for output
console = Console()


def display_settings_hint() -> None:
    """Tell the user how to configure the API key and endpoint."""
    console.print("Run [bold]main.py settings[/bold] or set ODOO_UPLOADER_API_KEY "
                  + "and ODOO_UPLOADER_API_ENDPOINT in your .env file.")


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Upload images to an Odoo folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run main.py                                   # Interactive session
  uv run main.py upload PKG-001 photos/ extra.jpg  # Upload a folder and a file
  uv run main.py upload PKG-001 photos/ --yes      # Skip the confirmation
  uv run main.py settings --api-endpoint https://odoo.example.com/api/upload
        """
    )

    _ = parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging"
    )

    subparsers = parser.add_subparsers(dest="command")

    upload_parser = subparsers.add_parser("upload", help="Upload images in one batch")
    _ = upload_parser.add_argument("folder_name", help="Package ID / destination folder name")
    _ = upload_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Image files or folders containing images"
    )
    _ = upload_parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Upload without asking for confirmation"
    )

    settings_parser = subparsers.add_parser("settings", help="Edit the API key and endpoint")
    _ = settings_parser.add_argument("--api-key", help="Bearer token for the upload endpoint")
    _ = settings_parser.add_argument("--api-endpoint", help="URL the images are posted to")

    _ = subparsers.add_parser("shell", help="Interactive session (default)")

    return parser.parse_args(argv)


def build_coordinator(config: AppConfig, assume_yes: bool = False) -> UploadCoordinator:
    """Wire the uploader and console collaborators together."""
    uploader = MultipartUploader(
        timeout=config.timeout,
        accept_any_status=config.accept_any_status,
    )
    return UploadCoordinator(
        uploader=uploader,
        confirmer=ConsoleConfirmer(console, assume_yes=assume_yes),
        notifier=ConsoleNotifier(console),
    )


def display_outcome(outcome: UploadOutcome) -> None:
    """Show the status code and error detail of an upload."""
    if outcome.status_code is not None:
        console.print(f"[blue]Status code:[/blue] {outcome.status_code}")
    if outcome.error_detail and not outcome.succeeded:
        console.print(f"[dim]{escape(outcome.error_detail)}[/dim]")
    if outcome.error_detail == NOT_CONFIGURED:
        display_settings_hint()


def run_upload(args: argparse.Namespace, config: AppConfig, store: CredentialStore) -> int:
    """Upload the given paths in one batch.

    Missing credentials are not checked here: the attempt goes through the
    coordinator like any other, which reports it with a single failure
    notification.

    Returns:
        Process exit code
    """
    paths: list[Path] = getattr(args, "paths", [])
    collection = ImageCollection(expand_image_paths(paths))
    console.print(f"[blue]Found {len(collection)} image(s)[/blue]")

    coordinator = build_coordinator(config, assume_yes=getattr(args, "yes", False))
    result = asyncio.run(
        coordinator.attempt_upload(collection, args.folder_name, store.load())
    )

    if not isinstance(result, UploadOutcome):
        console.print("[yellow]Upload cancelled.[/yellow]")
        return 1

    display_outcome(result)
    return 0 if result.succeeded else 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the image upload script."""
    args = parse_arguments(argv)

    verbose_mode: bool = getattr(args, "verbose", False)
    setup_logging(verbose_mode)

    try:
        config = AppConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    store = CredentialStore(config.settings_file)
    command: str | None = getattr(args, "command", None)

    try:
        if command == "upload":
            sys.exit(run_upload(args, config, store))
        elif command == "settings":
            _ = edit_settings(
                console,
                store,
                api_key=getattr(args, "api_key", None),
                api_endpoint=getattr(args, "api_endpoint", None),
            )
        else:
            shell = UploaderShell(
                console,
                store,
                build_coordinator(config),
                ConsolePicker(console),
            )
            asyncio.run(shell.run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Rich console front end."""

from .console import ConsoleConfirmer, ConsoleNotifier, ConsolePicker, edit_settings
from .shell import UploaderShell

__all__ = ["ConsoleConfirmer", "ConsoleNotifier", "ConsolePicker", "UploaderShell", "edit_settings"]

"""
apodwall console utilities

This module provides application-wide access to a Rich Console object for
handling writing to stdout and stderr.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

apodwall_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "bold", "describe": ""}
)

console = Console(theme=apodwall_theme)
error_console = Console(theme=apodwall_theme, stderr=True)


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(f":warning-emoji:  {escape(msg)}", style="warning")


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{escape(msg)}", style="describe", **kwargs)


def confirm(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f":white_check_mark-emoji: {escape(msg)}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: {escape(msg)}", style="fail")

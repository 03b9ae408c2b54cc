"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich, and the
human-readable byte formatting shared by logs and reports.
"""

import sys

from rich.console import Console
from rich.theme import Theme

# Styles referenced by markup across the CLI
THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "candidate": "#faf870",
        "deleted": "#c1ff62",
    }
)

_BYTE_UNITS: tuple[str, ...] = ("KB", "MB", "GB", "TB")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def format_bytes(size_bytes: int | None) -> str:
    """Format a byte count with binary (1024-based) units.

    Values of 1 KB and above use two decimal places; smaller values
    are shown as whole bytes.

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(1536)
        '1.50 KB'
    """
    if not size_bytes:
        return "0 B"
    if abs(size_bytes) < 1024:
        return f"{size_bytes} B"

    size = size_bytes / 1024
    unit = _BYTE_UNITS[0]
    for next_unit in _BYTE_UNITS[1:]:
        if abs(size) < 1024:
            break
        size /= 1024
        unit = next_unit
    return f"{size:.2f} {unit}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")

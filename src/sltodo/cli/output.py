"""Colorful CLI output helpers."""

import sys

# ANSI escape sequences
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"
# Status markers
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Only colorize when writing to a terminal."""
    # Redirected or captured stdout gets plain text
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    return True


def _colorize(text: str, color: str) -> str:
    """Wrap text in a color code when stdout is a terminal."""
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    mark = _colorize(CHECK, GREEN)
    print(f"{mark} {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    mark = _colorize(BULLET, YELLOW)
    print(f"{mark} {message}")


def error(message: str) -> None:
    """Print error message with red cross."""
    mark = _colorize(CROSS, RED)
    print(f"{mark} {message}")

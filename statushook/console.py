"""
Console output — timestamped, coloured log lines.

Everything the bridge reports goes through here: the startup banner,
progress lines, and errors (which go to stderr).
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone

# ANSI color codes for terminal styling
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_GRAY = "\033[90m"

_debug_enabled = False


def set_log_level(level: str) -> None:
    global _debug_enabled
    _debug_enabled = level.upper() == "DEBUG"


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def print_banner(page_name: str, page_url: str, interval: int) -> None:
    """Print the startup banner."""
    print(
        f"\n{_BOLD}{_CYAN}statushook{_RESET} "
        f"{_DIM}-- status page to webhook bridge{_RESET}\n"
        f"  {_BOLD}> Watching:{_RESET} {page_name}"
        f"  {_DIM}({page_url}){_RESET}"
        f"  {_DIM}[every {interval}s]{_RESET}\n"
    )


def log(message: str) -> None:
    print(f"  {_GRAY}[{_timestamp()}]{_RESET} {message}", flush=True)


def success(message: str) -> None:
    print(f"  {_GRAY}[{_timestamp()}]{_RESET} {_GREEN}{message}{_RESET}", flush=True)


def debug(message: str) -> None:
    """Only printed when the log level is DEBUG."""
    if _debug_enabled:
        print(f"  {_GRAY}[{_timestamp()}] {message}{_RESET}", flush=True)


def error(message: str) -> None:
    print(
        f"  {_GRAY}[{_timestamp()}]{_RESET} {_RED}ERROR{_RESET} {message}",
        file=sys.stderr,
        flush=True,
    )


def print_shutdown() -> None:
    """Print shutdown message."""
    print(f"\n{_BOLD}{_CYAN}statushook stopped.{_RESET}\n")

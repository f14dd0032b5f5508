"""Console output — banner, progress lines and error diagnostics.

Everything goes to stderr so the generated route list can be piped from
stdout.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl.config import ProwlConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_ORANGE = "\033[38;5;214m" if _COLOR else ""


def yellow(text: str) -> str:
    """Highlight *text* (route templates, file names) in diagnostics."""
    return f"{_YELLOW}{text}{_RESET}"


# ---------------------------------------------------------------------------
# Progress and diagnostics
# ---------------------------------------------------------------------------

def print_progress(message: str) -> None:
    """Print a one-line progress message."""
    print(f"  {_DIM}·{_RESET} {message}", file=sys.stderr)


def log_error(message: str) -> None:
    """Print a non-fatal error diagnostic."""
    print(f"  {_RED}✗{_RESET} {message}", file=sys.stderr)


def log_warning(message: str) -> None:
    print(f"  {_YELLOW}!{_RESET} {message}", file=sys.stderr)


# ---------------------------------------------------------------------------
# Banner
# ---------------------------------------------------------------------------

def print_banner(
    config: ProwlConfig,
    mode: str,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the prowl startup banner to stderr.

    Args:
        config: Resolved ProwlConfig.
        mode: One of ``"routes"``, ``"validate"``.
        load_ms: Time spent loading the configuration in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from prowl import __version__

    cat = "\u14DA\u1618\u14E2"  # ᓚᘏᗢ
    header = (
        f"  {_ORANGE}{_BOLD}{cat}{_RESET}  Prowl {_DIM}v{__version__}{_RESET}  "
        f"{_YELLOW}[{mode}]{_RESET}"
    )

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    count = len(config.routes)
    label = "template" if count == 1 else "templates"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {count} route {label} loaded{timing}")

    limit = "unbounded" if config.max_concurrency is None else str(config.max_concurrency)
    lines.append(f"  {_DIM}├─{_RESET} concurrency: {limit}, timeout: {config.timeout:g}s")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    lines.append("")
    print("\n".join(lines), file=sys.stderr)

    if warnings:
        for warning in warnings:
            log_warning(warning)
        print(file=sys.stderr)


def print_summary(
    routes_count: int,
    fallbacks: int,
    duration_ms: float,
    output: object,
) -> None:
    """Print the generation summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  {_GREEN}Generated{_RESET} {routes_count} route{'s' if routes_count != 1 else ''}",
    ]
    if fallbacks:
        lines.append(
            f"  {_YELLOW}{fallbacks} template{'s' if fallbacks != 1 else ''} "
            f"left unexpanded{_RESET}"
        )
    lines.append(f"  Output: {output}")
    lines.append(f"  Done in {duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)

"""Rich console logging for the standalone server."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Route stdlib logging through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s - %(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def log_api_call(method: str, ok: bool, description: str | None = None) -> None:
    """One line per handled API call."""
    if ok:
        console.print(f"📨 [bold green]API[/] {method}")
    else:
        console.print(f"⚠️ [bold red]API[/] {method}: {description}")

"""URL checker CLI: entry-point for all operations.

Usage:
    python cli/main.py --help

Commands:
    check  → normalise input, probe in batches, report & export
    parse  → show which URLs would be checked
    serve  → run the probe API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from urlchecker.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from urlchecker.config import settings
from urlchecker.logging_config import setup_logging

from cli.commands.check import check, parse

app = typer.Typer(
    name="urlcheck",
    help="Batch URL status checker with SEO metadata.",
    no_args_is_help=True,
)

app.command("check")(check)
app.command("parse")(parse)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: $LOG_LEVEL or INFO)."
    ),
    log_json: bool = typer.Option(
        False, "--log-json", help="Emit logs as JSON lines."
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level or settings.log_level, json_output=log_json or settings.log_json)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: $API_HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: $API_PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Serve the single-URL probe API."""
    import uvicorn

    bind_host = host or settings.api_host
    bind_port = port or settings.api_port
    typer.echo(f"[serve] Listening on http://{bind_host}:{bind_port}/api/check-url")
    uvicorn.run(
        "urlchecker.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_config=None,
    )


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

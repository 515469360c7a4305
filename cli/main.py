"""Scheduler gateway CLI: entry-point for running and poking the backend.

Usage:
    python cli/main.py --help

Commands:
    serve     run the HTTP gateway under uvicorn
    config    show the resolved settings (secrets redacted)
    ask       send one prompt through the AI relay
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from scheduler_backend.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import logging
from dataclasses import asdict
from typing import Optional

import typer

from scheduler_backend.ai import AIConfigError, AIGenerationError, generate_text
from scheduler_backend.config import settings

app = typer.Typer(
    name="scheduler",
    help="Studio scheduler backend CLI.",
    no_args_is_help=True,
)

_SECRET_FIELDS = {"supabase_key", "google_api_key", "openai_api_key"}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _redact(value: str) -> str:
    if not value:
        return "(unset)"
    return f"{value[:4]}…" if len(value) > 8 else "****"


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST or 0.0.0.0)."),
    port: Optional[int] = typer.Option(None, help="Port (default: PORT or 3000)."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the gateway with uvicorn."""
    import uvicorn

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Server listening on {bind_host}:{bind_port}")
    uvicorn.run(
        "scheduler_backend.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("config")
def show_config() -> None:
    """Print the resolved settings with credentials redacted."""
    for name, value in asdict(settings).items():
        if name in _SECRET_FIELDS:
            value = _redact(value)
        elif isinstance(value, list):
            value = ", ".join(value)
        typer.echo(f"  {name:<28} {value}")
    typer.echo(f"  {'store_configured':<28} {settings.store_configured}")


@app.command("ask")
def ask(
    prompt: str = typer.Option(..., help="Prompt to send to the AI provider."),
) -> None:
    """Send one prompt through the AI relay and print the reply."""
    if not prompt.strip():
        typer.echo("[ask] Prompt must not be empty.")
        raise typer.Exit(1)
    try:
        output = asyncio.run(generate_text(prompt, settings))
    except AIConfigError as exc:
        typer.echo(f"[ask] Configuration error: {exc}")
        raise typer.Exit(1)
    except AIGenerationError as exc:
        typer.echo(f"[ask] AI generation failed: {exc}")
        raise typer.Exit(1)
    typer.echo(output)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer

from propeval.adapters.config import config
from propeval.adapters.logging_utils import redirect_logs
from propeval.domain.errors import PropertyValidationError
from propeval.services.analyzer import analyze_property

app = typer.Typer(help="Property investment analysis (one-off runs and the HTTP API).")


def _read_payload(path: str) -> object:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


@app.command("analyze")
def analyze_cmd(
    path: str = typer.Argument(..., help="JSON file with the property figures, or '-' for stdin"),
    indent: int = typer.Option(2, help="JSON indent for the printed result"),
) -> None:
    """
    Analyze one property and print the AnalysisResult as JSON.

    Log lines go to stderr so stdout carries only the result.
    """
    redirect_logs(sys.stderr)

    try:
        payload = _read_payload(path)
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"could not read {path}: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        result = analyze_property(payload)
    except PropertyValidationError as e:
        typer.echo(f"invalid property: {e.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result.to_dict(), indent=indent))


@app.command("serve")
def serve_cmd(
    host: Optional[str] = typer.Option(None, help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, help="Port (default from config)"),
) -> None:
    """
    Run the HTTP API with uvicorn.
    """
    import uvicorn

    uvicorn.run(
        "propeval.api.http:app",
        host=host or config.HOST,
        port=port or config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    app()

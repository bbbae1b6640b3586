"""Typer CLI — ``sda serve``, ``sda analyze``, ``sda validate`` and ``sda languages``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from sda.config import load_config
from sda.schemas.analysis import SUPPORTED_LANGUAGES, AnalysisType
from sda.schemas.config import AssistantConfig

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="sda",
    help="Senior Dev Assistant — AI code review, explanation, optimization and refactoring.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO — noisy and unhelpful for users
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config_or_exit(config: Path | None) -> AssistantConfig:
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to assistant-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Model:       {cfg.model}")
    console.print(f"  Listen on:   {cfg.host}:{cfg.port}")
    console.print(f"  Server URL:  {cfg.server_url}")
    console.print(f"  Language:    {cfg.default_language}")


@app.command()
def languages() -> None:
    """List the languages offered in the selector."""
    for lang in SUPPORTED_LANGUAGES:
        console.print(f"  - {lang}")


@app.command()
def serve(
    config: Path = typer.Option(None, "--config", "-c", help="Path to assistant-config.yml"),
    host: str = typer.Option(None, "--host", help="Override the configured host."),
    port: int = typer.Option(None, "--port", "-p", help="Override the configured port."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Serve canned responses (no API calls)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the HTTP server."""
    import uvicorn

    from sda.server.app import create_app

    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    if dry_run:
        from sda.shared.completion_client import DryRunCompletionClient

        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")
        client = DryRunCompletionClient()
    else:
        from sda.shared.completion_client import CompletionClient

        client = CompletionClient(model=cfg.model)

    bind_host = host or cfg.host
    bind_port = port or cfg.port
    console.print(f"[bold]Serving on[/] http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(client, cfg), host=bind_host, port=bind_port)


@app.command()
def analyze(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source file to analyze."),
    analysis_type: AnalysisType = typer.Option(..., "--type", "-t", help="Kind of analysis."),
    language: str = typer.Option(None, "--language", "-l", help="Language label (defaults to config)."),
    server: str = typer.Option(None, "--server", "-s", help="Server URL (defaults to config)."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to assistant-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Send a file to a running server and print the analysis.

    Example:

        sda analyze app.py --type review --language python
    """
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    code = file.read_text()
    ok = asyncio.run(
        _run_analysis(
            code,
            analysis_type,
            language=language or cfg.default_language,
            server_url=server or cfg.server_url,
        )
    )
    if not ok:
        raise typer.Exit(code=1)


async def _run_analysis(
    code: str,
    analysis_type: AnalysisType,
    *,
    language: str,
    server_url: str,
) -> bool:
    """Drive one session round trip and print the result."""
    from sda.client.session import AnalysisSession, ErrorState
    from sda.client.transport import HttpTransport

    transport = HttpTransport(server_url)
    session = AnalysisSession(transport, language=language)
    session.code = code
    try:
        with console.status(f"Analyzing {language} code ({analysis_type.value})…"):
            await session.submit(analysis_type)
    finally:
        await transport.aclose()

    if isinstance(session.state, ErrorState):
        console.print(session.result_text, style="red", markup=False)
        return False

    console.print("[bold]Analysis Result:[/]\n")
    console.print(Markdown(session.result_text))
    return True

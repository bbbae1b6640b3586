"""FastAPI app factory — ``POST /analyze`` plus the bootstrap page."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from jinja2 import Environment, FileSystemLoader

from sda.errors import CompletionError, InvalidRequest
from sda.schemas.analysis import SUPPORTED_LANGUAGES
from sda.schemas.config import AssistantConfig
from sda.server.handler import RequestHandler, SupportsComplete

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_STATIC_DIR = Path(__file__).parent / "static"

# Returned for any engine failure; the underlying error only goes to the log.
_COMPLETION_FAILED = "Error: The completion engine did not return a usable response."


def render_index(config: AssistantConfig) -> str:
    """Render the HTML bootstrap document."""
    env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)
    template = env.get_template("index.html")
    return template.render(
        languages=SUPPORTED_LANGUAGES,
        default_language=config.default_language,
    )


def create_app(
    completion_client: SupportsComplete | None = None,
    config: AssistantConfig | None = None,
) -> FastAPI:
    """Build the app around an injected completion client.

    When no client is given, a real ``CompletionClient`` is created from
    ``config`` (API key from the environment).
    """
    config = config or AssistantConfig()
    if completion_client is None:
        from sda.shared.completion_client import CompletionClient

        completion_client = CompletionClient(model=config.model)

    app = FastAPI(title="Senior Dev Assistant")
    app.state.handler = RequestHandler(completion_client)
    app.state.index_html = render_index(config)
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest) -> PlainTextResponse:
        logger.warning("Rejected request: %s", exc)
        return PlainTextResponse(f"Error: {exc}", status_code=400)

    @app.exception_handler(CompletionError)
    async def completion_error_handler(request: Request, exc: CompletionError) -> PlainTextResponse:
        logger.error("Completion failed: %s", exc)
        return PlainTextResponse(_COMPLETION_FAILED, status_code=502)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(content=app.state.index_html)

    @app.get("/healthz")
    async def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.post("/analyze", response_class=PlainTextResponse)
    async def analyze(request: Request) -> PlainTextResponse:
        """Run one analysis and return the raw completion text."""
        body = await request.body()
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidRequest("Request body is not valid JSON") from exc

        text = await app.state.handler.handle(payload)
        return PlainTextResponse(text)

    return app

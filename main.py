import inspect
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from routes.prediction_route import router as prediction_router
from routes.session_route import router as session_router
from services.openai.assistant import build_openai_client
from services.session_store import SessionStore
from utils.config import AppConfig

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

LOGGER = logging.getLogger(__name__)


async def _close_client(client) -> None:
    """Close an async client if it exposes a close/aclose method."""
    if client is None:
        return
    aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
    if aclose is None:
        return
    try:
        if inspect.iscoroutinefunction(aclose):
            await aclose()
        else:
            result = aclose()
            if inspect.isawaitable(result):
                await result
    except Exception as exc:
        LOGGER.warning("Error while closing %s: %s", type(client).__name__, exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the configuration read from the environment (and .env)
      - the shared HTTP client used for both hosted classifiers
      - the OpenAI async client (only when OPENAI_API_KEY is set)
      - the in-memory session store
    and attach them to `app.state`.
    """
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.config = config

    # No timeout unless CLASSIFIER_TIMEOUT is set; nothing is retried.
    app.state.http_client = httpx.AsyncClient(timeout=config.classifier_timeout)

    if config.openai_api_key:
        try:
            app.state.openai_client = build_openai_client(
                config.openai_api_key, timeout=config.classifier_timeout
            )
        except Exception as exc:
            raise RuntimeError("Failed to initialize OpenAI Async client") from exc
    else:
        LOGGER.warning("OPENAI_API_KEY is not set; the assistant will answer with an error message.")
        app.state.openai_client = None

    if not config.image_classifier_url:
        LOGGER.warning("IMAGE_CLASSIFIER_URL is not set; scan uploads will fail.")

    app.state.session_store = SessionStore()

    try:
        yield
    finally:
        await _close_client(getattr(app.state, "http_client", None))
        await _close_client(getattr(app.state, "openai_client", None))


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Report which upstream services are configured.
        """
        state = request.app.state
        config = getattr(state, "config", None)
        return {
            "ok": True,
            "assistant_available": getattr(state, "openai_client", None) is not None,
            "image_classifier_configured": bool(config and config.image_classifier_url),
            "tabular_classifier_url": config.tabular_classifier_url if config else None,
        }

    # Register application routers
    app.include_router(session_router)
    app.include_router(prediction_router)

    return app


app = create_app()

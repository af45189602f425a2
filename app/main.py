"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from app.api.middleware import RequestContextMiddleware
from app.api.routes import api_router
from app.infrastructure.keep_alive import run_keep_alive
from app.logging_config import setup_logging
from app.persistence.repositories.client_store import ClientStore
from app.persistence.seed import demo_clients
from app.settings import settings

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    store = ClientStore()
    if settings.seed_demo_data:
        store.load(demo_clients())
    app.state.client_store = store
    logger.info(
        "CRM server started",
        extra={"clients": len(store), "webhook": f"POST {settings.api_prefix}/webhook"},
    )

    keep_alive_task = None
    if settings.app_base_url:
        keep_alive_task = asyncio.create_task(run_keep_alive(settings.app_base_url))

    yield

    # Shutdown
    if keep_alive_task is not None:
        keep_alive_task.cancel()
        with suppress(asyncio.CancelledError):
            await keep_alive_task


# Create FastAPI app
app = FastAPI(
    title="Mortgage CRM API",
    description="Client pipeline, bot lead intake and dashboard analytics for a mortgage brokerage",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestContextMiddleware)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint, also the keep-alive ping target."""
    return {"status": "healthy"}


def _static_root() -> Path:
    root = Path(settings.static_dir)
    if not root.is_absolute():
        root = Path(__file__).parent.parent / root
    return root.resolve()


@app.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def frontend_fallback(full_path: str):
    """Serve the compiled frontend, falling back to index.html for client-side routes.

    Unmatched API paths get a JSON 404 instead of the HTML shell.
    """
    api_prefix = settings.api_prefix.strip("/")
    if full_path == api_prefix or full_path.startswith(f"{api_prefix}/"):
        return JSONResponse(content={"error": "API route not found"}, status_code=404)

    root = _static_root()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)

    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    return JSONResponse(content={"error": "Frontend build not found"}, status_code=404)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)

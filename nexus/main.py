"""FastAPI entry-point exposing the Nexus orchestrator."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from nexus.api.chat import router as chat_router
from nexus.api.servers import router as servers_router
from nexus.api.sessions import router as sessions_router
from nexus.config import config, configure_logging
from nexus.runtime import get_llm_pool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    configure_logging()
    if config.openai is None:
        logger.warning("No language-model credential configured; replies will use the fallback text")
    yield
    # Shutdown: release SDK HTTP connections
    await get_llm_pool().aclose()


app = FastAPI(title="Nexus Orchestrator", lifespan=lifespan)
app.include_router(servers_router)
app.include_router(sessions_router)
app.include_router(chat_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("nexus.main:app", host="127.0.0.1", port=8000)

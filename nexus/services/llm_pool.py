"""LLM client pool for shared model access with concurrency control."""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from openai import AsyncAzureOpenAI, AsyncOpenAI

from nexus.config import OpenAIConfig
from nexus.core.errors import MissingCredentialError

logger = logging.getLogger(__name__)


class LLMPool:
    """Manages shared LLM clients with concurrency limiting."""

    def __init__(self) -> None:
        self._clients: Dict[str, Any] = {}
        self._semaphores: Dict[str, asyncio.Semaphore] = {}
        self._initialized: Dict[str, bool] = {}
        self._configs: Dict[str, OpenAIConfig] = {}

    def register_openai(self, name: str, config: OpenAIConfig) -> None:
        """Register a model configuration; the SDK client is built on first use."""
        self._clients[name] = config
        self._configs[name] = config
        self._semaphores[name] = asyncio.Semaphore(config.max_concurrent)
        self._initialized[name] = False

    def register_client(self, name: str, client: Any, max_concurrent: int = 1) -> None:
        """Register an already constructed client exposing ``chat.completions.create``."""
        self._clients[name] = client
        self._configs.pop(name, None)
        self._semaphores[name] = asyncio.Semaphore(max_concurrent)
        self._initialized[name] = True

    def is_registered(self, model_name: str) -> bool:
        return model_name in self._clients

    @asynccontextmanager
    async def acquire(self, model_name: str) -> AsyncIterator[Any]:
        """Acquire access to a model client with concurrency control."""
        if model_name not in self._clients:
            raise MissingCredentialError(model_name)

        semaphore = self._semaphores[model_name]
        await semaphore.acquire()

        try:
            # Lazy initialization on first use
            if not self._initialized[model_name]:
                self._initialize_client(model_name)

            yield self._clients[model_name]
        finally:
            semaphore.release()

    def _initialize_client(self, model_name: str) -> None:
        config = self._clients[model_name]

        if config.is_azure:
            client = AsyncAzureOpenAI(
                api_key=config.api_key,
                api_version=config.api_version,
                azure_endpoint=config.endpoint,
            )
        else:
            client = AsyncOpenAI(api_key=config.api_key)
        logger.debug("Initialized %s client for %s", type(client).__name__, model_name)
        self._clients[model_name] = client
        self._initialized[model_name] = True

    async def aclose(self) -> None:
        """Close the SDK clients built by the pool so the next use rebuilds them."""
        for name, config in self._configs.items():
            if not self._initialized[name]:
                continue
            await self._clients[name].close()
            self._clients[name] = config
            self._initialized[name] = False

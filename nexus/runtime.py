"""Application runtime composition helpers."""
from __future__ import annotations

from functools import lru_cache

from nexus.config import config
from nexus.orchestration.client import OrchestrationClient
from nexus.orchestration.session import SessionStore
from nexus.services.llm_pool import LLMPool
from nexus.services.mcp import MCPRegistry


@lru_cache
def get_mcp_registry() -> MCPRegistry:
    return MCPRegistry.seeded()


@lru_cache
def get_llm_pool() -> LLMPool:
    pool = LLMPool()

    # Without a credential the pool stays empty and every turn falls back.
    if config.openai:
        pool.register_openai(config.model_name, config.openai)

    return pool


@lru_cache
def get_orchestration_client() -> OrchestrationClient:
    return OrchestrationClient(
        get_llm_pool(),
        model_name=config.model_name,
        temperature=config.temperature,
        request_timeout=config.request_timeout,
        include_history=config.include_history,
    )


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore(
        registry=get_mcp_registry(),
        client=get_orchestration_client(),
        max_sessions=config.max_sessions,
    )

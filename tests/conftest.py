"""Shared fixtures for the orchestrator tests."""
from __future__ import annotations

import pytest
from fakes import MODEL, FakeLLMClient

from nexus.orchestration.client import OrchestrationClient
from nexus.services.llm_pool import LLMPool
from nexus.services.mcp import MCPRegistry


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def llm_pool(fake_llm: FakeLLMClient) -> LLMPool:
    pool = LLMPool()
    pool.register_client(MODEL, fake_llm)
    return pool


@pytest.fixture
def client(llm_pool: LLMPool) -> OrchestrationClient:
    return OrchestrationClient(llm_pool, model_name=MODEL, temperature=0.7, request_timeout=2.0)


@pytest.fixture
def registry() -> MCPRegistry:
    return MCPRegistry.seeded()

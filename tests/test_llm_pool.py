"""Tests for lazy SDK client construction and shutdown in the LLM pool."""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fakes import FakeLLMClient

from nexus.config import OpenAIConfig
from nexus.core.errors import MissingCredentialError
from nexus.services import llm_pool as llm_pool_module
from nexus.services.llm_pool import LLMPool

AZURE = OpenAIConfig(
    api_key="azure-key",
    endpoint="https://nexus.openai.azure.com",
    api_version="2024-06-01",
    deployment_name="gpt-4o",
)
OPENAI = OpenAIConfig(api_key="sk-test", deployment_name="gpt-4o-mini")


class RecordingSDK:
    """Stands in for an openai SDK client class and remembers its instances."""

    instances: List[RecordingSDK] = []

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs: Dict[str, Any] = kwargs
        self.closed = False
        type(self).instances.append(self)

    async def close(self) -> None:
        self.closed = True


class RecordingAzure(RecordingSDK):
    instances: List[RecordingSDK] = []


class RecordingOpenAI(RecordingSDK):
    instances: List[RecordingSDK] = []


@pytest.fixture(autouse=True)
def sdk_classes(monkeypatch: pytest.MonkeyPatch) -> None:
    RecordingAzure.instances = []
    RecordingOpenAI.instances = []
    monkeypatch.setattr(llm_pool_module, "AsyncAzureOpenAI", RecordingAzure)
    monkeypatch.setattr(llm_pool_module, "AsyncOpenAI", RecordingOpenAI)


@pytest.mark.anyio
async def test_azure_config_builds_azure_client() -> None:
    pool = LLMPool()
    pool.register_openai("gpt-4o", AZURE)

    async with pool.acquire("gpt-4o") as client:
        assert isinstance(client, RecordingAzure)

    assert client.kwargs == {
        "api_key": "azure-key",
        "api_version": "2024-06-01",
        "azure_endpoint": "https://nexus.openai.azure.com",
    }
    assert RecordingOpenAI.instances == []


@pytest.mark.anyio
async def test_plain_config_builds_openai_client_once() -> None:
    pool = LLMPool()
    pool.register_openai("gpt-4o-mini", OPENAI)

    async with pool.acquire("gpt-4o-mini") as first:
        pass
    async with pool.acquire("gpt-4o-mini") as second:
        pass

    assert first is second
    assert first.kwargs == {"api_key": "sk-test"}
    assert len(RecordingOpenAI.instances) == 1
    assert RecordingAzure.instances == []


def test_registration_does_not_build_a_client() -> None:
    pool = LLMPool()
    pool.register_openai("gpt-4o", AZURE)

    assert pool.is_registered("gpt-4o")
    assert RecordingAzure.instances == []


@pytest.mark.anyio
async def test_unregistered_model_raises_missing_credential() -> None:
    pool = LLMPool()

    with pytest.raises(MissingCredentialError):
        async with pool.acquire("gpt-4o"):
            pass


@pytest.mark.anyio
async def test_aclose_closes_built_client_and_next_use_rebuilds() -> None:
    pool = LLMPool()
    pool.register_openai("gpt-4o-mini", OPENAI)
    async with pool.acquire("gpt-4o-mini") as first:
        pass

    await pool.aclose()
    assert first.closed is True

    async with pool.acquire("gpt-4o-mini") as second:
        pass
    assert second is not first
    assert second.closed is False
    assert len(RecordingOpenAI.instances) == 2


@pytest.mark.anyio
async def test_aclose_skips_unbuilt_and_injected_clients() -> None:
    injected = FakeLLMClient()
    pool = LLMPool()
    pool.register_openai("gpt-4o", AZURE)
    pool.register_client("fake", injected)

    await pool.aclose()
    await pool.aclose()

    assert RecordingAzure.instances == []
    async with pool.acquire("fake") as client:
        assert client is injected

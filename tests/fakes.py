"""Scripted stand-in for the openai chat-completions client."""
from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence, Tuple

MODEL = "test-model"


def make_response(text: Optional[str], tool_calls: Sequence[Tuple[str, Any]] = ()) -> Any:
    """Build an object shaped like an OpenAI chat-completions response."""
    calls = [
        SimpleNamespace(
            id=f"call_{index}",
            type="function",
            function=SimpleNamespace(
                name=name,
                arguments=args if isinstance(args, str) else json.dumps(args),
            ),
        )
        for index, (name, args) in enumerate(tool_calls)
    ]
    message = SimpleNamespace(role="assistant", content=text, tool_calls=calls or None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason="stop")])


class FakeCompletions:
    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.response = response if response is not None else make_response("ok")
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


class FakeLLMClient:
    """Client exposing ``chat.completions.create`` like the openai SDK."""

    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.completions = FakeCompletions(response, error)
        self.chat = SimpleNamespace(completions=self.completions)


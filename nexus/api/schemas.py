"""Pydantic request/response models for the HTTP API."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from nexus.core.models import ChatMessage, ServerRecord


class ServerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Display name of the server")
    url: str = Field(..., min_length=1, description="Endpoint URL, stored as given")
    description: str = Field(default="", description="What the server offers")


class ServerResponse(BaseModel):
    id: str
    name: str
    url: str
    description: str
    status: str
    tools_count: int

    @classmethod
    def from_record(cls, record: ServerRecord) -> "ServerResponse":
        return cls(
            id=record.id,
            name=record.name,
            url=record.url,
            description=record.description,
            status=record.status.value,
            tools_count=record.tools_count,
        )


class ToolCallResponse(BaseModel):
    tool_name: str
    args: Dict[str, Any]
    result: Optional[str] = None
    status: str


class MessageResponse(BaseModel):
    id: str
    text: str
    sender: str
    timestamp: datetime
    is_thinking: bool = False
    tool_calls: Optional[List[ToolCallResponse]] = None

    @classmethod
    def from_message(cls, message: ChatMessage) -> "MessageResponse":
        tool_calls = None
        if message.tool_calls is not None:
            tool_calls = [
                ToolCallResponse(
                    tool_name=call.tool_name,
                    args=call.args,
                    result=call.result,
                    status=call.status.value,
                )
                for call in message.tool_calls
            ]
        return cls(
            id=message.id,
            text=message.text,
            sender=message.sender.value,
            timestamp=message.timestamp,
            is_thinking=message.is_thinking,
            tool_calls=tool_calls,
        )


class ChatRequest(BaseModel):
    message: str = Field(..., description="User message to send to the orchestrator")
    session_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Session identifier for conversation continuity",
    )


class ChatResponse(BaseModel):
    session_id: str
    reply: MessageResponse

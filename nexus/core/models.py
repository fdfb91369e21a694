"""Core data models shared across the orchestrator components."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServerStatus(str, Enum):
    """Connection states of an MCP server record."""

    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    ERROR = "ERROR"
    CONNECTING = "CONNECTING"


class SenderType(str, Enum):
    USER = "USER"
    AGENT = "AGENT"
    SYSTEM = "SYSTEM"


class ToolCallStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class TurnState(Enum):
    """Lifecycle of a single conversational turn."""

    IDLE = "IDLE"
    SENDING = "SENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ServerRecord:
    """A named MCP endpoint the orchestrator may route tool calls to."""

    id: str
    name: str
    url: str
    description: str
    status: ServerStatus = ServerStatus.CONNECTED
    tools_count: int = 0


@dataclass(slots=True)
class ToolCallRecord:
    """Display record of a tool call proposed by the model."""

    tool_name: str
    args: Dict[str, Any]
    status: ToolCallStatus = ToolCallStatus.PENDING
    result: Optional[str] = None


@dataclass(slots=True)
class ChatMessage:
    """Entry of a session's message log."""

    id: str
    text: str
    sender: SenderType
    timestamp: datetime = field(default_factory=utcnow)
    is_thinking: bool = False
    tool_calls: Optional[List[ToolCallRecord]] = None


@dataclass(frozen=True, slots=True)
class ToolCallInvocation:
    """Function call as emitted by the language model."""

    name: str
    args: Dict[str, Any]


@dataclass(frozen=True, slots=True)
class HistoryTurn:
    role: str
    text: str


@dataclass(slots=True)
class AgentReply:
    """Outcome of one call to the orchestration client."""

    text: str
    tool_calls: List[ToolCallInvocation] = field(default_factory=list)
    failed: bool = False

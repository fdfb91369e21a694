"""Conversation state: message log, single-flight turns and the session store."""
from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import replace
from typing import List, Optional

from nexus.core.models import (
    ChatMessage,
    HistoryTurn,
    SenderType,
    ToolCallRecord,
    ToolCallStatus,
    TurnState,
)
from nexus.orchestration.client import OrchestrationClient
from nexus.services.mcp import MCPRegistry

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Nexus Orchestrator online. I have access to your connected MCP servers. "
    "How can I assist you today?"
)

LOST_CONNECTION_TEXT = (
    "I lost connection to the orchestration layer. Please check your API key."
)


class ChatSession:
    """Message log for one conversation, bound to the shared registry and client.

    Only one turn may be in flight. ``submit`` checks for that and appends the
    placeholder without awaiting in between, so no lock is required.
    """

    def __init__(
        self,
        session_id: str,
        *,
        registry: MCPRegistry,
        client: OrchestrationClient,
    ) -> None:
        self.session_id = session_id
        self._registry = registry
        self._client = client
        self._messages: List[ChatMessage] = [
            ChatMessage(id="welcome", text=WELCOME_TEXT, sender=SenderType.AGENT)
        ]
        self.turn_state = TurnState.IDLE
        self.last_turn_state: Optional[TurnState] = None

    @property
    def is_busy(self) -> bool:
        return self.turn_state is TurnState.SENDING

    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def history(self) -> List[HistoryTurn]:
        """Prior turns in the role vocabulary of the model backend."""
        return [
            HistoryTurn(
                role="user" if message.sender is SenderType.USER else "assistant",
                text=message.text,
            )
            for message in self._messages
            if not message.is_thinking
        ]

    async def submit(self, text: str) -> Optional[ChatMessage]:
        """Run one conversational turn.

        Returns the finalized agent message, or ``None`` when the text is blank
        or another turn is still pending.
        """
        if not text.strip() or self.is_busy:
            return None

        history = self.history()
        user_message = ChatMessage(id=uuid.uuid4().hex, text=text, sender=SenderType.USER)
        placeholder = ChatMessage(
            id=uuid.uuid4().hex,
            text="",
            sender=SenderType.AGENT,
            is_thinking=True,
        )
        self._messages.extend([user_message, placeholder])
        self.turn_state = TurnState.SENDING

        try:
            final = await self._complete_turn(text, history, placeholder)
        except BaseException:
            # Cancellation included: the placeholder must never outlive its turn.
            self.turn_state = TurnState.FAILED
            self._replace(
                placeholder.id,
                replace(placeholder, text=LOST_CONNECTION_TEXT, is_thinking=False),
            )
            raise
        else:
            self._replace(placeholder.id, final)
        finally:
            logger.debug("Turn %s ended as %s", placeholder.id, self.turn_state.name)
            self.last_turn_state = self.turn_state
            self.turn_state = TurnState.IDLE
        return final

    async def _complete_turn(
        self,
        text: str,
        history: List[HistoryTurn],
        placeholder: ChatMessage,
    ) -> ChatMessage:
        try:
            reply = await self._client.converse(text, history, self._registry.list())
        except Exception:  # noqa: BLE001
            logger.exception("Turn failed in session %s", self.session_id)
            self.turn_state = TurnState.FAILED
            return replace(placeholder, text=LOST_CONNECTION_TEXT, is_thinking=False)

        tool_calls = [
            ToolCallRecord(tool_name=call.name, args=call.args, status=ToolCallStatus.SUCCESS)
            for call in reply.tool_calls
        ]
        self.turn_state = TurnState.FAILED if reply.failed else TurnState.COMPLETED
        return replace(
            placeholder,
            text=reply.text,
            is_thinking=False,
            tool_calls=tool_calls or None,
        )

    def _replace(self, message_id: str, message: ChatMessage) -> None:
        for index, existing in enumerate(self._messages):
            if existing.id == message_id:
                self._messages[index] = message
                return


class SessionStore:
    """Chat sessions keyed by session identifier.

    Holds at most ``max_sessions`` sessions; the least recently used idle
    session is evicted to make room for a new one.
    """

    def __init__(
        self,
        *,
        registry: MCPRegistry,
        client: OrchestrationClient,
        max_sessions: int = 1000,
    ) -> None:
        self._registry = registry
        self._client = client
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

    def get_or_create(self, session_id: str) -> ChatSession:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
            return session

        self._evict()
        session = ChatSession(session_id, registry=self._registry, client=self._client)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def _evict(self) -> None:
        idle = [sid for sid, session in self._sessions.items() if not session.is_busy]
        while len(self._sessions) >= self.max_sessions and idle:
            session_id = idle.pop(0)
            del self._sessions[session_id]
            logger.debug("Evicted idle session %s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)

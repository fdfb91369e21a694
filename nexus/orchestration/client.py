"""Client composing orchestrator requests to the hosted language model."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from nexus.core.errors import MalformedResponseError, MissingCredentialError
from nexus.core.models import AgentReply, HistoryTurn, ServerRecord, ServerStatus, ToolCallInvocation
from nexus.services.llm_pool import LLMPool

logger = logging.getLogger(__name__)

NO_SERVERS_TEXT = "No servers currently connected."

FALLBACK_TEXT = (
    "I encountered a critical error connecting to the neural core. "
    "Please check your API key and network connection."
)

MCP_TOOL_NAME = "execute_mcp_tool"

# Router function the model may call to reach a connected MCP server.
MCP_ROUTER_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": MCP_TOOL_NAME,
        "description": "Executes a specific tool on a connected MCP server.",
        "parameters": {
            "type": "object",
            "properties": {
                "serverName": {
                    "type": "string",
                    "description": "The name of the MCP server to route the request to.",
                },
                "toolName": {
                    "type": "string",
                    "description": "The specific tool function to call on the server.",
                },
                "arguments": {
                    "type": "string",
                    "description": "JSON stringified arguments for the tool.",
                },
            },
            "required": ["serverName", "toolName", "arguments"],
        },
    },
}

SYSTEM_PROMPT_TEMPLATE = """You are the Nexus Agentic Orchestrator.
You verify and coordinate tasks across multiple Model Context Protocol (MCP) servers.

Available Connected Servers:
{servers}

If a user request requires external data or actions, use the '{tool}' function.
If the request is general knowledge, answer directly.
Always match the tool usage to the most appropriate server description."""


def describe_servers(servers: Sequence[ServerRecord]) -> str:
    lines = [
        f"- {s.name} ({s.url}): {s.description}"
        for s in servers
        if s.status is ServerStatus.CONNECTED
    ]
    return "\n".join(lines) or NO_SERVERS_TEXT


def build_system_instruction(servers: Sequence[ServerRecord]) -> str:
    """Render the orchestrator preamble listing the connected servers."""
    return SYSTEM_PROMPT_TEMPLATE.format(servers=describe_servers(servers), tool=MCP_TOOL_NAME)


class OrchestrationClient:
    """Send a user prompt to the model and relay the reply and proposed tool calls.

    Tool calls are only reported back to the caller; nothing is dispatched to
    the MCP servers themselves.
    """

    def __init__(
        self,
        llm_pool: LLMPool,
        *,
        model_name: str,
        temperature: float = 0.7,
        request_timeout: Optional[float] = 60.0,
        include_history: bool = True,
    ) -> None:
        self._llm_pool = llm_pool
        self.model_name = model_name
        self.temperature = temperature
        self.request_timeout = request_timeout
        self.include_history = include_history

    def build_messages(
        self,
        prompt: str,
        history: Sequence[HistoryTurn],
        servers: Sequence[ServerRecord],
    ) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": build_system_instruction(servers)}]
        if self.include_history:
            messages.extend({"role": turn.role, "content": turn.text} for turn in history)
        messages.append({"role": "user", "content": prompt})
        return messages

    async def converse(
        self,
        prompt: str,
        history: Sequence[HistoryTurn],
        servers: Sequence[ServerRecord],
    ) -> AgentReply:
        """Produce the agent reply for one turn. Never raises."""
        try:
            if not self._llm_pool.is_registered(self.model_name):
                raise MissingCredentialError(self.model_name)
            return await self._request(self.build_messages(prompt, history, servers))
        except MissingCredentialError as exc:
            logger.warning("Orchestration skipped: %s", exc)
        except Exception:  # noqa: BLE001
            logger.exception("Language model request failed for %s", self.model_name)
        return AgentReply(text=FALLBACK_TEXT, failed=True)

    async def _request(self, messages: List[Dict[str, str]]) -> AgentReply:
        logger.debug("Sending %d messages to %s", len(messages), self.model_name)
        async with self._llm_pool.acquire(self.model_name) as client:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self.model_name,
                    messages=messages,
                    temperature=self.temperature,
                    tools=[MCP_ROUTER_TOOL],
                ),
                timeout=self.request_timeout,
            )
        return parse_response(response)


def parse_response(response: Any) -> AgentReply:
    """Extract the reply text and tool calls from a chat-completions response."""
    choices = getattr(response, "choices", None)
    if not choices:
        raise MalformedResponseError("Response contained no choices")
    message = getattr(choices[0], "message", None)
    if message is None:
        raise MalformedResponseError("Response choice carried no message")

    invocations = []
    for call in getattr(message, "tool_calls", None) or []:
        invocation = _parse_tool_call(call)
        if invocation is not None:
            invocations.append(invocation)

    return AgentReply(text=message.content or "", tool_calls=invocations)


def _parse_tool_call(call: Any) -> Optional[ToolCallInvocation]:
    function = getattr(call, "function", None)
    if function is None:
        return None
    try:
        args = json.loads(function.arguments or "{}")
    except (TypeError, ValueError):
        logger.warning("Dropping %s call with undecodable arguments", function.name)
        return None
    if not isinstance(args, dict):
        logger.warning("Dropping %s call whose arguments are not an object", function.name)
        return None
    return ToolCallInvocation(name=function.name, args=args)

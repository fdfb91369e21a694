"""Interactive terminal chat with the orchestrator and its MCP server panel."""
from __future__ import annotations

import asyncio
import json
import shlex

from nexus.config import configure_logging
from nexus.core.models import ChatMessage
from nexus.orchestration.session import ChatSession
from nexus.runtime import get_llm_pool, get_mcp_registry, get_orchestration_client
from nexus.services.mcp import MCPRegistry

HELP_TEXT = """Commands:
  /servers                        list MCP servers
  /add <name> <url> [description] register a server
  /remove <id>                    remove a server
  /toggle <id>                    connect or disconnect a server
  /quit                           leave
Anything else is sent to the orchestrator."""


def print_servers(registry: MCPRegistry) -> None:
    records = registry.list()
    if not records:
        print("No MCP servers registered.")
        return
    for record in records:
        print(f"[{record.status.value:<12}] {record.id}  {record.name}  {record.url}  ({record.tools_count} tools)")
        print(f"               {record.description}")


def print_reply(message: ChatMessage) -> None:
    print(f"nexus> {message.text}")
    for call in message.tool_calls or []:
        print(f"  -> {call.tool_name} [{call.status.value}] {json.dumps(call.args)}")


def handle_command(line: str, registry: MCPRegistry) -> bool:
    """Apply a slash command. Returns False when the user asked to quit."""
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        print(f"Could not parse command: {exc}")
        return True
    command, args = parts[0], parts[1:]

    if command == "/quit":
        return False
    if command == "/servers":
        print_servers(registry)
    elif command == "/add":
        if len(args) < 2:
            print("Usage: /add <name> <url> [description]")
            return True
        try:
            record = registry.add(args[0], args[1], " ".join(args[2:]))
        except ValueError as exc:
            print(exc)
        else:
            print(f"Added {record.name} as {record.id}")
    elif command == "/remove" and args:
        registry.remove(args[0])
    elif command == "/toggle" and args:
        record = registry.toggle_connection(args[0])
        print(f"{record.name} is {record.status.value}" if record else "Unknown server")
    else:
        print(HELP_TEXT)
    return True


async def main() -> None:
    registry = get_mcp_registry()
    session = ChatSession("terminal", registry=registry, client=get_orchestration_client())

    print_reply(session.messages()[0])
    print(HELP_TEXT)
    try:
        while True:
            line = (await asyncio.to_thread(input, "you> ")).strip()
            if not line:
                continue
            if line.startswith("/"):
                if not handle_command(line, registry):
                    break
                continue
            reply = await session.submit(line)
            if reply is not None:
                print_reply(reply)
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        await get_llm_pool().aclose()


def run() -> None:
    configure_logging("WARNING")
    asyncio.run(main())


if __name__ == "__main__":
    run()

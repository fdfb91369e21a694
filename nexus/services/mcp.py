"""In-memory registry of MCP server connection records."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from nexus.core.models import ServerRecord, ServerStatus

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Custom MCP Server"

# Mock servers shown when the service starts.
DEMO_SERVERS: tuple[ServerRecord, ...] = (
    ServerRecord(
        id="1",
        name="GitHub Integration",
        url="ws://github-mcp.internal:8080",
        description="Access repository files, issues, and PRs.",
        status=ServerStatus.CONNECTED,
        tools_count=12,
    ),
    ServerRecord(
        id="2",
        name="PostgreSQL Primary",
        url="postgres://db-prod.internal:5432",
        description="Read-only access to users and orders tables.",
        status=ServerStatus.DISCONNECTED,
        tools_count=5,
    ),
    ServerRecord(
        id="3",
        name="Linear Issues",
        url="https://api.linear.app/graphql",
        description="Create and update Linear tickets.",
        status=ServerStatus.CONNECTED,
        tools_count=8,
    ),
)

_TOGGLE = {
    ServerStatus.CONNECTED: ServerStatus.DISCONNECTED,
    ServerStatus.DISCONNECTED: ServerStatus.CONNECTED,
}


class MCPRegistry:
    """Registry maintaining MCP server records in insertion order."""

    def __init__(self) -> None:
        self._servers: Dict[str, ServerRecord] = {}

    @classmethod
    def seeded(cls, records: Iterable[ServerRecord] = DEMO_SERVERS) -> MCPRegistry:
        registry = cls()
        for record in records:
            registry._servers[record.id] = replace(record)
        return registry

    def add(self, name: str, url: str, description: str = "") -> ServerRecord:
        """Register a new server; it starts out connected with no known tools."""
        name = (name or "").strip()
        url = (url or "").strip()
        if not name:
            raise ValueError("Server name is required")
        if not url:
            raise ValueError("Server url is required")

        record = ServerRecord(
            id=str(uuid.uuid4()),
            name=name,
            url=url,
            description=(description or "").strip() or DEFAULT_DESCRIPTION,
            status=ServerStatus.CONNECTED,
            tools_count=0,
        )
        self._servers[record.id] = record
        logger.debug("Registered MCP server %s (%s)", record.name, record.id)
        return replace(record)

    def remove(self, server_id: str) -> None:
        if self._servers.pop(server_id, None) is not None:
            logger.debug("Removed MCP server %s", server_id)

    def toggle_connection(self, server_id: str) -> Optional[ServerRecord]:
        """Flip CONNECTED/DISCONNECTED. Records in any other state are left as is."""
        record = self._servers.get(server_id)
        if record is None:
            return None
        new_status = _TOGGLE.get(record.status)
        if new_status is not None:
            record.status = new_status
            logger.debug("MCP server %s is now %s", server_id, new_status.value)
        return replace(record)

    def get(self, server_id: str) -> Optional[ServerRecord]:
        record = self._servers.get(server_id)
        return replace(record) if record is not None else None

    def list(self) -> List[ServerRecord]:
        return [replace(s) for s in self._servers.values()]

    def connected(self) -> List[ServerRecord]:
        return [replace(s) for s in self._servers.values() if s.status is ServerStatus.CONNECTED]

    def __len__(self) -> int:
        return len(self._servers)

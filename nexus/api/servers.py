"""HTTP API exposing the MCP server registry."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from nexus.api.schemas import ServerCreateRequest, ServerResponse
from nexus.runtime import get_mcp_registry
from nexus.services.mcp import MCPRegistry

router = APIRouter(prefix="/servers", tags=["servers"])


@router.get("", response_model=List[ServerResponse])
async def list_servers(registry: MCPRegistry = Depends(get_mcp_registry)) -> List[ServerResponse]:
    return [ServerResponse.from_record(record) for record in registry.list()]


@router.post("", response_model=ServerResponse, status_code=status.HTTP_201_CREATED)
async def add_server(
    request: ServerCreateRequest,
    registry: MCPRegistry = Depends(get_mcp_registry),
) -> ServerResponse:
    try:
        record = registry.add(request.name, request.url, request.description)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ServerResponse.from_record(record)


@router.delete("/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_server(server_id: str, registry: MCPRegistry = Depends(get_mcp_registry)) -> None:
    registry.remove(server_id)


@router.post("/{server_id}/toggle", response_model=ServerResponse)
async def toggle_server(server_id: str, registry: MCPRegistry = Depends(get_mcp_registry)) -> ServerResponse:
    record = registry.toggle_connection(server_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown server")
    return ServerResponse.from_record(record)

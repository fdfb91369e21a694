"""Chat endpoint for natural language interaction with the orchestrator."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from nexus.api.schemas import ChatRequest, ChatResponse, MessageResponse
from nexus.orchestration.session import SessionStore
from nexus.runtime import get_session_store

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    store: SessionStore = Depends(get_session_store),
) -> ChatResponse:
    """Run one conversational turn in the requested session."""
    if not request.message.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is empty")

    session = store.get_or_create(request.session_id)
    reply = await session.submit(request.message)
    if reply is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A request is already in progress for this session",
        )

    return ChatResponse(session_id=session.session_id, reply=MessageResponse.from_message(reply))

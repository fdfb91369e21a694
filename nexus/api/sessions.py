"""Session-scoped API routes for the conversation log."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from nexus.api.schemas import MessageResponse
from nexus.orchestration.session import SessionStore
from nexus.runtime import get_session_store

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{session_id}/messages", response_model=List[MessageResponse])
async def list_session_messages(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> List[MessageResponse]:
    """Return the message log of a session."""
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown session")
    return [MessageResponse.from_message(message) for message in session.messages()]


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> None:
    """Forget a session and its message log."""
    store.drop(session_id)

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from fastapi import HTTPException

if TYPE_CHECKING:
    from app.services.chat import AgronomyChatSession

# Sessions live only as long as the process; nothing is written to disk.
_chat_sessions: Dict[str, "AgronomyChatSession"] = {}


async def save_chat_session(session: AgronomyChatSession) -> AgronomyChatSession:
    _chat_sessions[session.id] = session
    return session


async def get_chat_session_from_id(chat_id: str) -> AgronomyChatSession:
    session = _chat_sessions.get(chat_id)
    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"ChatSession {chat_id} not found - get_chat_session_from_id",
        )
    return session


async def get_chat_sessions() -> List[AgronomyChatSession]:
    return list(_chat_sessions.values())


async def remove_chat_session(chat_id: str) -> Optional[AgronomyChatSession]:
    session = _chat_sessions.pop(chat_id, None)
    if session is not None:
        session.discard()
    return session


async def delete_chat_session(chat_id: str) -> bool:
    session = await remove_chat_session(chat_id)
    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"ChatSession {chat_id} not found.",
        )
    return True

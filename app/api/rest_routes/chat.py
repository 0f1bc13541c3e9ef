from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from starlette.background import BackgroundTask

from app.collections.chat_session import (
    delete_chat_session,
    get_chat_session_from_id,
    get_chat_sessions,
)
from app.core.exceptions import ChatSessionBusyError, ChatSessionClosedError
from app.models.chat_session import ChatMessage, ChatSessionSummary
from app.models.language import Language
from app.services.chat import send_chat_message, switch_chat_session_language

router = APIRouter(prefix="/chats", tags=["Chat"])


class CreateChatRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    language: Language = Language.ENGLISH
    previous_chat_id: Optional[str] = Field(
        default=None,
        description="Session the client used before; reused only if its language matches.",
    )


class SendMessageRequest(BaseModel):
    text: str = Field(min_length=1)


@router.post("", response_model=ChatSessionSummary, status_code=status.HTTP_201_CREATED)
async def create_chat_session(request: CreateChatRequest):
    """
    Opens a chat session for the language. A previous session bound to a
    different language is discarded.
    """
    previous = None
    if request.previous_chat_id:
        try:
            previous = await get_chat_session_from_id(request.previous_chat_id)
        except HTTPException:
            previous = None
    session = await switch_chat_session_language(previous, request.language)
    return session.summary()


@router.get("", response_model=List[ChatSessionSummary])
async def get_active_chat_sessions():
    return [session.summary() for session in await get_chat_sessions()]


@router.get("/{chat_id}", response_model=ChatSessionSummary)
async def get_chat_session(chat_id: str):
    session = await get_chat_session_from_id(chat_id)
    return session.summary()


@router.get("/{chat_id}/messages", response_model=List[ChatMessage])
async def get_chat_messages(chat_id: str):
    """
    Get the transcript of a chat session, oldest first.
    """
    session = await get_chat_session_from_id(chat_id)
    return list(session.transcript)


@router.post("/{chat_id}/messages")
async def send_message(chat_id: str, request: SendMessageRequest):
    """
    Sends a message and streams the assistant's reply as plain text fragments.
    """
    session = await get_chat_session_from_id(chat_id)
    try:
        fragments = send_chat_message(session, request.text)
    except ChatSessionBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ChatSessionClosedError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    # Runs after the response ends, including on client disconnect.
    return StreamingResponse(
        fragments,
        media_type="text/plain; charset=utf-8",
        background=BackgroundTask(fragments.aclose),
    )


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_chat_session(chat_id: str):
    await delete_chat_session(chat_id=chat_id)
    return

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .language import Language


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(str, Enum):
    STREAMING = "streaming"  # Assistant reply still arriving
    COMPLETE = "complete"
    FAILED = "failed"  # Stream broke off, or the error notice itself


class ChatSessionState(str, Enum):
    CREATED = "created"
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    DISCARDED = "discarded"


class ChatMessage(BaseModel):
    """Immutable snapshot of one transcript entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role
    text: str = Field(default="")
    status: MessageStatus = Field(default=MessageStatus.COMPLETE)
    ts: float = Field(default_factory=lambda: datetime.now().timestamp())


class ChatSessionSummary(BaseModel):
    id: str
    language: Language
    state: ChatSessionState
    message_count: int
    ts: float

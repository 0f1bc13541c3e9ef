import logging
from datetime import datetime
from typing import AsyncGenerator, AsyncIterator, Optional, Tuple, Union
from uuid import uuid4

from langchain_core.messages import BaseMessage, HumanMessage

from app.collections.chat_session import remove_chat_session, save_chat_session
from app.core.config import settings
from app.core.exceptions import ChatSessionBusyError, ChatSessionClosedError
from app.core.genai_client import get_chat_model
from app.core.langchain_message_adapter import (
    build_system_messages,
    message_text,
    transcript_to_langchain,
)
from app.models.chat_session import (
    ChatMessage,
    ChatSessionState,
    ChatSessionSummary,
    MessageStatus,
    Role,
)
from app.models.language import Language
from app.prompts.agronomy_chat_system_prompt import AGRONOMY_CHAT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class AgronomyChatSession:
    """Conversation with the AgroGenius persona, bound to one language.

    The session owns its transcript. While a reply streams, the last assistant
    entry is replaced by a new immutable snapshot for every fragment; callers
    read snapshots through `transcript` and never mutate them.
    """

    def __init__(
        self,
        language: Language,
        *,
        system_prompt: str = AGRONOMY_CHAT_SYSTEM_PROMPT,
    ) -> None:
        self._id = uuid4().hex
        self._language = Language(language)
        self._system_prompt = system_prompt
        self._transcript: list[ChatMessage] = []
        self._ts = datetime.now().timestamp()
        self._state = ChatSessionState.CREATED

    @property
    def id(self) -> str:
        return self._id

    @property
    def language(self) -> Language:
        return self._language

    @property
    def state(self) -> ChatSessionState:
        return self._state

    @property
    def transcript(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._transcript)

    def summary(self) -> ChatSessionSummary:
        return ChatSessionSummary(
            id=self._id,
            language=self._language,
            state=self._state,
            message_count=len(self._transcript),
            ts=self._ts,
        )

    def discard(self) -> None:
        self._state = ChatSessionState.DISCARDED

    def send_message(self, text: str) -> "ReplyStream":
        """Sends a user message and returns the reply as text fragments.

        The user entry and an empty streaming assistant entry are recorded and
        the session enters AWAITING_REPLY immediately. Failures are reported
        in-band as a final fragment, never raised.
        """
        if self._state == ChatSessionState.DISCARDED:
            raise ChatSessionClosedError(f"Chat session {self._id} was discarded.")
        if self._state == ChatSessionState.AWAITING_REPLY:
            raise ChatSessionBusyError(
                f"Chat session {self._id} is still streaming a reply."
            )
        if not text or not text.strip():
            raise ValueError("Message text cannot be empty.")

        context = self._build_context(text)
        self._transcript.append(ChatMessage(role=Role.USER, text=text))
        self._transcript.append(
            ChatMessage(role=Role.ASSISTANT, status=MessageStatus.STREAMING)
        )
        self._state = ChatSessionState.AWAITING_REPLY
        index = len(self._transcript) - 1
        return ReplyStream(self, index, self._stream_reply(context, index))

    def _build_context(self, text: str) -> list[BaseMessage]:
        return (
            build_system_messages(
                system_prompt=self._system_prompt,
                language=self._language.for_prompt(),
            )
            + transcript_to_langchain(self._transcript)
            + [HumanMessage(content=text)]
        )

    def _update_reply(self, index: int, **update) -> None:
        self._transcript[index] = self._transcript[index].model_copy(update=update)

    def _release(self) -> None:
        # A session discarded mid-reply stays discarded.
        if self._state == ChatSessionState.AWAITING_REPLY:
            self._state = ChatSessionState.IDLE

    def _settle_reply(self, index: int) -> None:
        """Fails a reply that stopped before finishing and frees the session."""
        if self._transcript[index].status == MessageStatus.STREAMING:
            self._update_reply(index, status=MessageStatus.FAILED)
        self._release()

    async def _stream_reply(
        self, context: list[BaseMessage], index: int
    ) -> AsyncIterator[str]:
        reply = ""
        try:
            try:
                model = get_chat_model()
                async for chunk in model.astream(context):
                    fragment = message_text(chunk)
                    if not fragment:
                        continue
                    reply += fragment
                    self._update_reply(index, text=reply)
                    yield fragment
            except Exception as exc:
                logger.warning("Chat session %s reply failed: %s", self._id, exc)
                notice = settings.CHAT_ERROR_MESSAGE
                if reply:
                    notice = f"\n\n{notice}"
                reply += notice
                self._update_reply(index, text=reply, status=MessageStatus.FAILED)
                self._release()
                yield notice
                return

            self._update_reply(index, status=MessageStatus.COMPLETE)
            self._release()
        finally:
            self._settle_reply(index)


class ReplyStream:
    """Async iterator over the fragments of one assistant reply.

    Closing it before the reply ends, even before the first fragment, marks
    the reply failed and frees the session for the next message.
    """

    def __init__(
        self,
        session: AgronomyChatSession,
        index: int,
        fragments: AsyncGenerator[str, None],
    ) -> None:
        self._session = session
        self._index = index
        self._fragments = fragments

    def __aiter__(self) -> "ReplyStream":
        return self

    async def __anext__(self) -> str:
        return await self._fragments.__anext__()

    async def aclose(self) -> None:
        await self._fragments.aclose()
        self._session._settle_reply(self._index)


async def open_chat_session(language: Union[Language, str]) -> AgronomyChatSession:
    return await save_chat_session(AgronomyChatSession(Language(language)))


def send_chat_message(session: AgronomyChatSession, text: str) -> ReplyStream:
    return session.send_message(text)


async def switch_chat_session_language(
    session: Optional[AgronomyChatSession], language: Union[Language, str]
) -> AgronomyChatSession:
    """Returns a session bound to `language`.

    The given session is reused only if it is live and already bound to that
    language; otherwise it is discarded and a fresh session is opened.
    """
    language = Language(language)
    if (
        session is not None
        and session.language == language
        and session.state != ChatSessionState.DISCARDED
    ):
        return session

    if session is not None:
        session.discard()
        await remove_chat_session(session.id)
    return await open_chat_session(language)

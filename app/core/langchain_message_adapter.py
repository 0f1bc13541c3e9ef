from __future__ import annotations

from typing import Any, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate

from app.models.chat_session import ChatMessage, MessageStatus, Role


def build_system_messages(system_prompt: str, language: str) -> list[BaseMessage]:
    prompt = ChatPromptTemplate.from_messages(
        [
            (
                "system",
                "{system_prompt}\n\nUser specified language: {language}",
            )
        ]
    )
    return prompt.format_messages(
        system_prompt=system_prompt,
        language=language,
    )


def message_text(message: Any) -> str:
    """Text carried by an AI message or message chunk.

    Content may be a plain string or a list of content blocks; only text blocks
    are kept and joined without separators so streamed fragments concatenate
    back to the full reply.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        text_values = []
        for block in content:
            if isinstance(block, str):
                text_values.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                text_values.append(block.get("text") or "")
        return "".join(text_values)

    return ""


def chat_message_to_langchain(message: ChatMessage) -> BaseMessage:
    if message.role == Role.ASSISTANT:
        return AIMessage(content=message.text)
    return HumanMessage(content=message.text)


def transcript_to_langchain(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    """Converts a transcript into model context.

    Failed exchanges are left out: a failed assistant entry drops itself and the
    user message it was answering.
    """
    kept: list[ChatMessage] = []
    for message in messages:
        if message.role == Role.ASSISTANT and message.status != MessageStatus.COMPLETE:
            if kept and kept[-1].role == Role.USER:
                kept.pop()
            continue
        kept.append(message)
    return [chat_message_to_langchain(message) for message in kept]

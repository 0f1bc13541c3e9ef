# app/api/websocket/actions.py
import json
from uuid import uuid4

from pydantic import ValidationError

from app.core.exceptions import (
    ChatSessionBusyError,
    ChatSessionClosedError,
    ExtractionError,
)
from app.models.agronomic_input import AgronomicInput
from app.models.ai_workflow import WorkflowType
from app.models.language import Language
from app.services.ai_workflow_runtime import WorkflowRuntime
from app.services.chat import send_chat_message, switch_chat_session_language
from app.services.crop_prediction_service import recommend_crop

from .manager import ConnectionContext, manager


def _build_stream_emitter(connection_id: str):
    async def _emitter(payload: dict):
        await manager.send_to_connection(connection_id, json.dumps(payload, default=str))

    return _emitter


async def _send_error(
    context: ConnectionContext, action: str, status_code: int, message: str
) -> None:
    response = {
        "action": action,
        "error": {"status_code": status_code, "message": message},
    }
    await manager.send_to_connection(context.connection_id, json.dumps(response))


async def crop_recommendation_handler(context: ConnectionContext, data: dict):
    try:
        agronomic_input = AgronomicInput.model_validate(data.get("input") or {})
    except ValidationError as e:
        await _send_error(
            context,
            "crop_recommendation",
            422,
            f"All seven fields must be numbers: {e.error_count()} invalid.",
        )
        return

    try:
        await recommend_crop(
            agronomic_input,
            context.language,
            request_id=data.get("request_id", uuid4().hex),
            stream_emitter=_build_stream_emitter(context.connection_id),
        )
    except ExtractionError:
        await _send_error(
            context,
            "crop_recommendation",
            502,
            "Failed to get a crop suggestion. Please try again.",
        )


async def chat_message_handler(context: ConnectionContext, data: dict):
    session = context.chat_session
    if session is None:
        session = await switch_chat_session_language(None, context.language)
        context.chat_session = session

    try:
        fragments = send_chat_message(session, data.get("text", ""))
    except ChatSessionBusyError as e:
        await _send_error(context, "chat_message", 409, str(e))
        return
    except ChatSessionClosedError as e:
        await _send_error(context, "chat_message", 410, str(e))
        return
    except ValueError as e:
        await _send_error(context, "chat_message", 422, str(e))
        return

    workflow = WorkflowRuntime(
        action="chat_message",
        workflow_type=WorkflowType.AGRONOMY_CHAT,
        emitter=_build_stream_emitter(context.connection_id),
        request_id=data.get("request_id", uuid4().hex),
        chat_id=session.id,
        metadata={"language": session.language.value},
    )
    await workflow.start()
    try:
        async with workflow.step("stream_reply"):
            async for fragment in fragments:
                await workflow.emit_chunk("reply_fragment", {"text": fragment})
    finally:
        await fragments.aclose()

    reply = session.transcript[-1]
    await workflow.finish(
        reply.model_dump(mode="json"),
        {"chat_id": session.id, "status": reply.status.value},
    )


async def set_language_handler(context: ConnectionContext, data: dict):
    try:
        language = Language(data.get("language"))
    except ValueError:
        await _send_error(
            context,
            "set_language",
            422,
            f"Unsupported language: {data.get('language')}",
        )
        return

    context.chat_session = await switch_chat_session_language(
        context.chat_session, language
    )
    context.language = language
    response = {
        "action": "set_language",
        "data": context.chat_session.summary().model_dump(mode="json"),
    }
    await manager.send_to_connection(context.connection_id, json.dumps(response))


actions = {
    "crop_recommendation": crop_recommendation_handler,
    "chat_message": chat_message_handler,
    "set_language": set_language_handler,
}

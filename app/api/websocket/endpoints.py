# app/api/websocket/endpoints.py
import json
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.collections.chat_session import remove_chat_session
from app.models.language import Language
from app.services.chat import open_chat_session

from .actions import actions
from .manager import ConnectionContext, manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, language: str = Query("en")):
    try:
        bound_language = Language(language)
    except ValueError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    connection_id = await manager.connect(websocket)
    context = ConnectionContext(connection_id=connection_id, language=bound_language)
    context.chat_session = await open_chat_session(bound_language)

    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                message = json.loads(raw_data)
                action = message.get("action")
                data = message.get("data", {})
                if action in actions:
                    await actions[action](context, data)
                else:
                    await websocket.send_text(f"Unknown action: {action}")
            except json.JSONDecodeError:
                await websocket.send_text("Invalid JSON")
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket connection %s failed", connection_id)
    finally:
        manager.disconnect(connection_id)
        if context.chat_session is not None:
            await remove_chat_session(context.chat_session.id)

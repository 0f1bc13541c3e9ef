# app/api/websocket/manager.py
from typing import TYPE_CHECKING, Dict, Optional
from uuid import uuid4

from fastapi import WebSocket

from app.models.language import Language

if TYPE_CHECKING:
    from app.services.chat import AgronomyChatSession


class ConnectionContext:
    """Per-connection state: the bound language and the chat session it owns."""

    def __init__(self, connection_id: str, language: Language) -> None:
        self.connection_id = connection_id
        self.language = language
        self.chat_session: Optional["AgronomyChatSession"] = None


class ConnectionManager:
    def __init__(self) -> None:
        self.active_connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = uuid4().hex
        self.active_connections[connection_id] = websocket
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        self.active_connections.pop(connection_id, None)

    async def send_to_connection(self, connection_id: str, message: str) -> None:
        connection = self.active_connections.get(connection_id)
        if connection is not None:
            await connection.send_text(message)


manager = ConnectionManager()

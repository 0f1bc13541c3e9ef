from operator import itemgetter
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, BaseMessage
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.outputs import ChatGeneration, ChatGenerationChunk, ChatResult
from langchain_core.runnables import RunnableMap, RunnablePassthrough
from pydantic import Field

from app.collections import chat_session as chat_session_collection

VALID_PREDICTION = {
    "cropName": "Rice",
    "reasoning": "High humidity and heavy rainfall suit paddy cultivation.",
    "predictedYield": "4000",
    "estimatedProfit": "1200",
    "cropDescription": "A staple grain grown in flooded fields.",
}

FARM_INPUT = {
    "N": "90",
    "P": "42",
    "K": "43",
    "temperature": "20.8",
    "humidity": "82",
    "ph": "6.5",
    "rainfall": "202",
}


class FakeChatModel(BaseChatModel):
    """Chat model that replays queued responses.

    A queued response is a string, an exception to raise, or a list of stream
    fragments where an exception entry breaks the stream at that point.
    """

    responses: List[Any] = Field(default_factory=list)
    calls: List[List[BaseMessage]] = Field(default_factory=list)
    structured_outputs: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def _llm_type(self) -> str:
        return "fake-chat"

    def with_structured_output(self, schema, *, include_raw=False, **kwargs):
        # Same composition ChatGoogleGenerativeAI uses for method="json_schema".
        self.structured_outputs.append(
            {"schema": schema, "include_raw": include_raw, **kwargs}
        )
        parser = PydanticOutputParser(pydantic_object=schema)
        if not include_raw:
            return self | parser
        parser_with_fallback = RunnablePassthrough.assign(
            parsed=itemgetter("raw") | parser, parsing_error=lambda _: None
        ).with_fallbacks(
            [RunnablePassthrough.assign(parsed=lambda _: None)],
            exception_key="parsing_error",
        )
        return RunnableMap(raw=self) | parser_with_fallback

    def _next_response(self, messages: List[BaseMessage]) -> Any:
        self.calls.append(list(messages))
        if not self.responses:
            raise AssertionError("FakeChatModel has no queued response")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        response = self._next_response(messages)
        if isinstance(response, list):
            response = "".join(response)
        return ChatResult(generations=[ChatGeneration(message=AIMessage(content=response))])

    async def _agenerate(self, messages, stop=None, run_manager=None, **kwargs):
        return self._generate(messages, stop=stop, **kwargs)

    async def _astream(self, messages, stop=None, run_manager=None, **kwargs):
        response = self._next_response(messages)
        fragments = response if isinstance(response, list) else [response]
        for fragment in fragments:
            if isinstance(fragment, BaseException):
                raise fragment
            yield ChatGenerationChunk(message=AIMessageChunk(content=fragment))


class ChatModelFactory:
    """Stands in for `get_chat_model`, recording the kwargs of each call."""

    def __init__(self, model: FakeChatModel) -> None:
        self.model = model
        self.kwargs: List[Dict[str, Any]] = []

    def __call__(self, model: Any = None, **kwargs: Any) -> FakeChatModel:
        self.kwargs.append(kwargs)
        return self.model


class FakeImageModels:
    def __init__(self) -> None:
        self.response: Any = None
        self.error: BaseException | None = None
        self.calls: List[Dict[str, Any]] = []

    async def generate_images(self, *, model, prompt, config):
        self.calls.append({"model": model, "prompt": prompt, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


def image_response(*payloads: bytes) -> SimpleNamespace:
    return SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=payload))
            for payload in payloads
        ]
    )


@pytest.fixture(autouse=True)
def clear_chat_sessions():
    chat_session_collection._chat_sessions.clear()
    yield
    chat_session_collection._chat_sessions.clear()


@pytest.fixture
def chat_model_factory(monkeypatch) -> ChatModelFactory:
    factory = ChatModelFactory(FakeChatModel())
    monkeypatch.setattr("app.services.structured_request.get_chat_model", factory)
    monkeypatch.setattr("app.services.chat.get_chat_model", factory)
    return factory


@pytest.fixture
def fake_chat_model(chat_model_factory) -> FakeChatModel:
    return chat_model_factory.model


@pytest.fixture
def fake_image_models(monkeypatch) -> FakeImageModels:
    models = FakeImageModels()
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    monkeypatch.setattr(
        "app.services.crop_image_service.get_image_client", lambda: client
    )
    return models

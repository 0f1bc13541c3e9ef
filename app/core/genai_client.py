from typing import Optional

from google.genai.client import Client
from langchain_google_genai import (
    ChatGoogleGenerativeAI,
    HarmBlockThreshold,
    HarmCategory,
)

from .config import settings

_image_client: Optional[Client] = None

DEFAULT_SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


def get_chat_model(model: Optional[str] = None, **kwargs) -> ChatGoogleGenerativeAI:
    """Gemini chat model with the service credentials and safety settings."""
    if "google_api_key" not in kwargs and "api_key" not in kwargs:
        kwargs["google_api_key"] = settings.GEMINI_API_KEY
    kwargs.setdefault("safety_settings", DEFAULT_SAFETY_SETTINGS)
    return ChatGoogleGenerativeAI(model=model or settings.GEMINI_TEXT_MODEL, **kwargs)


def get_image_client() -> Client:
    """Shared google-genai client for Imagen calls, created on first use."""
    global _image_client
    if _image_client is None:
        _image_client = Client(api_key=settings.GEMINI_API_KEY)
    return _image_client

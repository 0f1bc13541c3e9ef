import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_TEXT_MODEL: str = "gemini-2.5-flash"
    GEMINI_IMAGE_MODEL: str = "imagen-4.0-generate-001"
    FALLBACK_IMAGE_BASE_URL: str = "https://picsum.photos/seed"
    CHAT_ERROR_MESSAGE: str = "Sorry, I encountered an error. Please try again."
    LOG_LEVEL: str = "INFO"


settings = Settings()

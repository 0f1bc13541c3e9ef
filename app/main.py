import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from app.api.rest_routes.chat import router as chat_router
from app.api.rest_routes.crop_prediction import router as crop_prediction_router
from app.api.rest_routes.regional_resources import (
    router as regional_resources_router,
)
from app.api.rest_routes.voice_input import router as voice_input_router
from app.api.rest_routes.weather import router as weather_router
from app.api.websocket.endpoints import router as websocket_router
from app.core.config import settings

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="AgroGenius AI")

app.include_router(websocket_router, tags=["websocket"])
app.include_router(crop_prediction_router)
app.include_router(weather_router)
app.include_router(voice_input_router)
app.include_router(regional_resources_router)
app.include_router(chat_router)


@app.get("/")
async def root():
    return {"message": "Welcome to AgroGenius AI!"}

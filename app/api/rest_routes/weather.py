from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import ExtractionError
from app.models.language import Language
from app.models.location import GeoCoordinate
from app.models.weather import WeatherFields
from app.services.weather_service import request_weather

router = APIRouter(prefix="/weather", tags=["Weather"])


class WeatherRequest(GeoCoordinate):
    language: Language = Language.ENGLISH


@router.post("", response_model=WeatherFields)
async def get_weather_fields(request: WeatherRequest):
    """
    Get temperature, humidity and rainfall for a location, ready to pre-fill
    the crop form.
    """
    coordinate = GeoCoordinate(latitude=request.latitude, longitude=request.longitude)
    try:
        return await request_weather(coordinate, request.language)
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Weather data is unavailable right now. Please enter the values manually.",
        )

from typing import Union

from app.models.language import Language
from app.models.location import GeoCoordinate
from app.models.weather import WeatherFields
from app.prompts.weather_extraction_system_prompt import (
    WEATHER_EXTRACTION_SYSTEM_PROMPT,
)
from app.services.structured_request import request_structured_output


async def request_weather(
    coordinate: GeoCoordinate, language: Union[Language, str]
) -> WeatherFields:
    """
    Asks the model for the current weather at a location.

    Args:
        coordinate: Latitude/longitude of the farm.
        language: Language threaded into the system instruction.

    Returns:
        Temperature, humidity and rainfall as unit-free numeric strings.
        Rainfall is "0" when no rain is expected.

    Raises:
        ExtractionError: If the call fails or the response is malformed. The
        caller keeps any previously entered form values.
    """
    prompt = (
        f"Coordinates: latitude={coordinate.latitude}, "
        f"longitude={coordinate.longitude}."
    )
    return await request_structured_output(
        prompt_text=prompt,
        system_instruction=WEATHER_EXTRACTION_SYSTEM_PROMPT,
        output_schema=WeatherFields,
        language=language,
    )

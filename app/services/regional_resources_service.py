from typing import Union

from app.models.language import Language
from app.models.location import GeoCoordinate
from app.models.regional_resources import SubsidiesAndMarkets
from app.prompts.regional_resources_system_prompt import (
    REGIONAL_RESOURCES_SYSTEM_PROMPT,
)
from app.services.structured_request import request_structured_output


async def request_regional_resources(
    coordinate: GeoCoordinate, language: Union[Language, str]
) -> SubsidiesAndMarkets:
    prompt = (
        f"My location is: latitude={coordinate.latitude}, "
        f"longitude={coordinate.longitude}. "
        "Provide a list of subsidies and nearby markets."
    )
    return await request_structured_output(
        prompt_text=prompt,
        system_instruction=REGIONAL_RESOURCES_SYSTEM_PROMPT,
        output_schema=SubsidiesAndMarkets,
        language=language,
    )

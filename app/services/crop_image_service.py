import base64
import logging
from urllib.parse import quote

from google.genai import types

from app.core.config import settings
from app.core.exceptions import ExtractionError, ExtractionErrorKind
from app.core.genai_client import get_image_client
from app.prompts.crop_image_prompt import CROP_IMAGE_PROMPT

logger = logging.getLogger(__name__)

FALLBACK_IMAGE_WIDTH = 1200
FALLBACK_IMAGE_HEIGHT = 675

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def fallback_crop_image_url(crop_name: str) -> str:
    """Stable placeholder image URL for a crop; same name, same URL."""
    seed = quote(crop_name, safe=_URI_COMPONENT_SAFE)
    base_url = settings.FALLBACK_IMAGE_BASE_URL.rstrip("/")
    return f"{base_url}/{seed}/{FALLBACK_IMAGE_WIDTH}/{FALLBACK_IMAGE_HEIGHT}"


async def _generate_crop_image(crop_name: str) -> str:
    response = await get_image_client().aio.models.generate_images(
        model=settings.GEMINI_IMAGE_MODEL,
        prompt=CROP_IMAGE_PROMPT.format(crop_name=crop_name),
        config=types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type="image/jpeg",
            aspect_ratio="16:9",
        ),
    )

    generated_images = response.generated_images or []
    image_bytes = None
    if generated_images and generated_images[0].image is not None:
        image_bytes = generated_images[0].image.image_bytes
    if not image_bytes:
        raise ExtractionError(
            "No image was generated.",
            kind=ExtractionErrorKind.NO_RESULT_AVAILABLE,
        )

    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


async def request_crop_image(crop_name: str) -> str:
    """Returns a displayable image reference for the crop.

    Never raises: any generation failure falls back to the placeholder URL.
    """
    try:
        return await _generate_crop_image(crop_name)
    except Exception as exc:
        logger.warning(
            "Crop image generation failed for '%s', using placeholder: %s",
            crop_name,
            exc,
        )
        return fallback_crop_image_url(crop_name)

import pytest

from app.core.config import settings
from app.core.exceptions import ExtractionError, ExtractionErrorKind
from app.services.crop_image_service import (
    _generate_crop_image,
    fallback_crop_image_url,
    request_crop_image,
)

from conftest import image_response


def test_fallback_url_is_deterministic_and_encoded(monkeypatch):
    monkeypatch.setattr(settings, "FALLBACK_IMAGE_BASE_URL", "https://picsum.photos/seed")

    first = fallback_crop_image_url("Pigeon Pea")

    assert first == fallback_crop_image_url("Pigeon Pea")
    assert first == "https://picsum.photos/seed/Pigeon%20Pea/1200/675"


def test_fallback_url_encodes_reserved_characters():
    url = fallback_crop_image_url("Rice/Paddy & Wheat")

    assert url.endswith("/Rice%2FPaddy%20%26%20Wheat/1200/675")


async def test_generated_image_becomes_data_uri(fake_image_models):
    fake_image_models.response = image_response(b"\xff\xd8\xff")

    image = await request_crop_image("Maize")

    assert image == "data:image/jpeg;base64,/9j/"
    call = fake_image_models.calls[0]
    assert call["model"] == settings.GEMINI_IMAGE_MODEL
    assert "Maize" in call["prompt"]
    assert call["config"].number_of_images == 1
    assert call["config"].aspect_ratio == "16:9"


async def test_zero_images_is_no_result(fake_image_models):
    fake_image_models.response = image_response()

    with pytest.raises(ExtractionError) as exc_info:
        await _generate_crop_image("Maize")

    assert exc_info.value.kind == ExtractionErrorKind.NO_RESULT_AVAILABLE


@pytest.mark.parametrize(
    "configure",
    [
        lambda models: setattr(models, "error", RuntimeError("service down")),
        lambda models: setattr(models, "response", image_response()),
        lambda models: setattr(models, "response", image_response(b"")),
    ],
)
async def test_failures_resolve_to_same_fallback(fake_image_models, configure):
    configure(fake_image_models)

    first = await request_crop_image("Cotton")
    second = await request_crop_image("Cotton")

    assert first == second == fallback_crop_image_url("Cotton")

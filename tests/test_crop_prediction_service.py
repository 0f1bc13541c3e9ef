import json

import pytest

from app.core.exceptions import ExtractionError, ExtractionErrorKind
from app.models.agronomic_input import AgronomicInput
from app.models.language import Language
from app.prompts.crop_prediction_system_prompt import CROP_PREDICTION_SYSTEM_PROMPT
from app.services.crop_image_service import fallback_crop_image_url
from app.services.crop_prediction_service import (
    build_crop_prediction_prompt,
    recommend_crop,
    request_crop_prediction,
)

from conftest import FARM_INPUT, VALID_PREDICTION, image_response

FARM_JSON = (
    '{"N":"90","P":"42","K":"43","temperature":"20.8",'
    '"humidity":"82","ph":"6.5","rainfall":"202"}'
)


def test_prompt_embeds_serialized_farm_data():
    prompt = build_crop_prediction_prompt(AgronomicInput.model_validate(FARM_INPUT))

    assert prompt == (
        f"Here is the farm data: {FARM_JSON}. Provide a crop suggestion."
    )


async def test_prediction_calls_model_once_with_farm_data(fake_chat_model):
    fake_chat_model.responses = [json.dumps(VALID_PREDICTION)]

    prediction = await request_crop_prediction(
        AgronomicInput.model_validate(FARM_INPUT), Language.ENGLISH
    )

    assert prediction.crop_name == "Rice"
    assert prediction.estimated_profit == "1200"
    assert len(fake_chat_model.calls) == 1
    system, human = fake_chat_model.calls[0]
    assert system.content.startswith(CROP_PREDICTION_SYSTEM_PROMPT)
    assert FARM_JSON in human.content


async def test_prediction_missing_field_raises(fake_chat_model):
    incomplete = dict(VALID_PREDICTION)
    del incomplete["estimatedProfit"]
    fake_chat_model.responses = [json.dumps(incomplete)]

    with pytest.raises(ExtractionError) as exc_info:
        await request_crop_prediction(
            AgronomicInput.model_validate(FARM_INPUT), Language.ENGLISH
        )

    assert exc_info.value.kind == ExtractionErrorKind.SCHEMA_VIOLATION


async def test_recommendation_attaches_generated_image(fake_chat_model, fake_image_models):
    fake_chat_model.responses = [json.dumps(VALID_PREDICTION)]
    fake_image_models.response = image_response(b"jpeg-bytes")
    events = []

    async def emitter(payload):
        events.append(payload)

    result = await recommend_crop(
        AgronomicInput.model_validate(FARM_INPUT),
        Language.ENGLISH,
        request_id="req-1",
        stream_emitter=emitter,
    )

    assert result.crop_name == "Rice"
    assert result.crop_image == "data:image/jpeg;base64,anBlZy1ieXRlcw=="
    assert "Rice" in fake_image_models.calls[0]["prompt"]
    assert [event["event"] for event in events] == [
        "workflow_started",
        "step_started",
        "chunk",
        "step_completed",
        "step_started",
        "step_completed",
        "result",
        "workflow_completed",
    ]
    assert events[-2]["data"]["cropImage"] == result.crop_image
    assert events[-1]["workflow_status"] == "completed"


async def test_recommendation_falls_back_when_image_fails(
    fake_chat_model, fake_image_models
):
    fake_chat_model.responses = [json.dumps(VALID_PREDICTION)]
    fake_image_models.error = RuntimeError("quota exceeded")

    result = await recommend_crop(
        AgronomicInput.model_validate(FARM_INPUT), Language.ENGLISH
    )

    assert result.crop_image == fallback_crop_image_url("Rice")


async def test_recommendation_failure_emits_workflow_failed(
    fake_chat_model, fake_image_models
):
    fake_chat_model.responses = ["not json"]
    events = []

    async def emitter(payload):
        events.append(payload)

    with pytest.raises(ExtractionError):
        await recommend_crop(
            AgronomicInput.model_validate(FARM_INPUT),
            Language.ENGLISH,
            stream_emitter=emitter,
        )

    assert events[-1]["event"] == "workflow_failed"
    assert events[-1]["step"] == "predict_crop"
    assert events[-1]["data"]["kind"] == "schema_violation"
    assert fake_image_models.calls == []

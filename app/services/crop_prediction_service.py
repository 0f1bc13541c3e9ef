import json
from typing import Optional, Union

from app.models.agronomic_input import AgronomicInput
from app.models.ai_workflow import WorkflowType
from app.models.crop_prediction import CropPrediction, PredictionResult
from app.models.language import Language
from app.prompts.crop_prediction_system_prompt import CROP_PREDICTION_SYSTEM_PROMPT
from app.services.ai_workflow_runtime import StreamEmitter, WorkflowRuntime
from app.services.crop_image_service import request_crop_image
from app.services.structured_request import request_structured_output


def build_crop_prediction_prompt(agronomic_input: AgronomicInput) -> str:
    farm_data = json.dumps(
        agronomic_input.model_dump(mode="json"), separators=(",", ":")
    )
    return f"Here is the farm data: {farm_data}. Provide a crop suggestion."


async def request_crop_prediction(
    agronomic_input: AgronomicInput, language: Union[Language, str]
) -> CropPrediction:
    return await request_structured_output(
        prompt_text=build_crop_prediction_prompt(agronomic_input),
        system_instruction=CROP_PREDICTION_SYSTEM_PROMPT,
        output_schema=CropPrediction,
        language=language,
    )


async def recommend_crop(
    agronomic_input: AgronomicInput,
    language: Union[Language, str],
    *,
    request_id: Optional[str] = None,
    stream_emitter: Optional[StreamEmitter] = None,
) -> PredictionResult:
    """Predicts a crop, then attaches an image generated for the returned name.

    Prediction failures propagate as ExtractionError; the image step always
    resolves to some image reference.
    """
    workflow = WorkflowRuntime(
        action="crop_recommendation",
        workflow_type=WorkflowType.CROP_RECOMMENDATION,
        emitter=stream_emitter,
        request_id=request_id,
        metadata={"language": getattr(language, "value", language)},
    )
    await workflow.start()

    async with workflow.step("predict_crop"):
        prediction = await request_crop_prediction(agronomic_input, language)
        await workflow.emit_chunk(
            "crop_prediction", prediction.model_dump(mode="json", by_alias=True)
        )

    async with workflow.step("generate_crop_image"):
        crop_image = await request_crop_image(prediction.crop_name)

    result = PredictionResult(**prediction.model_dump(), crop_image=crop_image)
    await workflow.finish(
        result.model_dump(mode="json", by_alias=True),
        {"crop_name": result.crop_name},
    )
    return result

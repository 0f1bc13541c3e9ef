from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.exceptions import ExtractionError
from app.models.agronomic_input import AgronomicInput
from app.models.crop_prediction import CropPrediction, PredictionResult
from app.models.language import Language
from app.services.crop_image_service import request_crop_image
from app.services.crop_prediction_service import (
    recommend_crop,
    request_crop_prediction,
)

router = APIRouter(tags=["Crop Prediction"])

CROP_PREDICTION_ERROR = "Failed to get a crop suggestion. Please try again."


class CropPredictionRequest(BaseModel):
    language: Language = Language.ENGLISH
    input: AgronomicInput


class CropImageRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    crop_name: str = Field(min_length=1)


class CropImageResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    crop_image: str


@router.post("/crop-prediction", response_model=CropPrediction)
async def predict_crop(request: CropPredictionRequest):
    """
    Suggests a crop for the submitted soil and climate readings.
    """
    try:
        return await request_crop_prediction(request.input, request.language)
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=CROP_PREDICTION_ERROR,
        )


@router.post("/crop-prediction/recommendation", response_model=PredictionResult)
async def recommend_crop_with_image(request: CropPredictionRequest):
    """
    Suggests a crop and attaches an image of it.
    """
    try:
        return await recommend_crop(request.input, request.language)
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=CROP_PREDICTION_ERROR,
        )


@router.post("/crop-image", response_model=CropImageResponse)
async def get_crop_image(request: CropImageRequest):
    return CropImageResponse(crop_image=await request_crop_image(request.crop_name))

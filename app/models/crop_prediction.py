from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CropPrediction(BaseModel):
    """Crop suggestion produced by the model for one set of agronomic inputs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    crop_name: str = Field(description="The common name of the suggested crop.")
    reasoning: str = Field(
        description="A brief explanation for why this crop is suitable."
    )
    predicted_yield: str = Field(
        description="The estimated yield in kilograms per hectare (kg/ha)."
    )
    estimated_profit: str = Field(
        description="A rough estimate of the potential profit in USD per hectare."
    )
    crop_description: str = Field(
        description="A short, engaging description of the crop."
    )


class PredictionResult(CropPrediction):
    crop_image: str = Field(
        description="Inline data URI of a generated image or a placeholder URL."
    )

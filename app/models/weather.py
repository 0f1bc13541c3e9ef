from typing import Any

from pydantic import BaseModel, Field, field_validator

from .agronomic_input import coerce_decimal_string, require_number


class WeatherFields(BaseModel):
    """Current weather for a location, as unit-free numeric strings."""

    temperature: str = Field(
        description="Current temperature in Celsius (number only)."
    )
    humidity: str = Field(description="Current humidity percentage (number only).")
    rainfall: str = Field(
        description=(
            "Today's predicted rainfall in mm (number only). "
            "If no rainfall is expected, this should be '0'."
        )
    )

    @field_validator("temperature", "humidity", "rainfall", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return coerce_decimal_string(value)

    @field_validator("rainfall", mode="before")
    @classmethod
    def _no_rain_is_zero(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "0"
        return value

    @field_validator("temperature", "humidity", "rainfall")
    @classmethod
    def _check_number(cls, value: str) -> str:
        return require_number(value)

import math
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

AGRONOMIC_FIELDS = ("N", "P", "K", "temperature", "humidity", "ph", "rainfall")


def coerce_decimal_string(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def require_number(value: str) -> str:
    try:
        number = float(value)
    except ValueError as exc:
        raise ValueError(f"'{value}' is not a number") from exc
    if not math.isfinite(number):
        raise ValueError(f"'{value}' is not a finite number")
    return value


class AgronomicInput(BaseModel):
    """Soil and climate readings submitted for a crop prediction.

    Values stay decimal strings exactly as entered, spoken or looked up; they
    are only checked to be parseable numbers.
    """

    N: str = Field(description="Nitrogen content of the soil")
    P: str = Field(description="Phosphorus content of the soil")
    K: str = Field(description="Potassium content of the soil")
    temperature: str = Field(description="Temperature in Celsius")
    humidity: str = Field(description="Relative humidity in percent")
    ph: str = Field(description="Soil pH")
    rainfall: str = Field(description="Rainfall in mm")

    @field_validator(*AGRONOMIC_FIELDS, mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return coerce_decimal_string(value)

    @field_validator(*AGRONOMIC_FIELDS)
    @classmethod
    def _check_number(cls, value: str) -> str:
        return require_number(value)


class PartialAgronomicInput(BaseModel):
    """Subset of the agronomic fields, as extracted from a voice transcript."""

    N: Optional[str] = Field(default=None, description="Nitrogen (N) value")
    P: Optional[str] = Field(default=None, description="Phosphorus (P) value")
    K: Optional[str] = Field(default=None, description="Potassium (K) value")
    temperature: Optional[str] = Field(
        default=None, description="Temperature in Celsius, number only"
    )
    humidity: Optional[str] = Field(
        default=None, description="Humidity percentage, number only"
    )
    ph: Optional[str] = Field(default=None, description="Soil pH, number only")
    rainfall: Optional[str] = Field(
        default=None, description="Rainfall in mm, number only"
    )

    @field_validator(*AGRONOMIC_FIELDS, mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        value = coerce_decimal_string(value)
        # A blank value is the same as an omitted one.
        if value == "":
            return None
        return value

    @field_validator(*AGRONOMIC_FIELDS)
    @classmethod
    def _check_number(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return require_number(value)

    def mentioned_fields(self) -> Dict[str, str]:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


def merge_agronomic_fields(
    current: Mapping[str, str], extracted: Mapping[str, str]
) -> Dict[str, str]:
    """Overlays extracted values onto existing form state.

    Fields the extraction did not mention keep their current value.
    """
    merged = dict(current)
    for key, value in extracted.items():
        if key in AGRONOMIC_FIELDS and value:
            merged[key] = value
    return merged

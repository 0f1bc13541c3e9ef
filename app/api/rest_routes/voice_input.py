from typing import Dict

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from app.core.exceptions import ExtractionError
from app.models.agronomic_input import merge_agronomic_fields
from app.models.language import Language
from app.services.voice_input_service import extract_fields_from_speech

router = APIRouter(prefix="/voice-input", tags=["Voice Input"])


class VoiceInputRequest(BaseModel):
    language: Language = Language.ENGLISH
    transcript: str = Field(min_length=1)
    current: Dict[str, str] = Field(
        default_factory=dict,
        description="Form values before this transcript; unmentioned fields are kept.",
    )


class VoiceInputResponse(BaseModel):
    extracted: Dict[str, str]
    merged: Dict[str, str]


@router.post("", response_model=VoiceInputResponse)
async def parse_voice_input(request: VoiceInputRequest):
    try:
        extracted = await extract_fields_from_speech(
            request.transcript, request.language
        )
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not understand the voice input. Please try again.",
        )
    return VoiceInputResponse(
        extracted=extracted,
        merged=merge_agronomic_fields(request.current, extracted),
    )

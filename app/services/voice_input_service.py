from typing import Dict, Union

from app.models.agronomic_input import PartialAgronomicInput
from app.models.language import Language
from app.prompts.voice_input_system_prompt import VOICE_INPUT_SYSTEM_PROMPT
from app.services.structured_request import request_structured_output


async def extract_fields_from_speech(
    transcript: str, language: Union[Language, str]
) -> Dict[str, str]:
    """Extracts the agronomic values mentioned in a speech transcript.

    The result holds only the keys the model returned; callers merge it into
    their form state with `merge_agronomic_fields`.
    """
    # Every field of PartialAgronomicInput is optional, so a reply that omits
    # unmentioned fields is valid.
    extracted = await request_structured_output(
        prompt_text=f'Transcript: "{transcript}"',
        system_instruction=VOICE_INPUT_SYSTEM_PROMPT,
        output_schema=PartialAgronomicInput,
        language=language,
    )
    return extracted.mentioned_fields()

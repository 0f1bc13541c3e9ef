import logging
from typing import Type, TypeVar, Union

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel

from app.core.exceptions import ExtractionError, ExtractionErrorKind
from app.core.genai_client import get_chat_model
from app.models.language import Language

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def language_label(language: Union[Language, str]) -> str:
    try:
        return Language(language).for_prompt()
    except ValueError:
        return str(language)


def _build_structured_chain(output_schema: Type[BaseModel]):
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", "{system_prompt}\n\nUser specified language: {language}"),
            ("human", "{input_text}"),
        ]
    )
    model = get_chat_model().with_structured_output(
        output_schema, method="json_schema", include_raw=True
    )
    return prompt | model


async def request_structured_output(
    prompt_text: str,
    system_instruction: str,
    output_schema: Type[T],
    language: Union[Language, str],
) -> T:
    """Issues one JSON-mode request to the model and parses the result.

    The response schema is derived from `output_schema`, so fields that are
    optional there may be omitted by the model. Nothing is retried or cached.

    Raises:
        ExtractionError: TRANSPORT_FAILURE if the call itself fails,
        SCHEMA_VIOLATION if the reply is not a JSON object matching
        `output_schema`.
    """
    try:
        chain = _build_structured_chain(output_schema)
        response = await chain.ainvoke(
            {
                "system_prompt": system_instruction,
                "language": language_label(language),
                "input_text": prompt_text,
            }
        )
    except Exception as exc:
        logger.warning(
            "Structured request for %s failed: %s", output_schema.__name__, exc
        )
        raise ExtractionError(
            "The AI service is unavailable. Please try again.",
            kind=ExtractionErrorKind.TRANSPORT_FAILURE,
            cause=exc,
        ) from exc

    parsing_error = response.get("parsing_error")
    parsed = response.get("parsed")
    if parsing_error is not None or parsed is None:
        logger.warning(
            "Structured response for %s rejected: %s",
            output_schema.__name__,
            parsing_error,
        )
        raise ExtractionError(
            f"The AI response does not match {output_schema.__name__}.",
            kind=ExtractionErrorKind.SCHEMA_VIOLATION,
            cause=parsing_error,
        )
    return parsed

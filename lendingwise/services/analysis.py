import json
import logging
from typing import List, Sequence

from pydantic import ValidationError

from lendingwise.client.openai_client import get_openai_client
from lendingwise.config.settings import settings
from lendingwise.errors import ProviderError
from lendingwise.models import AnalysisResult, FileAttachment
from lendingwise.services.prompt import RESPONSE_FORMAT, build_prompt

logger = logging.getLogger("lendingwise.analysis")


def attachment_part(attachment: FileAttachment) -> dict:
    if attachment.mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": attachment.data_url()}}
    return {
        "type": "file",
        "file": {"filename": attachment.name, "file_data": attachment.data_url()},
    }


def build_messages(attachments: Sequence[FileAttachment], context_note: str = "") -> List[dict]:
    content = [attachment_part(a) for a in attachments]
    content.append({"type": "text", "text": build_prompt(context_note)})
    return [{"role": "user", "content": content}]


def parse_result(payload: str) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate(json.loads(payload))
    except json.JSONDecodeError as e:
        raise ProviderError(f"Model returned malformed JSON: {e}") from e
    except ValidationError as e:
        raise ProviderError(f"Model response does not match the report schema: {e}") from e


async def analyze(attachments: Sequence[FileAttachment], context_note: str = "") -> AnalysisResult:
    """
    Run one audit against the provider.

    Raises ConfigurationError before any network traffic when the credential
    is missing, ProviderError when the reply carries no usable payload.
    Transport errors from the client are not caught.
    """
    client = get_openai_client()

    extra = {}
    if settings.REASONING_EFFORT:
        extra["reasoning_effort"] = settings.REASONING_EFFORT

    logger.info(f"Submitting {len(attachments)} attachment(s) to {settings.PROVIDER_MODEL}")
    response = await client.chat.completions.create(
        model=settings.PROVIDER_MODEL,
        messages=build_messages(attachments, context_note),
        response_format=RESPONSE_FORMAT,
        **extra,
    )

    text = response.choices[0].message.content if response.choices else None
    if not text or not text.strip():
        raise ProviderError("Model failed to generate a response text.")

    result = parse_result(text)
    logger.info(f"Analysis complete: decision={result.conclusion.decision!r}, hidden_loans={len(result.hidden_loans)}")
    return result

"""
Response shape translation.
Decodes vision model output and builds the service's response bodies.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Union

from pydantic import ValidationError as SchemaError

from app.core.errors import DecodeError
from app.s3.client import StoredObjectLocator
from shared_schemas.scanner import (
    AnalysisResult,
    AnalyzeResponse,
    ImageDetails,
    UploadResponse,
)

logger = logging.getLogger(__name__)

UPLOAD_MESSAGE = "File uploaded successfully"
STUB_ANALYZE_MESSAGE = "Image is successfully sent to Gemini API"
ANALYZE_MESSAGE = "Image analyzed successfully"

# ```json ... ``` wrapper models like to add around JSON answers
_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class AnalysisOk:
    """Model output decoded into an AnalysisResult."""
    result: AnalysisResult


@dataclass(frozen=True)
class AnalysisMalformed:
    """Model output that could not be decoded."""
    raw_text: str
    reason: str


AnalysisOutcome = Union[AnalysisOk, AnalysisMalformed]


def _extract_json_object(raw_text: str) -> str:
    """Return the outermost {...} span, unwrapping a code fence first."""
    text = raw_text.strip()

    fenced = _CODE_FENCE.search(text)
    if fenced:
        text = fenced.group(1)

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ValueError("no JSON object found in model output")
    return text[start:end + 1]


def decode_analysis(raw_text: str) -> AnalysisOutcome:
    """
    Best-effort decode of free-form model text into an AnalysisResult.

    Never raises; anything that is not a JSON object with the expected
    field types (including JSON nested too deeply to parse) comes back
    as AnalysisMalformed.
    """
    try:
        payload = json.loads(_extract_json_object(raw_text))
        if not isinstance(payload, dict):
            raise ValueError("model output is not a JSON object")
        return AnalysisOk(result=AnalysisResult.model_validate(payload))
    except (ValueError, SchemaError, RecursionError) as e:
        logger.warning(f"Malformed analysis from vision model: {e}")
        return AnalysisMalformed(raw_text=raw_text, reason=str(e))


def build_upload_response(locator: StoredObjectLocator) -> UploadResponse:
    return UploadResponse(message=UPLOAD_MESSAGE, url=locator.url)


def build_stub_analyze_response(filename: str, size: int) -> AnalyzeResponse:
    """Metadata-only acknowledgment, no oracle involved."""
    return AnalyzeResponse(
        message=STUB_ANALYZE_MESSAGE,
        details=ImageDetails(filename=filename, size=size)
    )


def build_analyze_response(
    filename: str,
    size: int,
    categories: List[str],
    outcome: AnalysisOutcome
) -> AnalyzeResponse:
    """
    Combine classifier categories and the decoded analysis.

    Raises:
        DecodeError: If the vision model output was malformed
    """
    if isinstance(outcome, AnalysisMalformed):
        raise DecodeError(
            "Failed to parse response from vision model",
            outcome.reason,
            raw_text=outcome.raw_text
        )

    return AnalyzeResponse(
        message=ANALYZE_MESSAGE,
        details=ImageDetails(filename=filename, size=size),
        categories=list(categories),
        analysis=outcome.result
    )

"""
Gemini vision client.
Asks a Gemini model for a sustainability analysis of an image.
"""

import logging
from typing import List, Optional

import google.generativeai as genai

from app.core.errors import UpstreamError
from app.core.translator import AnalysisOutcome, decode_analysis

logger = logging.getLogger(__name__)


PROMPT_TEMPLATE = """Analyze this image and provide detailed information about its sustainability aspects based on these categories: {categories}.
Please determine:
1. If it's resalable, suggest appropriate platforms (like {platforms})
2. If it's recyclable, suggest nearby recycling centers in {locale}
3. If it's reusable, suggest creative ways to reuse it
4. Whether it's biodegradable

Provide the response in a structured JSON format using exactly these keys:
{{"resalable": {{"is_resalable": bool, "platforms": [string]}},
"recyclable": {{"is_recyclable": bool, "centers": [string]}},
"reusable": {{"is_reusable": bool, "ways": [string]}},
"biodegradable": bool}}"""


class GeminiVisionClient:
    """Sends image + category prompt to a Gemini model."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        locale: str,
        platforms: List[str],
        model: Optional[genai.GenerativeModel] = None
    ):
        """
        Args:
            api_key: Gemini API key
            model_name: Gemini model, e.g. gemini-1.5-flash
            locale: Area recycling centers should be suggested for
            platforms: Example resale platforms named in the prompt
            model: Preconfigured model handle (tests)
        """
        self.model_name = model_name
        self.locale = locale
        self.platforms = platforms

        if model is None:
            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(model_name)
        self.model = model

        logger.info(f"Gemini client initialized with model: {model_name}")

    def build_prompt(self, categories: List[str]) -> str:
        return PROMPT_TEMPLATE.format(
            categories=", ".join(categories) if categories else "none",
            platforms=", ".join(self.platforms),
            locale=self.locale
        )

    async def analyze(
        self,
        categories: List[str],
        image_data: bytes,
        mime_type: str = "image/jpeg"
    ) -> AnalysisOutcome:
        """
        Generate a sustainability analysis for an image.

        Args:
            categories: Labels from the classification service
            image_data: Raw image bytes
            mime_type: Image MIME type

        Returns:
            AnalysisOk, or AnalysisMalformed when the model did not
            answer with the expected JSON

        Raises:
            UpstreamError: If the model call fails
        """
        prompt = self.build_prompt(categories)
        image_part = {"mime_type": mime_type, "data": image_data}

        try:
            response = await self.model.generate_content_async([image_part, prompt])
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise UpstreamError("Failed to generate content", e) from e

        raw_text = _first_text_part(response)
        logger.info(f"Gemini returned {len(raw_text)} characters")

        return decode_analysis(raw_text)


def _first_text_part(response) -> str:
    """Text of the first part of the first candidate, or "" if there is none."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return ""

    return getattr(parts[0], "text", "") or ""

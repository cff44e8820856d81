"""
Google Gemini Text Generator

This module wraps the google-genai async client behind the TextGenerator
contract used by the interview and suggestion services.
"""

from typing import Optional

from google import genai
from google.genai import types

from generation.base import GenerationError
from generation.generation_config import GEMINI_CONFIG


class GeminiTextGenerator:
    """
    Text generator backed by the Gemini generate-content endpoint.

    Uses gemini-2.0-flash unless another model is configured.
    """

    def __init__(
        self,
        model: str = GEMINI_CONFIG["model"],
        api_key: Optional[str] = GEMINI_CONFIG["api_key"],
    ):
        """
        Initialize the Gemini client.

        Args:
            model: Gemini model name
            api_key: Google API key (GEMINI_API_KEY or GOOGLE_API_KEY)

        Raises:
            GenerationError: If no API key is configured
        """
        if not api_key:
            raise GenerationError("GEMINI_API_KEY not found in environment variables")

        self.model = model
        self.client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        max_tokens: int,
        system: Optional[str] = None,
    ) -> str:
        """
        Generate text for a single prompt.

        Args:
            prompt: User prompt text
            max_tokens: Maximum number of output tokens
            system: Optional system instruction

        Returns:
            The generated text

        Raises:
            GenerationError: If the API call fails or returns no text
        """
        config = types.GenerateContentConfig(
            max_output_tokens=max_tokens,
            system_instruction=system,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise GenerationError(f"Gemini API error: {e}") from e

        # Ensure the API returned a candidate with text
        if not response or not getattr(response, "candidates", None):
            raise GenerationError("Gemini API did not return any candidates.")

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise GenerationError("Gemini API returned an empty response.")

        return text.strip()

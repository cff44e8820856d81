"""
Provider selection for text generation backends.
"""

import logging
from typing import Optional

from generation.base import GenerationError, TextGenerator

logger = logging.getLogger(__name__)


def create_text_generator(provider: str) -> TextGenerator:
    """
    Build a text generator for a provider name.

    Args:
        provider: "gemini" or "openai"

    Raises:
        ValueError: If the provider is unknown
        GenerationError: If the provider has no API key configured
    """
    if provider == "gemini":
        from generation.gemini_generator import GeminiTextGenerator
        return GeminiTextGenerator()
    if provider == "openai":
        from generation.openai_generator import OpenAITextGenerator
        return OpenAITextGenerator()
    raise ValueError(f"Unknown text generation provider: {provider}")


class LazyTextGenerator:
    """
    Defers building the provider client until the first generation.

    Lets the API start without credentials; a missing key then surfaces as a
    GenerationError on the request that needed it.
    """

    def __init__(self, provider: str):
        self.provider = provider
        self._generator: Optional[TextGenerator] = None

    def _resolve(self) -> TextGenerator:
        if self._generator is None:
            try:
                self._generator = create_text_generator(self.provider)
            except ValueError as e:
                raise GenerationError(str(e)) from e
            logger.info(f"Text generator ready: {self.provider}")
        return self._generator

    async def generate(
        self,
        prompt: str,
        max_tokens: int,
        system: Optional[str] = None,
    ) -> str:
        return await self._resolve().generate(prompt, max_tokens, system=system)

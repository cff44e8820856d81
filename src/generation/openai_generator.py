"""
OpenAI Text Generator

Chat-completion backend for the TextGenerator contract.
"""

from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from generation.base import GenerationError
from generation.generation_config import OPENAI_CONFIG


class OpenAITextGenerator:
    """Text generator backed by the OpenAI chat-completions endpoint."""

    def __init__(
        self,
        model: str = OPENAI_CONFIG["model"],
        api_key: Optional[str] = OPENAI_CONFIG["api_key"],
    ):
        if not api_key:
            raise GenerationError("OPENAI_API_KEY not found in environment variables")

        self.model = model
        self.client = AsyncOpenAI(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        max_tokens: int,
        system: Optional[str] = None,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            raise GenerationError(f"OpenAI API error: {e}") from e

        if not response.choices:
            raise GenerationError("OpenAI API did not return any choices.")

        text = response.choices[0].message.content
        if not text or not text.strip():
            raise GenerationError("OpenAI API returned an empty response.")

        return text.strip()

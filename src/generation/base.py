"""
Text generation contract shared by every provider backend.

The interview core only needs one capability: turn a prompt into text within
a token budget. Providers live behind this protocol so they can be swapped
(or faked in tests) without touching the callers.
"""

from typing import Optional, Protocol


class GenerationError(RuntimeError):
    """Raised by a backend when the upstream call fails or returns no text."""


class TextGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        max_tokens: int,
        system: Optional[str] = None,
    ) -> str: ...

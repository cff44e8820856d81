# Text Generation Package
"""
Provider backends for the text-generation capability.

- GeminiTextGenerator: Google Gemini generate-content
- OpenAITextGenerator: OpenAI chat completions
"""

from .base import GenerationError, TextGenerator
from .factory import LazyTextGenerator, create_text_generator
from .json_utils import extract_json_object

__all__ = [
    "GenerationError",
    "TextGenerator",
    "LazyTextGenerator",
    "create_text_generator",
    "extract_json_object",
]

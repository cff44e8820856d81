"""
Bounded, traced calls into the text-generation capability.

Every service goes through `run_generation` so that timeouts, tracing and
the mapping of upstream failures to GenerationFailed happen in one place.
"""

import asyncio
import logging
from typing import Optional

from langfuse import get_client, propagate_attributes

from career_coach.errors import GenerationFailed
from generation import GenerationError, TextGenerator
from generation.generation_config import GENERATION_CONFIG

logger = logging.getLogger(__name__)

langfuse = get_client()


async def run_generation(
    generator: TextGenerator,
    prompt: str,
    max_tokens: int,
    *,
    name: str,
    system: Optional[str] = None,
    session_id: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Generate text with a bounded wait.

    Args:
        generator: Backend to call
        prompt: Prompt text
        max_tokens: Output token budget
        name: Span name used for tracing
        system: Optional system prompt
        session_id: Interview session the call belongs to, if any
        timeout: Seconds to wait (defaults to GENERATION_CONFIG)

    Returns:
        Non-empty generated text

    Raises:
        GenerationFailed: On upstream error, timeout or empty output
    """
    if timeout is None:
        timeout = GENERATION_CONFIG["timeout_seconds"]

    with langfuse.start_as_current_observation(as_type="span", name=name) as span:
        with propagate_attributes(session_id=session_id):
            try:
                text = await asyncio.wait_for(
                    generator.generate(prompt, max_tokens, system=system),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                logger.error(f"⏱️ {name}: generation timed out after {timeout}s")
                raise GenerationFailed(
                    f"Text generation timed out after {timeout}s", session_id=session_id
                ) from None
            except GenerationError as e:
                logger.error(f"❌ {name}: {e}")
                raise GenerationFailed(str(e), session_id=session_id) from e
            except Exception as e:
                logger.exception(f"❌ {name}: unexpected generation error: {e}")
                raise GenerationFailed(session_id=session_id) from e

            if not text or not text.strip():
                logger.error(f"❌ {name}: generation returned no text")
                raise GenerationFailed("Text generation returned no text", session_id=session_id)

            span.update(
                input={"prompt": prompt, "max_tokens": max_tokens},
                output={"text": text},
            )

    return text.strip()

"""Utilities for pulling a JSON object out of free-form model output."""

import json
import re
from typing import Any, Dict, Optional

_OBJECT_BLOCK = re.compile(r"\{.*\}", re.DOTALL)
_CODE_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_CODE_FENCE_CLOSE = re.compile(r"\s*```$")


def _strip_code_fences(text: str) -> str:
    """Remove surrounding ```...``` fences (with or without 'json') if present."""
    t = text.strip()
    if t.startswith("```") and t.endswith("```"):
        t = _CODE_FENCE_OPEN.sub("", t)
        t = _CODE_FENCE_CLOSE.sub("", t)
    return t.strip()


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Extract the first JSON object from a model response.

    Handles code fences and leading/trailing prose. Returns None when no
    object can be parsed, so callers decide on their own fallback.
    """
    if not text:
        return None
    t = _strip_code_fences(text)

    data = _loads_object(t)
    if data is not None:
        return data

    m = _OBJECT_BLOCK.search(t)
    if not m:
        return None
    return _loads_object(m.group(0))

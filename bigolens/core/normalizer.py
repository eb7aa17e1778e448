"""
Turns raw model text into a ComplexityResult.

Gemini does not always honour the requested format, so this never raises:
strict JSON is tried first, then the labelled-line format, and anything still
missing gets a fallback literal.
"""
from __future__ import annotations

import json
import re
from typing import Any, Optional

from bigolens.config import logger
from .models import FALLBACK_COMPLEXITY, FALLBACK_EXPLANATION, ComplexityResult


FIELDS = ("timeComplexity", "spaceComplexity", "explanation")

_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

_TEXT_PATTERNS = {
    "timeComplexity": re.compile(r"Time Complexity:\s*(O\([^)]+\))", re.IGNORECASE),
    "spaceComplexity": re.compile(r"Space Complexity:\s*(O\([^)]+\))", re.IGNORECASE),
}

# the explanation runs until the first blank line, so trailing chatter is dropped
_EXPLANATION_RE = re.compile(r"Explanation:[ \t]*(.+?)(?=\n[ \t]*\r?\n|\Z)", re.IGNORECASE | re.DOTALL)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _parse_json_object(text: str) -> Optional[dict[str, Any]]:
    """Parse ``text`` as a JSON object, falling back to its outermost braces."""
    candidates = [text]
    match = _OBJECT_RE.search(text)
    if match and match.group(0) != text:
        candidates.append(match.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _string_field(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _flatten(text: str) -> str:
    return re.sub(r"\s*[\r\n]+\s*", " ", text).strip()


def _extract_labelled(text: str, key: str) -> Optional[str]:
    if key == "explanation":
        match = _EXPLANATION_RE.search(text)
    else:
        match = _TEXT_PATTERNS[key].search(_flatten(text))
    if match:
        value = _flatten(match.group(1))
        return value or None
    return None


def normalize_response(raw: Optional[str]) -> ComplexityResult:
    """
    Extract time complexity, space complexity and explanation from ``raw``.

    Args:
        raw: Text exactly as returned by the model (may be empty)

    Returns:
        ComplexityResult with every field populated
    """
    cleaned = strip_code_fences(raw or "")
    found: dict[str, Optional[str]] = dict.fromkeys(FIELDS)

    data = _parse_json_object(cleaned)
    if data is not None:
        for key in FIELDS:
            found[key] = _string_field(data, key)

    if not all(found.values()):
        for key in FIELDS:
            if found[key] is None:
                found[key] = _extract_labelled(cleaned, key)

    missing = [key for key, value in found.items() if value is None]
    if missing:
        logger.warning("Model response missing %s, using fallback values", ", ".join(missing))
        logger.debug("Unparsed model response: %s", cleaned[:500])

    return ComplexityResult(
        timeComplexity=found["timeComplexity"] or FALLBACK_COMPLEXITY,
        spaceComplexity=found["spaceComplexity"] or FALLBACK_COMPLEXITY,
        explanation=found["explanation"] or FALLBACK_EXPLANATION,
    )

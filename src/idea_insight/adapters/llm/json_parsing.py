"""Extract JSON objects from free-form model output."""

import json
import re
from typing import Any

from idea_insight.core.synthesis import REQUIRED_FIELDS


def fix_json(text: str) -> str:
    """Try to fix common JSON issues."""
    # Remove trailing commas before } or ]
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _try_load(candidate: str) -> Any:
    try:
        return json.loads(fix_json(candidate))
    except json.JSONDecodeError:
        return None


def _outermost_object(text: str) -> str:
    """Slice from the first opening brace to the matching closing brace."""
    start = text.find("{")
    if start == -1:
        return ""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return ""


def extract_json_object(text: str) -> Any:
    """Parse the JSON object embedded in a model response.

    Strategies, in order: the whole text, a markdown code block, the outermost
    balanced object, then any object containing the "industry" field.

    Returns:
        Parsed JSON value, or None if nothing parseable was found.
    """
    text = text.strip()

    parsed = _try_load(text)
    if parsed is not None:
        return parsed

    # Strategy 1: JSON in markdown code block
    code_block_match = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.DOTALL)
    if code_block_match:
        parsed = _try_load(code_block_match.group(1).strip())
        if parsed is not None:
            return parsed

    # Strategy 2: outermost balanced object, handles nested arrays of objects
    candidate = _outermost_object(text)
    if candidate:
        parsed = _try_load(candidate)
        if parsed is not None:
            return parsed

    # Strategy 3: shallow object carrying the first required field
    field_match = re.search(
        r'\{[^{}]*"' + REQUIRED_FIELDS[0] + r'"\s*:[^{}]*(?:\{[^{}]*\}[^{}]*)*\}',
        text,
        re.DOTALL,
    )
    if field_match:
        return _try_load(field_match.group(0))

    return None

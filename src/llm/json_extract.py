# src/llm/json_extract.py - v1
"""Pull a JSON object out of free-form model output.

Candidates are tried in order: a ```json fenced block, a generic ``` fenced
block, then the widest ``{ ... }`` span. Each candidate is parsed as-is
first, then with trailing commas before ``}``/``]`` dropped, then with bare
identifier keys quoted as well. Neither repair touches quoted strings.
"""

from __future__ import annotations

import json
import re
from typing import Any

_JSON_FENCE = re.compile(r"```json\s*\n?(.*?)```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[A-Za-z0-9_-]*\s*\n?(.*?)```", re.DOTALL)
# The string-literal alternative comes first so matches never start inside one.
_STRING = r'"(?:[^"\\]|\\.)*"'
_TRAILING_COMMA = re.compile(rf"({_STRING})|,(\s*[}}\]])")
_BARE_KEY = re.compile(rf"({_STRING})|([{{,]\s*)([A-Za-z_$][A-Za-z0-9_$]*)(\s*:)")


class JSONExtractionError(ValueError):
    """No JSON object could be recovered from the text."""


def candidates(text: str) -> list[str]:
    """Candidate JSON substrings in priority order, without duplicates."""
    found: list[str] = []

    match = _JSON_FENCE.search(text)
    if match:
        found.append(match.group(1))

    match = _ANY_FENCE.search(text)
    if match:
        found.append(match.group(1))

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        found.append(text[start : end + 1])

    unique: list[str] = []
    for candidate in found:
        candidate = candidate.strip()
        if candidate and candidate not in unique:
            unique.append(candidate)
    return unique


def strip_trailing_commas(candidate: str) -> str:
    return _TRAILING_COMMA.sub(lambda m: m.group(1) or m.group(2), candidate)


def quote_bare_keys(candidate: str) -> str:
    return _BARE_KEY.sub(
        lambda m: m.group(1) or f'{m.group(2)}"{m.group(3)}"{m.group(4)}', candidate
    )


def repair(candidate: str) -> str:
    """Strip trailing commas and quote bare keys."""
    return quote_bare_keys(strip_trailing_commas(candidate))


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the first candidate that parses to a JSON object.

    Raises:
        JSONExtractionError: When no candidate yields an object.
    """
    for candidate in candidates(text):
        for attempt in (candidate, strip_trailing_commas(candidate), repair(candidate)):
            try:
                value = json.loads(attempt)
            except json.JSONDecodeError:
                continue
            if isinstance(value, dict):
                return value
    raise JSONExtractionError(
        f"No JSON object found in model output ({len(text)} chars)"
    )

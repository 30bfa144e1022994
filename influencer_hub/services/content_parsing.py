# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

import json
import re
from typing import Any

_HASHTAG_STRIP = re.compile(r"[\"'\[\]{}]")
_HASHTAG_SPLIT = re.compile(r",|\n")
_NUMBERED_MARKER = re.compile(r"\d+\.")
_LEADING_NON_LETTERS = re.compile(r"^[^a-zA-Z]+")
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")

def _split_hashtag_text(text: str) -> list[str]:
    cleaned = _HASHTAG_STRIP.sub("", text)
    return [tag.strip() for tag in _HASHTAG_SPLIT.split(cleaned) if tag.strip()]

def parse_hashtags(text: str) -> list[Any]:
    """
    Turn a model reply into a list of hashtags.

    A strict JSON array is returned as is. Anything else (JSON objects,
    comma separated text, one tag per line) is stripped of quotes and
    brackets and split on commas and newlines.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        return _split_hashtag_text(text or "")
    if isinstance(parsed, list):
        return parsed
    return _split_hashtag_text(text)

def parse_monetization(text: str) -> Any:
    """
    Turn a model reply into monetization insights.

    Valid JSON is returned parsed. Otherwise the text is cut on numbered
    list markers ("1.", "2." ...) and each segment becomes
    {title, description, estimatedValue: None}.
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        pass

    insights = []
    for segment in _NUMBERED_MARKER.split(text or ""):
        if not segment:
            continue
        lines = segment.strip().split("\n")
        insights.append({
            "title": _LEADING_NON_LETTERS.sub("", lines[0]).strip(),
            "description": " ".join(lines[1:]).strip(),
            "estimatedValue": None,
        })
    return insights

def parse_estimated_value(value: Any) -> float | None:
    """'$1,500/month' -> 1500.0; None or unparseable text -> None."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    digits = _NON_NUMERIC.sub("", str(value))
    # parseFloat semantics: longest numeric prefix
    match = re.match(r"-?\d*\.?\d+|-?\d+", digits)
    if not match:
        return None
    return float(match.group(0))

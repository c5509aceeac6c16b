"""Parse QuoDB search payloads into result items."""

from __future__ import annotations

import json

from findmyquote.errors import QuoteParseError
from findmyquote.models import ResultItem


def _parse_year(value, index: int) -> int:
    """Accept an int, an integral float, or a string of decimal digits."""
    if isinstance(value, bool):
        raise QuoteParseError(f"docs[{index}].year is not a number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise QuoteParseError(f"docs[{index}].year is not a number: {value!r}")


def _require_str(doc: dict, key: str, index: int) -> str:
    if key not in doc:
        raise QuoteParseError(f"docs[{index}] is missing {key!r}")
    value = doc[key]
    if not isinstance(value, str):
        raise QuoteParseError(f"docs[{index}].{key} is not a string: {value!r}")
    return value


def parse_results(payload: str) -> list[ResultItem]:
    """Convert a raw search payload into result items, preserving order.

    An empty payload means "no results" and yields an empty list. A payload
    that is not ``{"docs": [{"title", "year", "phrase"}, ...]}`` raises
    :class:`QuoteParseError`.
    """
    if not payload or not payload.strip():
        return []

    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, RecursionError) as e:
        raise QuoteParseError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise QuoteParseError(f"Expected a JSON object, got {type(data).__name__}")
    if "docs" not in data:
        raise QuoteParseError("Payload is missing 'docs'")
    docs = data["docs"]
    if not isinstance(docs, list):
        raise QuoteParseError(f"'docs' is not a list: {type(docs).__name__}")

    items = []
    for i, doc in enumerate(docs):
        if not isinstance(doc, dict):
            raise QuoteParseError(f"docs[{i}] is not an object")
        if "year" not in doc:
            raise QuoteParseError(f"docs[{i}] is missing 'year'")
        items.append(
            ResultItem(
                quote=_require_str(doc, "phrase", i),
                title=_require_str(doc, "title", i),
                year=_parse_year(doc["year"], i),
            )
        )
    return items

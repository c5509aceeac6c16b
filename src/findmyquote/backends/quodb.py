"""QuoDB quote search client."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from findmyquote.config import get_api_url, get_timeout
from findmyquote.errors import ErrorKind, QuoteParseError
from findmyquote.models import ResultItem
from findmyquote.parser import parse_results

logger = logging.getLogger(__name__)


def escape_phrase(phrase: str) -> str:
    """Percent-escape a phrase so it fits in a single URL path segment."""
    return quote(phrase.strip(), safe="")


def search_url(escaped_phrase: str) -> str:
    return get_api_url().rstrip("/") + "/" + escaped_phrase


def fetch(escaped_phrase: str, *, timeout: Optional[float] = None) -> str:
    """Fetch the raw search payload for an already-escaped phrase.

    Makes exactly one request. Any transport error, timeout or non-2xx
    status yields an empty string instead of an exception. A bad
    QUODB_API_URL or API_TIMEOUT still raises ValueError.
    """
    # Config errors are raised, not folded into "no results".
    url = search_url(escaped_phrase)
    try:
        resp = httpx.get(
            url,
            timeout=timeout if timeout is not None else get_timeout(),
            follow_redirects=True,
        )
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Quote lookup failed (%s): %s %s", ErrorKind.NETWORK_FAILURE.value, url, e)
        return ""
    logger.debug("Fetched %d bytes from %s", len(resp.text), url)
    return resp.text


def search_quotes(phrase: str) -> list[ResultItem]:
    """Look up movies for a spoken phrase.

    Network and parse failures come back as an empty list, the same as a
    search with no matches.
    """
    payload = fetch(escape_phrase(phrase))
    try:
        results = parse_results(payload)
    except QuoteParseError as e:
        logger.warning("Quote lookup failed (%s) for %r: %s", e.kind.value, phrase, e)
        return []
    if not results:
        logger.info("No movies found (%s) for %r", ErrorKind.EMPTY_RESULT.value, phrase)
    return results

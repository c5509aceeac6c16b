"""Persist the paging cursor in a conversation's session attributes."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, MutableMapping, Optional

from findmyquote import config
from findmyquote.models import PagingCursor, ResultItem

logger = logging.getLogger(__name__)

SESSION_TEXT = "text"
SESSION_INDEX = "index"

SessionAttributes = MutableMapping[str, Any]


def store_cursor(attrs: SessionAttributes, cursor: Optional[PagingCursor]) -> None:
    """Write the cursor into the session, or clear it when None."""
    if cursor is None:
        clear_cursor(attrs)
        return
    attrs[SESSION_TEXT] = [item.to_dict() for item in cursor.results]
    attrs[SESSION_INDEX] = cursor.next_index


def load_cursor(attrs: SessionAttributes) -> Optional[PagingCursor]:
    """Read the cursor back, or None if there is no usable search."""
    text = attrs.get(SESSION_TEXT)
    if text is None:
        return None
    try:
        results = tuple(ResultItem.from_dict(d) for d in text)
        return PagingCursor(results=results, next_index=int(attrs.get(SESSION_INDEX, 0)))
    except (KeyError, TypeError, ValueError):
        logger.warning("Discarding malformed paging state in session")
        return None


def clear_cursor(attrs: SessionAttributes) -> None:
    attrs.pop(SESSION_TEXT, None)
    attrs.pop(SESSION_INDEX, None)


# --- File-backed session store (CLI) ---


def _sanitize_session_id(session_id: str) -> str:
    """Reduce a session id to a safe file name."""
    safe = re.sub(r"[^A-Za-z0-9_.-]", "_", session_id.strip()).lstrip(".")
    if not safe:
        raise ValueError("session_id must not be empty")
    return safe


class FileSessionStore:
    """Session attributes kept as JSON files, one per session id."""

    def __init__(self, root: Optional[Path] = None):
        self.root = root if root is not None else config.STATE_DIR / "sessions"

    def path(self, session_id: str) -> Path:
        return self.root / f"{_sanitize_session_id(session_id)}.json"

    def load(self, session_id: str) -> dict:
        p = self.path(session_id)
        if not p.exists():
            return {}
        try:
            data = json.loads(p.read_text())
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupted session file: %s, ignoring", p)
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected session file contents: %s, ignoring", p)
            return {}
        return data

    def save(self, session_id: str, attrs: SessionAttributes) -> None:
        p = self.path(session_id)
        p.parent.mkdir(parents=True, exist_ok=True)
        # Atomic write: write to temp file, then rename
        tmp = p.with_suffix(".tmp")
        tmp.write_text(json.dumps(dict(attrs), indent=2, ensure_ascii=False))
        tmp.replace(p)

    def clear(self, session_id: str) -> bool:
        p = self.path(session_id)
        if p.exists():
            p.unlink()
            return True
        return False

"""Intent dispatch for the Find My Quote voice skill.

Routes intents to the pager, keeps the paging cursor in the host's session
attributes, and owns the canned welcome, help and goodbye responses.
"""

from __future__ import annotations

import logging
from typing import Optional

from findmyquote import config
from findmyquote.backends.quodb import search_quotes
from findmyquote.errors import ErrorKind, InvalidIntentError
from findmyquote.models import PageKind, RenderedOutput
from findmyquote.pager import Lookup, continue_paging, start_search
from findmyquote.renderer import NO_ACTIVE_SEARCH_TEXT, render_message, render_page
from findmyquote.session import SessionAttributes, clear_cursor, load_cursor, store_cursor

logger = logging.getLogger(__name__)

FIRST_MOVIE_INTENT = "GetFirstMovieIntent"
NEXT_MOVIE_INTENT = "GetNextMovieIntent"
HELP_INTENT = "AMAZON.HelpIntent"
STOP_INTENT = "AMAZON.StopIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"

SLOT_PHRASE = "phrase"

WELCOME_TEXT = "Find My Quote. What quote do you have in mind?"
HELP_TEXT = "With Find My Quote, you can get the movie name for your quote."
HELP_REPROMPT = "Which phrase do you have?"
GOODBYE_TEXT = "Goodbye"
MISUNDERSTOOD_TEXT = "I'm sorry, I was not able to understand your quote."


class QuoteSkill:
    """Handles one request at a time against a caller-supplied session."""

    def __init__(self, lookup: Lookup = search_quotes, page_size: Optional[int] = None):
        self.lookup = lookup
        self.page_size = page_size if page_size is not None else config.get_page_size()

    # --- Lifecycle ---

    def on_session_started(self, request_id: str, session_id: str) -> None:
        logger.info("onSessionStarted requestId=%s, sessionId=%s", request_id, session_id)

    def on_launch(self, request_id: str, session_id: str) -> RenderedOutput:
        logger.info("onLaunch requestId=%s, sessionId=%s", request_id, session_id)
        return self.welcome()

    def on_intent(
        self,
        intent_name: str,
        slots: dict[str, Optional[str]],
        session: SessionAttributes,
        *,
        request_id: str = "",
        session_id: str = "",
    ) -> RenderedOutput:
        logger.info(
            "onIntent intent=%s requestId=%s, sessionId=%s", intent_name, request_id, session_id
        )
        if intent_name == FIRST_MOVIE_INTENT:
            return self.first_movie(slots.get(SLOT_PHRASE), session)
        if intent_name == NEXT_MOVIE_INTENT:
            return self.next_movie(session)
        if intent_name == HELP_INTENT:
            return render_message(HELP_TEXT, reprompt=HELP_REPROMPT)
        if intent_name in (STOP_INTENT, CANCEL_INTENT):
            return self.goodbye()
        raise InvalidIntentError(intent_name)

    def on_session_ended(
        self, request_id: str, session_id: str, session: SessionAttributes
    ) -> None:
        logger.info("onSessionEnded requestId=%s, sessionId=%s", request_id, session_id)
        clear_cursor(session)

    # --- Responses ---

    def welcome(self) -> RenderedOutput:
        return render_message(WELCOME_TEXT, reprompt=NO_ACTIVE_SEARCH_TEXT)

    def goodbye(self) -> RenderedOutput:
        return render_message(GOODBYE_TEXT, end_session=True)

    def first_movie(self, phrase: Optional[str], session: SessionAttributes) -> RenderedOutput:
        """Start a new search, replacing whatever the session was paging through."""
        if not phrase or not phrase.strip():
            logger.info("No phrase in request")
            return render_message(MISUNDERSTOOD_TEXT, end_session=True)

        page, cursor = start_search(phrase, lookup=self.lookup, page_size=self.page_size)
        store_cursor(session, cursor)
        logger.debug("Started search for %r: %s", phrase, page.kind.value)
        return render_page(page)

    def next_movie(self, session: SessionAttributes) -> RenderedOutput:
        cursor = load_cursor(session)
        page, cursor = continue_paging(cursor, page_size=self.page_size)
        if page.kind == PageKind.RESULTS:
            store_cursor(session, cursor)
            logger.debug("Continued paging at index %d", cursor.next_index)
        elif page.kind == PageKind.NO_ACTIVE_SEARCH:
            logger.info("Next movie requested (%s)", ErrorKind.NO_ACTIVE_SESSION.value)
        elif page.kind == PageKind.ALL_CONSUMED:
            logger.info("Next movie requested (%s)", ErrorKind.SESSION_EXHAUSTED.value)
        return render_page(page)

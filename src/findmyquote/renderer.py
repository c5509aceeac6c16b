"""Render result pages as spoken SSML and plain-text card content."""

from __future__ import annotations

from xml.sax.saxutils import escape

from rich.console import Console
from rich.text import Text

from findmyquote.models import Page, PageKind, RenderedOutput, ResultItem

console = Console()

SSML = "ssml"
PLAIN = "plain"

FIRST_PREFIX = "For {phrase}, the quote is possibly"
NEXT_PREFIX = "Another matching quote is"
ITEM_TEMPLATE = "{prefix}, {quote}, from the movie {title}, which came out in {year}"

CONTINUE_QUESTION = "Would you like to hear another movie with a similar quote?"
NO_RESULTS_TEXT = "QuoDB could not find a movie for your quote. Sorry."
NO_ACTIVE_SEARCH_TEXT = (
    "With Find My Quote, you can get movie information for any quote you say. "
    "For example, you could say 'No, I am your father'."
)
ALL_CONSUMED_TEXT = "There are no more matching movies for this quote."

FIRST_CARD_TITLE = "Movies for {phrase}"
NEXT_CARD_TITLE = "Other movies with similar quotes"


def format_item(item: ResultItem, position: int, phrase: str) -> str:
    """One result as a sentence; position 0 names the searched phrase."""
    if position == 0:
        prefix = FIRST_PREFIX.format(phrase=phrase)
    else:
        prefix = NEXT_PREFIX
    return ITEM_TEMPLATE.format(
        prefix=prefix, quote=item.quote, title=item.title, year=item.year
    )


def compose(sentences: list[str], mode: str) -> str:
    """Join sentences as an SSML document or as plain lines."""
    if mode == SSML:
        body = " ".join(f"<p>{escape(s)}</p>" for s in sentences)
        return f"<speak>{body}</speak>"
    if mode == PLAIN:
        return "\n".join(sentences)
    raise ValueError(f"Unknown output mode: {mode!r}. Use 'ssml' or 'plain'.")


def render_message(
    text: str,
    *,
    reprompt: str = "",
    card_title: str | None = None,
    end_session: bool = False,
) -> RenderedOutput:
    """Render a fixed sentence in both encodings."""
    return RenderedOutput(
        spoken_script=compose([text], SSML),
        visual_summary=compose([text], PLAIN),
        follow_up_prompt=reprompt,
        card_title=card_title,
        should_end_session=end_session,
    )


def _page_sentences(page: Page) -> list[str]:
    sentences = [
        format_item(item, page.start_index + offset, page.phrase)
        for offset, item in enumerate(page.items)
    ]
    if page.has_more:
        sentences.append(CONTINUE_QUESTION)
    return sentences


def render_page(page: Page) -> RenderedOutput:
    """Render a page from the pager into speech, card text and reprompt."""
    if page.kind == PageKind.NO_RESULTS:
        return render_message(NO_RESULTS_TEXT, end_session=True)
    if page.kind == PageKind.NO_ACTIVE_SEARCH:
        return render_message(NO_ACTIVE_SEARCH_TEXT, reprompt=NO_ACTIVE_SEARCH_TEXT)
    if page.kind == PageKind.ALL_CONSUMED:
        return render_message(
            ALL_CONSUMED_TEXT, reprompt=NO_ACTIVE_SEARCH_TEXT, card_title=NEXT_CARD_TITLE
        )

    sentences = _page_sentences(page)
    if page.start_index == 0:
        card_title = FIRST_CARD_TITLE.format(phrase=page.phrase)
    else:
        card_title = NEXT_CARD_TITLE
    return RenderedOutput(
        spoken_script=compose(sentences, SSML),
        visual_summary=compose(sentences, PLAIN),
        follow_up_prompt=CONTINUE_QUESTION if page.has_more else NO_ACTIVE_SEARCH_TEXT,
        card_title=card_title,
        should_end_session=False,
    )


# --- Terminal output ---


def render_output(output: RenderedOutput, *, ssml: bool = False) -> None:
    """Print a rendered turn the way a device would show its card."""
    if output.card_title:
        console.print(Text(output.card_title, style="bold cyan"))
    if ssml:
        console.print(Text(output.spoken_script), soft_wrap=True)
    else:
        console.print(Text(output.visual_summary), soft_wrap=True)
    if output.follow_up_prompt and not output.should_end_session:
        console.print(Text(f"  > {output.follow_up_prompt}", style="dim italic"), soft_wrap=True)
    console.print()

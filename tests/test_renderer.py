"""Tests for findmyquote.renderer output formatting."""

from io import StringIO
from xml.etree import ElementTree

import pytest
from rich.console import Console

from findmyquote.models import Page, PageKind, PagingCursor, RenderedOutput, ResultItem
from findmyquote.pager import continue_paging, start_search
from findmyquote.renderer import (
    ALL_CONSUMED_TEXT,
    CONTINUE_QUESTION,
    NO_ACTIVE_SEARCH_TEXT,
    NO_RESULTS_TEXT,
    compose,
    format_item,
    render_output,
    render_page,
)


def _capture_output(render_fn, *args, **kwargs) -> str:
    """Capture Rich console output as plain text."""
    buf = StringIO()
    import findmyquote.renderer as mod
    original = mod.console
    mod.console = Console(file=buf, force_terminal=False, width=200)
    try:
        render_fn(*args, **kwargs)
    finally:
        mod.console = original
    return buf.getvalue()


def _results_page(items, start=0, has_more=True, phrase="I am your father"):
    return Page(
        kind=PageKind.RESULTS,
        items=tuple(items),
        has_more=has_more,
        start_index=start,
        phrase=phrase,
    )


class TestFormatItem:
    def test_first_position(self, items):
        text = format_item(items[0], 0, "I am your father")
        assert text == (
            "For I am your father, the quote is possibly, No, I am your father., "
            "from the movie The Empire Strikes Back, which came out in 1980"
        )

    def test_later_position(self, items):
        text = format_item(items[1], 1, "I am your father")
        assert text.startswith("Another matching quote is, I am your father, Luke.")
        assert text.endswith("from the movie Robot Chicken: Star Wars, which came out in 2007")


class TestCompose:
    def test_ssml(self):
        assert compose(["One.", "Two."], "ssml") == "<speak><p>One.</p> <p>Two.</p></speak>"

    def test_plain(self):
        assert compose(["One.", "Two."], "plain") == "One.\nTwo."

    def test_ssml_escapes_markup(self):
        ssml = compose(["Tom & Jerry <3"], "ssml")
        assert "Tom &amp; Jerry &lt;3" in ssml
        ElementTree.fromstring(ssml)

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown output mode"):
            compose(["x"], "html")


class TestRenderResults:
    def test_first_page(self, items):
        out = render_page(_results_page(items[:1]))
        assert out.spoken_script.startswith("<speak><p>For I am your father,")
        assert out.spoken_script.endswith(f"<p>{CONTINUE_QUESTION}</p></speak>")
        assert out.visual_summary.startswith("For I am your father,")
        assert out.visual_summary.endswith(CONTINUE_QUESTION)
        assert out.card_title == "Movies for I am your father"
        assert out.follow_up_prompt == CONTINUE_QUESTION
        assert not out.should_end_session

    def test_last_page_has_no_question(self, items):
        out = render_page(_results_page(items[2:], start=2, has_more=False))
        assert CONTINUE_QUESTION not in out.spoken_script
        assert CONTINUE_QUESTION not in out.visual_summary
        assert out.card_title == "Other movies with similar quotes"
        assert out.follow_up_prompt == NO_ACTIVE_SEARCH_TEXT

    def test_multi_item_page_prefixes(self, items):
        out = render_page(_results_page(items[:2]))
        lines = out.visual_summary.splitlines()
        assert lines[0].startswith("For I am your father,")
        assert lines[1].startswith("Another matching quote is,")

    def test_spoken_and_visual_share_content(self, items):
        out = render_page(_results_page(items[:2]))
        root = ElementTree.fromstring(out.spoken_script)
        spoken = [p.text for p in root.findall("p")]
        assert spoken == out.visual_summary.splitlines()

    def test_prefix_keyed_on_absolute_position(self, items):
        lookup = lambda phrase: items
        page, cursor = start_search("I am your father", lookup=lookup, page_size=2)
        first = render_page(page)
        page, cursor = continue_paging(cursor, page_size=2)
        second = render_page(page)
        assert first.visual_summary.startswith("For I am your father,")
        assert second.visual_summary.startswith("Another matching quote is,")
        assert "For I am your father" not in second.spoken_script


class TestRenderFixedPages:
    def test_no_results(self):
        out = render_page(Page(kind=PageKind.NO_RESULTS, phrase="x"))
        assert out.spoken_script == f"<speak><p>{NO_RESULTS_TEXT}</p></speak>"
        assert out.visual_summary == NO_RESULTS_TEXT
        assert CONTINUE_QUESTION not in out.spoken_script
        assert out.should_end_session

    def test_no_active_search(self):
        out = render_page(Page(kind=PageKind.NO_ACTIVE_SEARCH))
        assert out.visual_summary == NO_ACTIVE_SEARCH_TEXT
        assert out.spoken_script.startswith("<speak>")
        assert not out.should_end_session

    def test_all_consumed(self):
        out = render_page(Page(kind=PageKind.ALL_CONSUMED))
        assert out.visual_summary == ALL_CONSUMED_TEXT
        assert ElementTree.fromstring(out.spoken_script).tag == "speak"

    def test_apostrophes_survive_ssml(self):
        out = render_page(Page(kind=PageKind.NO_ACTIVE_SEARCH))
        assert ElementTree.fromstring(out.spoken_script).find("p").text == NO_ACTIVE_SEARCH_TEXT


class TestRenderOutput:
    def test_card(self):
        out = RenderedOutput(
            spoken_script="<speak><p>Hi [there]</p></speak>",
            visual_summary="Hi [there]",
            follow_up_prompt="Another?",
            card_title="Movies for hi",
        )
        output = _capture_output(render_output, out)
        assert "Movies for hi" in output
        assert "Hi [there]" in output
        assert "<speak>" not in output
        assert "> Another?" in output

    def test_ssml(self):
        out = RenderedOutput(spoken_script="<speak><p>Hi</p></speak>", visual_summary="Hi")
        output = _capture_output(render_output, out, ssml=True)
        assert "<speak><p>Hi</p></speak>" in output

    def test_no_prompt_when_session_ends(self):
        out = RenderedOutput(
            spoken_script="<speak><p>Bye</p></speak>",
            visual_summary="Bye",
            follow_up_prompt="Anything else?",
            should_end_session=True,
        )
        output = _capture_output(render_output, out)
        assert "Anything else?" not in output

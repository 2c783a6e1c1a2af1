"""Tests for HTML, terminal and text renderers."""

import pytest

from webbs_terminal.core.grid import GridDocument
from webbs_terminal.core.run import LINE_BREAK, StyledRun
from webbs_terminal.render import HtmlRenderer, TerminalRenderer, TextRenderer, escape_html


class TestHtmlRenderer:
    """Tests for HtmlRenderer."""

    def test_escapes_special_characters(self) -> None:
        assert escape_html("<&>\"'") == "&lt;&amp;&gt;&quot;&#39;"
        html = HtmlRenderer().render([StyledRun("a<b>&\"c'")])
        assert "a&lt;b&gt;&amp;&quot;c&#39;" in html
        assert "<b>" not in html

    def test_span_per_run(self) -> None:
        html = HtmlRenderer().render([StyledRun("red", fg=1), StyledRun("blue", fg=12)])
        assert '<span style="color:#aa0000">red</span>' in html
        assert '<span style="color:#5555ff">blue</span>' in html

    def test_background_only_when_not_default(self) -> None:
        html = HtmlRenderer().render([StyledRun("A"), StyledRun("B", bg=4)])
        assert '<span style="color:#aaaaaa">A</span>' in html
        assert '<span style="color:#aaaaaa;background-color:#0000aa">B</span>' in html

    def test_blink_animation(self) -> None:
        html = HtmlRenderer().render([StyledRun("!", blink=True)])
        assert "animation:ansi-blink 1s step-end infinite" in html
        assert "@keyframes ansi-blink" in html

    def test_no_style_block_without_blink(self) -> None:
        assert "<style>" not in HtmlRenderer().render([StyledRun("A")])

    def test_container(self) -> None:
        html = HtmlRenderer(font_family="monospace", font_size="12px").render([])
        assert html.startswith('<div class="ansi-art"')
        assert "font-family:monospace" in html
        assert "font-size:12px" in html
        assert "white-space:pre" in html
        assert html.endswith("</div>")

    def test_line_breaks(self) -> None:
        html = HtmlRenderer().render([StyledRun("A"), LINE_BREAK, StyledRun("B")])
        assert "A</span><br><span" in html

    def test_wraps_long_lines(self) -> None:
        html = HtmlRenderer(width=3).render([StyledRun("ABCDE")])
        assert (
            '<span style="color:#aaaaaa">ABC</span><br>'
            '<span style="color:#aaaaaa">DE</span>'
        ) in html

    def test_wrap_counts_across_runs(self) -> None:
        html = HtmlRenderer(width=3).render([StyledRun("AB"), StyledRun("CD", fg=1)])
        assert '<span style="color:#aa0000">C</span><br><span style="color:#aa0000">D</span>' in html

    def test_render_grid(self) -> None:
        doc = GridDocument(2, 2)
        html = HtmlRenderer(width=2).render_grid(doc)
        assert html.count("<br>") == 2

    def test_invalid_width(self) -> None:
        with pytest.raises(ValueError):
            HtmlRenderer(width=0)


class TestTerminalRenderer:
    """Tests for TerminalRenderer."""

    def test_sgr_on_style_change(self) -> None:
        out = TerminalRenderer().render([StyledRun("A", fg=1), StyledRun("B", fg=1)])
        assert out == "\x1b[0;31;49mA" + "B" + "\x1b[0m"

    def test_bright_and_background(self) -> None:
        out = TerminalRenderer(reset_at_end=False).render([StyledRun("X", fg=14, bg=4)])
        # Non-black background is reset at end of line
        assert out == "\x1b[0;96;44mX\x1b[0m"

    def test_lines(self) -> None:
        out = TerminalRenderer(reset_at_end=False).render([StyledRun("A"), LINE_BREAK, StyledRun("B")])
        assert out == "\x1b[0;37;49mA\nB"


class TestTextRenderer:
    """Tests for TextRenderer."""

    def test_strips_styles_and_trailing_space(self) -> None:
        tokens = [StyledRun("Hi  ", fg=2), LINE_BREAK, StyledRun("there"), LINE_BREAK, LINE_BREAK]
        assert TextRenderer().render(tokens) == "Hi\nthere"

    def test_preserve_whitespace(self) -> None:
        tokens = [StyledRun("Hi  "), LINE_BREAK]
        assert TextRenderer(preserve_whitespace=True).render(tokens) == "Hi  "

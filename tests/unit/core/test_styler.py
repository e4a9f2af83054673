"""Unit tests for core/styler.py"""

import pytest

from mdrich.core import style
from mdrich.core.buffer import Run, StyledTextBuffer
from mdrich.core.styler import MatchMode, apply_styles, is_valid_url, line_offset, style_markdown


BASE = style.DEFAULT_BASE_SIZE
FENCED_DUPLICATE = "```\n**a**\n```\n\n**a**"


def test_bold_and_italic(plain):
    """Markers are stripped and each construct gets its own run."""
    buf = style_markdown("**bold** and _italic_")
    assert buf.text() == "bold and italic"
    assert buf.runs() == [
        Run(text="bold", attributes=style.bold(BASE)),
        Run(text=" and ", attributes=plain),
        Run(text="italic", attributes=style.italic(BASE)),
    ]


def test_link():
    buf = style_markdown("[go](https://example.com)")
    assert buf.text() == "go"
    assert buf.runs() == [Run(text="go", attributes=style.link("https://example.com", BASE))]


def test_link_with_invalid_url_keeps_text_unlinked(plain):
    """A relative destination is stripped of markers but not linked."""
    buf = style_markdown("[docs](/guide)")
    assert buf.runs() == [Run(text="docs", attributes=plain)]


@pytest.mark.parametrize("level", range(1, 7))
def test_heading_levels(level):
    """Heading runs are bold and sized by level."""
    buf = style_markdown("#" * level + " H")
    (run,) = buf.runs()
    assert run.text == "H"
    assert run.attributes.bold
    assert run.attributes.heading_level == level
    assert run.attributes.size == BASE + 2 * (6 - level)


def test_heading_then_paragraph(plain):
    buf = style_markdown("## Sub\ntext")
    assert buf.runs() == [
        Run(text="Sub", attributes=style.heading(2, BASE)),
        Run(text="\ntext", attributes=plain),
    ]


@pytest.mark.parametrize("md", ["***both***", "___both___"])
def test_bold_italic(md):
    buf = style_markdown(md)
    assert buf.runs() == [Run(text="both", attributes=style.bold_italic(BASE))]


@pytest.mark.parametrize("md,attrs", [
    ("__b__", style.bold(BASE)),
    ("*i*", style.italic(BASE)),
    ("~~s~~", style.strikethrough(BASE)),
])
def test_alternate_delimiters(md, attrs):
    (run,) = style_markdown(md).runs()
    assert run.attributes == attrs


def test_inline_code():
    buf = style_markdown("use `x = 1` here")
    assert buf.text() == "use x = 1 here"
    assert buf.runs()[1] == Run(text="x = 1", attributes=style.monospace(BASE))


def test_multiline_strong():
    buf = style_markdown("**a\nb**")
    assert buf.runs() == [Run(text="a\nb", attributes=style.bold(BASE))]


def test_list_markers_stay_literal(plain):
    """List markers are left as unstyled text."""
    buf = style_markdown("- **a**\n- _b_")
    assert buf.runs() == [
        Run(text="- ", attributes=plain),
        Run(text="a", attributes=style.bold(BASE)),
        Run(text="\n- ", attributes=plain),
        Run(text="b", attributes=style.italic(BASE)),
    ]


def test_ordered_list():
    buf = style_markdown("1. `x`\n2. y")
    assert buf.text() == "1. x\n2. y"


def test_sample_document(sample_md):
    buf = style_markdown(sample_md)
    assert "*" not in buf.text()
    assert "`" not in buf.text()
    assert buf.text().startswith("Heading\nThis is bold text, and this is italic.\ntext struck\n")


def test_idempotent(sample_md):
    """A second pass over marker-free text changes nothing."""
    buf = style_markdown(sample_md)
    text, runs = buf.text(), buf.runs()
    apply_styles(buf)
    assert buf.text() == text
    assert buf.runs() == runs


@pytest.mark.parametrize("mode", list(MatchMode))
@pytest.mark.parametrize("md", ["*_word_*", "**__a__**", "_*word_*", "*_word*_", "~~*a*~~"])
def test_idempotent_on_nested_markers(md, mode):
    """Markers left by the first pass are content and survive later passes."""
    buf = style_markdown(md, mode=mode)
    text, runs = buf.text(), buf.runs()
    apply_styles(buf, mode=mode)
    assert buf.text() == text
    assert buf.runs() == runs


def test_aligned_mode_matches_own_delimiter_only(plain):
    """An outer node never consumes the markup of the node it wraps."""
    buf = style_markdown("*_word_*")
    assert buf.runs() == [Run(text="*_word_*", attributes=plain)]


def test_mixed_style_range_is_not_restyled(plain):
    buf = StyledTextBuffer.from_runs([
        Run(text="*word", attributes=style.italic(BASE)),
        Run(text="*", attributes=plain),
    ])
    apply_styles(buf)
    assert buf.text() == "*word*"


def test_code_content_is_not_restyled():
    """Markdown inside inline code survives repeated passes as literal text."""
    buf = style_markdown("`**x**`")
    apply_styles(buf)
    assert buf.runs() == [Run(text="**x**", attributes=style.monospace(BASE))]


def test_existing_styles_survive_pass():
    buf = StyledTextBuffer.from_runs([Run(text="x", attributes=style.bold(BASE))])
    apply_styles(buf)
    assert buf.runs() == [Run(text="x", attributes=style.bold(BASE))]


def test_unmatched_construct_is_skipped(plain):
    """A heading whose literal form is absent leaves the text untouched."""
    buf = style_markdown("# **a**")
    assert buf.runs() == [Run(text="# **a**", attributes=plain)]


def test_aligned_mode_skips_earlier_duplicate(plain):
    """Aligned matching searches only inside the node's own block."""
    buf = style_markdown(FENCED_DUPLICATE, mode=MatchMode.aligned)
    assert buf.text() == "```\n**a**\n```\n\na"
    assert buf.runs()[-1] == Run(text="a", attributes=style.bold(BASE))


def test_legacy_mode_consumes_first_occurrence(plain):
    """Legacy matching takes the first occurrence anywhere in the text."""
    buf = style_markdown(FENCED_DUPLICATE, mode=MatchMode.legacy)
    assert buf.text() == "```\na\n```\n\n**a**"
    assert buf.runs() == [
        Run(text="```\n", attributes=plain),
        Run(text="a", attributes=style.bold(BASE)),
        Run(text="\n```\n\n**a**", attributes=plain),
    ]


def test_mode_accepts_string():
    assert style_markdown("**a**", mode="legacy").text() == "a"


def test_base_size_is_threaded():
    buf = style_markdown("# T\n**b**", base_size=24)
    runs = buf.runs()
    assert runs[0].attributes.size == 34
    assert runs[-1].attributes == style.bold(24)


def test_buffer_base_size_is_default():
    buf = StyledTextBuffer.from_text("**b**", base_size=30)
    apply_styles(buf)
    assert buf.runs()[0].attributes.size == 30


def test_empty_buffer():
    assert style_markdown("").runs() == []


@pytest.mark.parametrize("md", [
    "**", "[](", "# ", "`", "***", "~~~", "1. ", "- ", "[]()", "#",
    "*a **b** c*", "> **q**", "| a |\n|---|\n| **b** |", "a  \nb", "\\*x\\*", "&amp; **&amp;**",
])
def test_total_over_odd_input(md):
    """Styling never raises on malformed or unmodeled markdown."""
    buf = style_markdown(md)
    assert isinstance(buf.text(), str)


@pytest.mark.parametrize("text,line,expected", [
    ("a\nbc\nd", 0, 0),
    ("a\nbc\nd", 1, 2),
    ("a\nbc\nd", 2, 5),
    ("a\nbc\nd", 3, 6),
])
def test_line_offset(text, line, expected):
    assert line_offset(text, line) == expected


@pytest.mark.parametrize("url,expected", [
    ("https://example.com", True),
    ("ftp://files.example.org/a", True),
    ("/relative/path", False),
    ("", False),
])
def test_is_valid_url(url, expected):
    assert is_valid_url(url) is expected

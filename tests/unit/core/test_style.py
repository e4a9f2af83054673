"""Unit tests for core/style.py"""

import pytest
from pydantic import ValidationError

from mdrich.core import style
from mdrich.core.style import StyleAttributes, decode_heading_level, heading_size, in_heading_range


@pytest.mark.parametrize("level", range(1, 7))
def test_heading_size_roundtrip(level):
    """decode_heading_level inverts heading_size for every level."""
    for base in (12.0, 18.0, 24.0):
        assert decode_heading_level(heading_size(level, base), base) == level


def test_heading_size_scale():
    """Level 1 is the largest size; level 6 equals the base size."""
    assert heading_size(1, 18) == 28
    assert heading_size(6, 18) == 18


@pytest.mark.parametrize("size,expected", [(100.0, 1), (10.0, 6), (30.0, 1)])
def test_decode_heading_level_clamps(size, expected):
    """Sizes outside the encoding clamp to 1..6."""
    assert decode_heading_level(size, 18) == expected


@pytest.mark.parametrize("size,expected", [(18.0, False), (20.0, True), (28.0, True), (30.0, False)])
def test_in_heading_range(size, expected):
    """Only sizes above the base and up to the level-1 size count as headings."""
    assert in_heading_range(size, 18) is expected


def test_heading_requires_bold():
    """A heading level without bold is rejected."""
    with pytest.raises(ValidationError):
        StyleAttributes(heading_level=2)


def test_heading_rejects_monospace():
    with pytest.raises(ValidationError):
        StyleAttributes(heading_level=2, bold=True, monospace=True)


@pytest.mark.parametrize("flag", ["bold", "italic", "strikethrough", "monospace"])
def test_link_is_otherwise_unstyled(flag):
    """A link cannot coexist with any other styling."""
    with pytest.raises(ValidationError):
        StyleAttributes(link="https://example.com", **{flag: True})


def test_heading_level_bounds():
    with pytest.raises(ValidationError):
        style.heading(7)


def test_attributes_are_frozen():
    """Attribute sets are immutable values."""
    attrs = style.bold()
    with pytest.raises(ValidationError):
        attrs.bold = False


def test_attributes_equality_and_hash():
    """Equal attribute sets compare and hash equal."""
    assert style.bold(18) == StyleAttributes(bold=True, size=18.0)
    assert len({style.bold(18), StyleAttributes(bold=True, size=18.0)}) == 1
    assert style.bold(18) != style.bold(24)


def test_factories():
    """Factory helpers produce the documented combinations."""
    h = style.heading(3, 18)
    assert (h.bold, h.heading_level, h.size) == (True, 3, 24)
    assert style.bold_italic().bold and style.bold_italic().italic
    assert style.link("https://a.b").link == "https://a.b"

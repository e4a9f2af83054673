"""Style attribute vocabulary, combination rules, and heading size encoding"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_BASE_SIZE = 18.0
MAX_HEADING_LEVEL = 6
HEADING_STEP = 2.0      # size increment per heading level above level 6


def heading_size(level: int, base_size: float) -> float:
    """Encode a heading level (1-6) as a font size; level 6 equals base_size."""
    return base_size + HEADING_STEP * (MAX_HEADING_LEVEL - level)


def decode_heading_level(size: float, base_size: float) -> int:
    """Inverse of heading_size, clamped to 1..6."""
    level = MAX_HEADING_LEVEL - round((size - base_size) / HEADING_STEP)
    return max(1, min(MAX_HEADING_LEVEL, level))


def in_heading_range(size: float, base_size: float) -> bool:
    """True when size lies strictly above base_size and within the level-1 size."""
    return base_size < size <= heading_size(1, base_size)


class StyleAttributes(BaseModel):
    """Immutable attribute set owned by a single run."""
    model_config = ConfigDict(frozen=True)

    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False
    monospace:     bool = False
    link:          Optional[str] = None
    heading_level: int = Field(default=0, ge=0, le=MAX_HEADING_LEVEL, description="0 = not a heading")
    size:          float = Field(default=DEFAULT_BASE_SIZE, gt=0, description="Point size of the run")

    @model_validator(mode="after")
    def check_combinations(self) -> "StyleAttributes":
        if self.heading_level and (not self.bold or self.monospace):
            raise ValueError("heading runs must be bold and not monospace")
        if self.link is not None and (self.bold or self.italic or self.strikethrough or self.monospace):
            raise ValueError("link runs carry no other styling")
        return self


def plain(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    """Default, unstyled attributes at base_size."""
    return StyleAttributes(size=base_size)


def heading(level: int, base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(bold=True, heading_level=level, size=heading_size(level, base_size))


def bold(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(bold=True, size=base_size)


def italic(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(italic=True, size=base_size)


def bold_italic(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(bold=True, italic=True, size=base_size)


def strikethrough(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(strikethrough=True, size=base_size)


def monospace(base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(monospace=True, size=base_size)


def link(url: str, base_size: float = DEFAULT_BASE_SIZE) -> StyleAttributes:
    return StyleAttributes(link=url, size=base_size)

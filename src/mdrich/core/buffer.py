"""Styled text buffer: an ordered sequence of attribute runs over one string"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from mdrich.core.style import DEFAULT_BASE_SIZE, StyleAttributes, plain


class OutOfBoundsError(IndexError):
    """A range operation addressed text past the end of the buffer."""


class Run(BaseModel):
    """A non-empty span of text sharing one attribute set."""
    model_config = ConfigDict(frozen=True)

    text:       str = Field(..., min_length=1)
    attributes: StyleAttributes = Field(default_factory=StyleAttributes)


def _merge(runs: Iterable[Run]) -> list[Run]:
    """Join neighbouring runs whose attributes are equal."""
    merged: list[Run] = []
    for run in runs:
        if merged and merged[-1].attributes == run.attributes:
            merged[-1] = Run(text=merged[-1].text + run.text, attributes=run.attributes)
        else:
            merged.append(run)
    return merged


class StyledTextBuffer:
    """Mutable rich-text document. Attribute scoping is exactly run boundaries."""

    def __init__(self, runs: Iterable[Run] = (), base_size: float = DEFAULT_BASE_SIZE):
        self.base_size = base_size
        self._runs: list[Run] = _merge(runs)

    @classmethod
    def from_text(cls, text: str, base_size: float = DEFAULT_BASE_SIZE) -> "StyledTextBuffer":
        """Single run of default attributes, or an empty buffer for empty text."""
        runs = [Run(text=text, attributes=plain(base_size))] if text else []
        return cls(runs, base_size=base_size)

    @classmethod
    def from_runs(cls, runs: Iterable[Run], base_size: float = DEFAULT_BASE_SIZE) -> "StyledTextBuffer":
        return cls(runs, base_size=base_size)

    def __len__(self) -> int:
        return sum(len(r.text) for r in self._runs)

    def __repr__(self) -> str:
        return f"StyledTextBuffer(runs={self._runs!r})"

    def text(self) -> str:
        return "".join(r.text for r in self._runs)

    def runs(self) -> list[Run]:
        return list(self._runs)

    def _check_range(self, offset: int, length: int) -> None:
        size = len(self)
        if offset < 0 or length < 0 or offset + length > size:
            raise OutOfBoundsError(f"range [{offset}, {offset + length}) outside buffer of length {size}")

    def _split(self, offset: int, length: int) -> tuple[list[Run], list[Run], list[Run]]:
        """Partition runs into (before, inside, after) with exact cuts at the range edges."""
        end = offset + length
        before: list[Run] = []
        inside: list[Run] = []
        after: list[Run] = []
        pos = 0
        for run in self._runs:
            start, stop = pos, pos + len(run.text)
            pos = stop
            for lo, hi, bucket in ((start, min(stop, offset), before),
                                   (max(start, offset), min(stop, end), inside),
                                   (max(start, end), stop, after)):
                if lo < hi:
                    bucket.append(Run(text=run.text[lo - start:hi - start], attributes=run.attributes))
        return before, inside, after

    def replace_range(self, offset: int, length: int, new_text: str, attributes: StyleAttributes) -> int:
        """Replace [offset, offset+length) with new_text carrying attributes.

        Empty new_text deletes the range. Returns the change in buffer length.
        """
        self._check_range(offset, length)
        before, _, after = self._split(offset, length)
        middle = [Run(text=new_text, attributes=attributes)] if new_text else []
        self._runs = _merge(before + middle + after)
        return len(new_text) - length

    def set_attributes(self, offset: int, length: int, attributes: StyleAttributes) -> None:
        """Re-tag an existing range without changing its text."""
        self._check_range(offset, length)
        before, inside, after = self._split(offset, length)
        retagged = [Run(text=r.text, attributes=attributes) for r in inside]
        self._runs = _merge(before + retagged + after)

    def slice_runs(self, offset: int, length: int) -> list[Run]:
        """Runs covering [offset, offset+length), cut at the range edges."""
        self._check_range(offset, length)
        return self._split(offset, length)[1]

    def attributes_at(self, offset: int) -> StyleAttributes:
        """Attributes of the character at offset; offset == len reads the last character."""
        size = len(self)
        if offset < 0 or offset > size:
            raise OutOfBoundsError(f"offset {offset} outside buffer of length {size}")
        if not self._runs:
            return plain(self.base_size)
        pos = 0
        for run in self._runs:
            pos += len(run.text)
            if offset < pos:
                return run.attributes
        return self._runs[-1].attributes

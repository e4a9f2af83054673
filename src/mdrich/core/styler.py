"""Forward styling: strip markdown markers from a buffer and tag runs with attributes

Each Document node is located in the buffer's current text by its literal
markdown form, replaced by its bare text, and the new run is tagged. Nodes
whose literal form cannot be found are skipped.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from mdrich.core import style
from mdrich.core.buffer import StyledTextBuffer
from mdrich.core.document import (
    Block,
    Emphasis,
    Heading,
    Inline,
    InlineCode,
    Link,
    OrderedList,
    Paragraph,
    Strikethrough,
    Strong,
    UnorderedList,
)
from mdrich.core.parse import parse
from mdrich.core.style import StyleAttributes


logger = logging.getLogger(__name__)

_URL = TypeAdapter(AnyUrl)


class MatchMode(str, Enum):
    aligned = "aligned"     # search forward from the end of the previous match
    legacy = "legacy"       # first occurrence anywhere in the current text


def is_valid_url(destination: str) -> bool:
    """True when destination parses as an absolute URL."""
    try:
        _URL.validate_python(destination)
    except ValidationError:
        return False
    return True


def line_offset(text: str, line: int) -> int:
    """Offset of the first character of line (0-based); len(text) past the last line."""
    pos = 0
    for _ in range(line):
        nl = text.find("\n", pos)
        if nl == -1:
            return len(text)
        pos = nl + 1
    return pos


class _StylePass:
    """One walk over a Document, mutating the buffer in place."""

    def __init__(self, buffer: StyledTextBuffer, base_size: float, mode: MatchMode):
        self.buffer = buffer
        self.base_size = base_size
        self.mode = mode
        self.cursor = 0
        self.window: Optional[tuple[int, int]] = None   # source lines of the current block
        self.applied = 0
        self.skipped = 0

    def _locate(self, node) -> Optional[tuple[int, str]]:
        text = self.buffer.text()
        if self.mode == MatchMode.legacy:
            for literal in node.literals:
                pos = text.find(literal)
                if pos != -1:
                    return pos, literal
            return None
        start, end = self._bounds(text)
        pos = text.find(node.source_literal, start, end)
        return (pos, node.source_literal) if pos != -1 else None

    def _bounds(self, text: str) -> tuple[int, int]:
        """Search window: from the cursor, clipped to the current block's lines."""
        start, end = self.cursor, len(text)
        if self.window is not None:
            first, last = self.window
            start = max(start, line_offset(text, first))
            end = line_offset(text, last)
        return start, end

    def _protected(self, pos: int, length: int) -> bool:
        """True when the range holds inline code or mixes differently styled runs.

        Code text is literal. A range spanning several styles holds markers
        left over from an earlier pass as content, so it is not re-styled.
        """
        runs = self.buffer.slice_runs(pos, length)
        return any(r.attributes.monospace for r in runs) or len(runs) > 1

    def _apply(self, node, replacement: str, attributes: StyleAttributes) -> None:
        """Replace the node's literal with replacement carrying attributes."""
        match = self._locate(node) if replacement else None
        if match is not None and self._protected(match[0], len(match[1])):
            match = None
        if match is None:
            logger.debug("Skipping unmatched %s %r", type(node).__name__, node.source_literal)
            self.skipped += 1
            return
        pos, literal = match
        self.buffer.replace_range(pos, len(literal), replacement, attributes)
        self.cursor = pos + len(replacement)
        self.applied += 1

    def block(self, block: Block) -> None:
        if isinstance(block, (Heading, Paragraph)):
            self.window = block.lines
        if isinstance(block, Heading):
            self._apply(block, block.plain_text, style.heading(block.level, self.base_size))
        elif isinstance(block, Paragraph):
            for inline in block.children:
                self.inline(inline)
        elif isinstance(block, (UnorderedList, OrderedList)):
            for item in block.items:
                for child in item.children:
                    self.block(child)

    def inline(self, node: Inline) -> None:
        size = self.base_size
        if isinstance(node, Strong):
            self._apply(node, node.plain_text, style.bold(size))
        elif isinstance(node, Emphasis):
            strong = node.strong_child
            if strong is not None:
                self._apply(node, strong.plain_text, style.bold_italic(size))
            else:
                self._apply(node, node.plain_text, style.italic(size))
        elif isinstance(node, Link):
            if is_valid_url(node.destination):
                attributes = style.link(node.destination, size)
            else:
                logger.debug("Link destination %r is not a valid URL; leaving text unlinked", node.destination)
                attributes = style.plain(size)
            self._apply(node, node.plain_text, attributes)
        elif isinstance(node, InlineCode):
            self._apply(node, node.code, style.monospace(size))
        elif isinstance(node, Strikethrough):
            self._apply(node, node.plain_text, style.strikethrough(size))


def apply_styles(
    buffer: StyledTextBuffer,
    base_size: float = None,
    mode: MatchMode = MatchMode.aligned,
    parser_config: str = 'gfm-like',
    ) -> StyledTextBuffer:
    """Re-parse the buffer's text and restyle it in place. Idempotent on marker-free text."""
    size = buffer.base_size if base_size is None else base_size
    document = parse(buffer.text(), parser_config)
    styler = _StylePass(buffer, size, MatchMode(mode))
    for block in document.children:
        styler.block(block)
    logger.debug("Style pass: %d applied, %d skipped", styler.applied, styler.skipped)
    return buffer


def style_markdown(
    text: str,
    base_size: float = style.DEFAULT_BASE_SIZE,
    mode: MatchMode = MatchMode.aligned,
    parser_config: str = 'gfm-like',
    ) -> StyledTextBuffer:
    """Build a styled buffer straight from markdown source."""
    buffer = StyledTextBuffer.from_text(text, base_size)
    return apply_styles(buffer, base_size, mode, parser_config)

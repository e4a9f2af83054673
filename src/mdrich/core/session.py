"""Editing session: keystroke handling, restyling, and cursor re-anchoring"""

import logging

from mdrich.config import Settings
from mdrich.core import style
from mdrich.core.buffer import StyledTextBuffer
from mdrich.core.continuation import on_line_break
from mdrich.core.emit import to_markdown
from mdrich.core.styler import apply_styles


logger = logging.getLogger(__name__)


class EditorSession:
    """Owns one buffer and runs continuation -> restyle on every edit."""

    def __init__(self, text: str = "", settings: Settings = None):
        self.settings = settings or Settings()
        self.buffer = StyledTextBuffer.from_text(text, self.settings.base_size)
        self.cursor = len(self.buffer)
        self.restyle()

    @property
    def text(self) -> str:
        return self.buffer.text()

    def restyle(self) -> None:
        """Full restyle pass; the cursor shifts left by the number of characters removed."""
        before = len(self.buffer)
        apply_styles(
            self.buffer,
            self.settings.base_size,
            self.settings.match_mode,
            self.settings.parser_config,
        )
        removed = before - len(self.buffer)
        self.cursor = max(0, min(self.cursor - removed, len(self.buffer)))

    def type_text(self, offset: int, text: str, replace_length: int = 0) -> int:
        """Apply a keystroke replacing [offset, offset+replace_length) with text.

        Returns the cursor offset after restyling.
        """
        if text == "\n":
            cont = on_line_break(self.buffer.text(), offset)
            logger.debug("Line break at %d inserts %r", offset, cont.inserted_text)
            inserted, attrs = cont.inserted_text, style.plain(self.settings.base_size)
        elif text == " ":
            inserted, attrs = text, style.plain(self.settings.base_size)
        else:
            inserted, attrs = text, self._typing_attributes(offset)
        self.buffer.replace_range(offset, replace_length, inserted, attrs)
        self.cursor = offset + len(inserted)
        self.restyle()
        return self.cursor

    def _typing_attributes(self, offset: int):
        """Attributes inherited from the character before offset."""
        if offset == 0 or not len(self.buffer):
            return style.plain(self.settings.base_size)
        return self.buffer.attributes_at(offset - 1)

    def markdown(self) -> str:
        return to_markdown(self.buffer, self.settings.base_size)

"""List marker continuation on line-break edits"""

import re

from pydantic import BaseModel


ORDERED_MARKER_RE = re.compile(r'^([0-9]+)\.\s')
UNORDERED_MARKER = '-'


class Continuation(BaseModel):
    """Text to insert at the break and where the cursor lands afterwards."""
    inserted_text: str
    new_cursor_offset: int


def current_line(text: str, offset: int) -> str:
    """The line containing offset, without its terminator."""
    start = text.rfind('\n', 0, offset) + 1
    end = text.find('\n', offset)
    return text[start:] if end == -1 else text[start:end]


def continuation_marker(line: str) -> str:
    """Text to insert after a line break following line."""
    trimmed = line.strip(' \t')
    if trimmed.startswith(UNORDERED_MARKER):
        return '\n- '
    m = ORDERED_MARKER_RE.match(trimmed)
    if m:
        try:
            return f'\n{int(m.group(1)) + 1}. '
        except ValueError:
            pass
    return '\n'


def on_line_break(full_text: str, break_offset: int) -> Continuation:
    """Decide what a newline keystroke at break_offset inserts. Never raises."""
    offset = max(0, min(break_offset, len(full_text)))
    inserted = continuation_marker(current_line(full_text, offset))
    return Continuation(inserted_text=inserted, new_cursor_offset=offset + len(inserted))

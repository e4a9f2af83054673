"""Reverse emission: rebuild markdown source from styled runs

Precedence lives in EMIT_RULES; the first rule whose predicate accepts a run's
attributes decides how that run is wrapped.
"""

from typing import Callable, Iterable, NamedTuple, Union

from mdrich.core.buffer import Run, StyledTextBuffer
from mdrich.core.style import (
    DEFAULT_BASE_SIZE,
    StyleAttributes,
    decode_heading_level,
    heading_size,
    in_heading_range,
)


class EmitRule(NamedTuple):
    name: str
    matches: Callable[[StyleAttributes, float], bool]
    emit: Callable[[str, StyleAttributes, float], str]


def _is_heading(attrs: StyleAttributes, base_size: float) -> bool:
    return attrs.bold and (attrs.heading_level > 0 or in_heading_range(attrs.size, base_size))


def _emit_heading(text: str, attrs: StyleAttributes, base_size: float) -> str:
    if base_size <= attrs.size <= heading_size(1, base_size):
        level = decode_heading_level(attrs.size, base_size)
    else:
        level = attrs.heading_level
    return "#" * level + " " + text


def _wrap(marker: str) -> Callable[[str, StyleAttributes, float], str]:
    return lambda text, attrs, base_size: f"{marker}{text}{marker}"


EMIT_RULES: tuple[EmitRule, ...] = (
    EmitRule("heading",       _is_heading,                                   _emit_heading),
    EmitRule("bold_italic",   lambda a, _: a.bold and a.italic,              _wrap("***")),
    EmitRule("bold",          lambda a, _: a.bold,                           _wrap("**")),
    EmitRule("italic",        lambda a, _: a.italic,                         _wrap("_")),
    EmitRule("link",          lambda a, _: a.link is not None,               lambda t, a, _: f"[{t}]({a.link})"),
    EmitRule("strikethrough", lambda a, _: a.strikethrough,                  _wrap("~~")),
    EmitRule("monospace",     lambda a, _: a.monospace,                      _wrap("`")),
    EmitRule("plain",         lambda a, _: True,                             lambda t, a, _: t),
)


def rule_for(attrs: StyleAttributes, base_size: float = DEFAULT_BASE_SIZE) -> EmitRule:
    """First rule in precedence order that accepts attrs."""
    return next(rule for rule in EMIT_RULES if rule.matches(attrs, base_size))


def emit_run(run: Run, base_size: float = DEFAULT_BASE_SIZE) -> str:
    return rule_for(run.attributes, base_size).emit(run.text, run.attributes, base_size)


def to_markdown(source: Union[StyledTextBuffer, Iterable[Run]], base_size: float = None) -> str:
    """Markdown for a buffer (or bare runs). base_size must match the one used to style it."""
    if isinstance(source, StyledTextBuffer):
        size = source.base_size if base_size is None else base_size
        runs = source.runs()
    else:
        size = DEFAULT_BASE_SIZE if base_size is None else base_size
        runs = list(source)
    return "".join(emit_run(run, size) for run in runs)

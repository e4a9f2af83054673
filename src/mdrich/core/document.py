"""Document tree consumed by the forward styler; built fresh on every pass"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class Text:
    content: str

    @property
    def plain_text(self) -> str:
        return self.content


@dataclass
class InlineCode:
    code: str
    delimiter: str = "`"

    @property
    def plain_text(self) -> str:
        return self.code

    @property
    def source_literal(self) -> str:
        return f"{self.delimiter}{self.code}{self.delimiter}"

    @property
    def literals(self) -> tuple[str, ...]:
        return (self.source_literal,)


@dataclass
class _Container:
    children: list["Inline"] = field(default_factory=list)
    delimiter: str = ""

    @property
    def plain_text(self) -> str:
        return "".join(c.plain_text for c in self.children)

    @property
    def source_literal(self) -> str:
        """plain_text wrapped in the delimiter the parser actually saw."""
        return f"{self.delimiter}{self.plain_text}{self.delimiter}"


@dataclass
class Strong(_Container):
    delimiter: str = "**"

    @property
    def literals(self) -> tuple[str, ...]:
        x = self.plain_text
        return (f"**{x}**", f"__{x}__")


@dataclass
class Emphasis(_Container):
    delimiter: str = "_"

    @property
    def strong_child(self) -> Optional[Strong]:
        """The wrapped Strong node for ***x*** / ___x___, else None."""
        if len(self.children) == 1 and isinstance(self.children[0], Strong):
            return self.children[0]
        return None

    @property
    def source_literal(self) -> str:
        strong = self.strong_child
        if strong is None:
            return super().source_literal
        return f"{self.delimiter}{strong.source_literal}{self.delimiter}"

    @property
    def literals(self) -> tuple[str, ...]:
        strong = self.strong_child
        if strong is not None:
            x = strong.plain_text
            return (f"***{x}***", f"___{x}___")
        x = self.plain_text
        return (f"_{x}_", f"*{x}*")


@dataclass
class Strikethrough(_Container):
    delimiter: str = "~~"

    @property
    def literals(self) -> tuple[str, ...]:
        x = self.plain_text
        return (f"~~{x}~~", f"~{x}~")


@dataclass
class Link(_Container):
    destination: str = ""

    @property
    def source_literal(self) -> str:
        return f"[{self.plain_text}]({self.destination})"

    @property
    def literals(self) -> tuple[str, ...]:
        return (self.source_literal,)


Inline = Union[Text, InlineCode, Strong, Emphasis, Strikethrough, Link]


@dataclass
class Heading:
    level: int
    children: list[Inline] = field(default_factory=list)
    lines: Optional[tuple[int, int]] = None     # source line range [start, end)

    @property
    def plain_text(self) -> str:
        return "".join(c.plain_text for c in self.children)

    @property
    def source_literal(self) -> str:
        return "#" * self.level + " " + self.plain_text

    @property
    def literals(self) -> tuple[str, ...]:
        return (self.source_literal,)


@dataclass
class Paragraph:
    children: list[Inline] = field(default_factory=list)
    lines: Optional[tuple[int, int]] = None


@dataclass
class ListItem:
    children: list["Block"] = field(default_factory=list)


@dataclass
class UnorderedList:
    items: list[ListItem] = field(default_factory=list)


@dataclass
class OrderedList:
    items: list[ListItem] = field(default_factory=list)


Block = Union[Heading, Paragraph, UnorderedList, OrderedList]


@dataclass
class Document:
    """Root of the tree; unsupported markdown blocks are absent."""
    children: list[Block] = field(default_factory=list)

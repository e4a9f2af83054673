"""markdown-it tokenization and conversion of the token stream into a Document"""

from functools import lru_cache
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdrich.core.document import (
    Block,
    Document,
    Emphasis,
    Heading,
    Inline,
    InlineCode,
    Link,
    ListItem,
    OrderedList,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    UnorderedList,
)


# inline open-token type -> (node class, matching close-token type)
INLINE_CONTAINERS = {
    'strong_open': (Strong, 'strong_close'),
    'em_open':     (Emphasis, 'em_close'),
    's_open':      (Strikethrough, 's_close'),
    'link_open':   (Link, 'link_close'),
}


@lru_cache(maxsize=8)
def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_level(token: Token) -> int:
    """Extract heading level (1-6) from a heading_open token tag."""
    if token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return 1


def _lines(token: Token) -> Optional[tuple[int, int]]:
    """Source line range [start, end) recorded by markdown-it, if any."""
    return (token.map[0], token.map[1]) if token.map else None


def _skip_container(tokens: list[Token], i: int) -> int:
    """Return the index just past the close token matching the open token at i."""
    opener = tokens[i]
    for j in range(i + 1, len(tokens)):
        if tokens[j].nesting == -1 and tokens[j].level == opener.level:
            return j + 1
    return len(tokens)


def _inlines(tokens: list[Token], i: int, parser: MarkdownIt, stop: str = None) -> tuple[list[Inline], int]:
    """Convert inline child tokens from i up to the stop close token."""
    nodes: list[Inline] = []
    while i < len(tokens):
        tok = tokens[i]
        if stop and tok.type == stop:
            return nodes, i + 1
        if tok.type in INLINE_CONTAINERS:
            node_cls, close = INLINE_CONTAINERS[tok.type]
            children, i = _inlines(tokens, i + 1, parser, close)
            if node_cls is Link:
                href = tok.attrGet('href') or ''
                nodes.append(Link(children=children, destination=parser.normalizeLinkText(str(href))))
            else:
                nodes.append(node_cls(children=children, delimiter=tok.markup))
            continue
        if tok.type == 'code_inline':
            nodes.append(InlineCode(code=tok.content, delimiter=tok.markup or '`'))
        elif tok.type in ('softbreak', 'hardbreak'):
            nodes.append(Text('\n'))
        elif tok.type in ('text', 'html_inline', 'image'):
            nodes.append(Text(tok.content))
        i += 1
    return nodes, i


def _inline_children(tokens: list[Token], i: int, parser: MarkdownIt) -> list[Inline]:
    """Inline nodes of the `inline` token expected at index i."""
    if i < len(tokens) and tokens[i].type == 'inline':
        nodes, _ = _inlines(tokens[i].children or [], 0, parser)
        return nodes
    return []


def _blocks(tokens: list[Token], i: int, parser: MarkdownIt, stop: str = None) -> tuple[list[Block], int]:
    """Convert block tokens from i up to the stop close token into Block nodes."""
    blocks: list[Block] = []
    while i < len(tokens):
        tok = tokens[i]
        if stop and tok.type == stop:
            return blocks, i + 1
        if tok.type == 'heading_open':
            blocks.append(Heading(
                level=_heading_level(tok),
                children=_inline_children(tokens, i + 1, parser),
                lines=_lines(tok),
            ))
            i = _skip_container(tokens, i)
        elif tok.type == 'paragraph_open':
            blocks.append(Paragraph(children=_inline_children(tokens, i + 1, parser), lines=_lines(tok)))
            i = _skip_container(tokens, i)
        elif tok.type in ('bullet_list_open', 'ordered_list_open'):
            close = tok.type.replace('_open', '_close')
            items, i = _list_items(tokens, i + 1, parser, close)
            if tok.type == 'ordered_list_open':
                blocks.append(OrderedList(items=items))
            else:
                blocks.append(UnorderedList(items=items))
        elif tok.nesting == 1:
            # blockquote, table and other unmodeled containers
            i = _skip_container(tokens, i)
        else:
            i += 1
    return blocks, i


def _list_items(tokens: list[Token], i: int, parser: MarkdownIt, stop: str) -> tuple[list[ListItem], int]:
    items: list[ListItem] = []
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == stop:
            return items, i + 1
        if tok.type == 'list_item_open':
            children, i = _blocks(tokens, i + 1, parser, 'list_item_close')
            items.append(ListItem(children=children))
        else:
            i += 1
    return items, i


def parse(text: str, parser_config: str = 'gfm-like') -> Document:
    """Parse markdown text into a Document. Total: never raises on content."""
    parser = _make_parser(parser_config)
    blocks, _ = _blocks(parser.parse(text), 0, parser)
    return Document(children=blocks)

"""
Shared helpers for ``:::`` block components

Locating ``:::kind ... :::`` blocks outside fenced code, substituting
rendered HTML for them, and parsing ``{key="value" flag}`` attribute
lists.
"""

import html
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterator, List, Optional, Pattern, Union

from ..models.context import ProcessingContext
from .fences import fenceRanges_find, position_inRanges

BLOCK_CLOSER = re.compile(r"^:::[ \t]*$", re.MULTILINE)
BLOCK_LINE = re.compile(r"^:::[ \t]*(?P<kind>[\w-]*)[^\n]*$", re.MULTILINE)

_ATTRIBUTE = re.compile(
    r"""([\w-]+)"""
    r"""(?:\s*=\s*(?:"([^"]*)"|“([^”]*)”|'([^']*)'|([^\s,"'}]+)))?"""
)


@dataclass(frozen=True)
class BlockMatch:
    """
    A closed ``:::`` block.

    ``opener`` is the match of the opening line (newline included),
    ``body`` the text between the opening and closing lines, and
    ``start``/``end`` the span to replace.
    """
    opener: re.Match
    body: str
    start: int
    end: int


def blocks_find(markdown: str, opener: Pattern[str]) -> Iterator[BlockMatch]:
    """
    Yield every closed block whose opening line matches opener.

    Openers inside fenced code are ignored, and so are ``:::`` lines
    that sit inside a fence within the block body. Blocks nest: every
    ``:::name`` line in the body opens a level that the next ``:::``
    closes, so a block ends at the closer matching its own opener. A
    block with no closer is skipped, leaving its text untouched.

    Args:
        markdown: Raw Markdown
        opener: MULTILINE pattern matching the opening line including its
            trailing newline
    """
    fences = fenceRanges_find(markdown)
    position = 0
    while True:
        match = opener.search(markdown, position)
        if match is None:
            return
        if position_inRanges(match.start(), fences):
            position = match.end()
            continue
        closer = _closer_find(markdown, match.end(), fences)
        if closer is None:
            position = match.end()
            continue
        body = markdown[match.end():closer.start()]
        if body.endswith("\n"):
            body = body[:-1]
        yield BlockMatch(opener=match, body=body, start=match.start(), end=closer.end())
        position = closer.end()


def _closer_find(markdown: str, position: int, fences: List[range]) -> Optional[re.Match]:
    depth = 0
    for line in BLOCK_LINE.finditer(markdown, position):
        if position_inRanges(line.start(), fences):
            continue
        if line.group("kind"):
            depth += 1
        elif BLOCK_CLOSER.fullmatch(line.group(0)):
            if depth == 0:
                return line
            depth -= 1
    return None


def blockRanges_find(markdown: str, opener: Pattern[str]) -> List[range]:
    """Spans of every closed block matching opener"""
    return [range(block.start, block.end) for block in blocks_find(markdown, opener)]


def blocks_substitute(
    markdown: str,
    opener: Pattern[str],
    render: Callable[[BlockMatch], Optional[str]],
    context: ProcessingContext,
) -> str:
    """
    Replace blocks with stashed HTML.

    Blocks of the same kind nested in a body are replaced first, so the
    outer render sees them as stash tokens.

    Args:
        markdown: Raw Markdown
        opener: Opening-line pattern
        render: Returns HTML for a block, or None to leave it unconverted
        context: Receives the rendered HTML in its raw stash

    Returns:
        Markdown with each rendered block replaced by a stash token
    """
    pieces: List[str] = []
    cursor = 0
    for block in blocks_find(markdown, opener):
        inner = blocks_substitute(block.body, opener, render, context)
        if inner != block.body:
            block = replace(block, body=inner)
        rendered = render(block)
        if rendered is None:
            continue
        pieces.append(markdown[cursor:block.start])
        pieces.append(context.raw_block(rendered))
        cursor = block.end
    pieces.append(markdown[cursor:])
    return "".join(pieces)


def attributes_parse(text: Optional[str]) -> Dict[str, Union[str, bool]]:
    """
    Parse an attribute list such as ``title="Guide" icon=book open``.

    Values may be double, single or curly quoted, or bare words; a key
    without a value is a flag set to True.

    Example:
        >>> attributes_parse('title="Hello World", open')
        {'title': 'Hello World', 'open': True}
    """
    attributes: Dict[str, Union[str, bool]] = {}
    if not text:
        return attributes
    for match in _ATTRIBUTE.finditer(text):
        key = match.group(1)
        values = [value for value in match.groups()[1:] if value is not None]
        attributes[key] = values[0] if values else True
    return attributes


def attribute_get(attributes: Dict[str, Union[str, bool]], key: str) -> Optional[str]:
    """String attribute value, None when absent or given as a bare flag"""
    value = attributes.get(key)
    return value if isinstance(value, str) and value else None


def text_escape(text: str) -> str:
    """Escape text for HTML element content"""
    return html.escape(text, quote=False)


def attribute_escape(text: str) -> str:
    """Escape text for a double-quoted HTML attribute"""
    return html.escape(text, quote=True)

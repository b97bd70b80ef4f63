"""
Fenced code block scanner

Locates fenced code blocks in raw Markdown so that every preprocessor can
leave custom syntax shown inside example fences untouched.

A fence opens on a line starting (column 0) with three or more backticks
or tildes, optionally followed by an info string, and closes on the next
line made of exactly the same fence string plus optional trailing blanks.
Only one fence is open at a time; an opener without a closer is not a
fence at all.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

_OPENER = re.compile(r"^(?P<marker>`{3,}|~{3,})(?P<info>[^\n]*)$", re.MULTILINE)


@dataclass(frozen=True)
class Fence:
    """
    One closed fence.

    Offsets index the scanned text: ``start`` is the first fence
    character, ``body_start`` the character after the opener's newline
    (startMarkerEnd), ``body_end`` the first character of the closing line
    (endMarkerStart) and ``end`` the character after the closing marker
    and its trailing blanks.
    """
    start: int
    body_start: int
    body_end: int
    end: int
    marker: str
    info: str
    body: str

    @property
    def language(self) -> Optional[str]:
        words = self.info.split()
        return words[0] if words else None

    @property
    def span(self) -> range:
        return range(self.start, self.end)


def closer_find(text: str, marker: str, position: int) -> Optional[re.Match[str]]:
    """Find the closing line for a fence opened with marker"""
    closer = re.compile(rf"^{re.escape(marker)}[ \t]*$", re.MULTILINE)
    return closer.search(text, position)


def fences_find(text: str) -> List[Fence]:
    """
    Find every closed fence in text, in document order.

    Args:
        text: Raw Markdown

    Returns:
        List of Fence records
    """
    fences: List[Fence] = []
    position = 0
    while True:
        opener = _OPENER.search(text, position)
        if opener is None:
            break
        marker = opener.group("marker")
        info = opener.group("info")
        if marker.startswith("`") and "`" in info:
            # Inline code such as ```x``` is not a fence opener
            position = opener.end() + 1
            continue
        body_start = opener.end() + 1
        if body_start > len(text):
            break
        closer = closer_find(text, marker, body_start)
        if closer is None:
            position = body_start
            continue
        fences.append(Fence(
            start=opener.start(),
            body_start=body_start,
            body_end=closer.start(),
            end=closer.end(),
            marker=marker,
            info=info.strip(),
            body=text[body_start:closer.start()],
        ))
        position = closer.end()
    return fences


def fenceRanges_find(text: str) -> List[range]:
    """Half-open spans of every fence in text"""
    return [fence.span for fence in fences_find(text)]


def position_inRanges(position: int, ranges: Sequence[range]) -> bool:
    """True if position falls inside any of ranges"""
    return any(position in span for span in ranges)


def fence_isInside(text: str, position: int) -> bool:
    """
    Check whether a position of text lies inside a fenced code block.

    Args:
        text: Raw Markdown
        position: Character offset into text

    Returns:
        True if the offset belongs to a fence (markers included)
    """
    return position_inRanges(position, fenceRanges_find(text))

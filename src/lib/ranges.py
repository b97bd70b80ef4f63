"""
Rendered container range finder

Locates already-finalized containers (tab groups, code groups) in
rendered HTML by counting nested ``<div>``/``</div>`` tags, so later
postprocessors can leave them alone.
"""

import re
from typing import List

TABS_CLASS = "docdown-tabs"
CODE_GROUP_CLASS = "docdown-code-group"

_DIV_TAG = re.compile(r"<div\b|</div\s*>")


def container_end(html: str, start: int) -> int:
    """
    Offset just past the ``</div>`` balancing the ``<div`` at start.

    Returns -1 when the container is never closed.
    """
    depth = 0
    for tag in _DIV_TAG.finditer(html, start):
        if tag.group(0).startswith("</"):
            depth -= 1
            if depth == 0:
                return tag.end()
        else:
            depth += 1
    return -1


def ranges_find(html: str, css_class: str = TABS_CLASS) -> List[range]:
    """
    Find every rendered container with the given class.

    Args:
        html: Rendered HTML
        css_class: Container class, matched as the first class of a
            ``<div class="...">`` opening tag

    Returns:
        Non-overlapping half-open ranges in document order; each slice
        starts with the opening tag and ends with its balanced ``</div>``

    Example:
        >>> html = '<p>x</p><div class="docdown-tabs"><div></div></div>'
        >>> [html[r.start:r.stop] for r in ranges_find(html)]
        ['<div class="docdown-tabs"><div></div></div>']
    """
    opener = re.compile(r'<div class="' + re.escape(css_class) + r'[\s"]')
    ranges: List[range] = []
    position = 0
    while True:
        match = opener.search(html, position)
        if match is None:
            break
        end = container_end(html, match.start())
        if end == -1:
            break
        ranges.append(range(match.start(), end))
        position = end
    return ranges


def containerRanges_find(html: str) -> List[range]:
    """Ranges of every self-rendering container (tabs and code groups)"""
    found = ranges_find(html, TABS_CLASS) + ranges_find(html, CODE_GROUP_CLASS)
    found.sort(key=lambda span: span.start)
    merged: List[range] = []
    for span in found:
        if merged and span.start < merged[-1].stop:
            continue
        merged.append(span)
    return merged

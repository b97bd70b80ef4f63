"""
Code annotation preprocessor

    ```py
    app = App(debug=True)  # (1)
    app.run()
    ```

    1. Debug mode reloads on change.
       Never enable it in production.

A numbered marker at the end of a code line refers to the item with the
same number in the ordered list directly after the fence. The list is
consumed, the markers are stripped, and every item becomes an Annotation
on the recorded features of that fence; the code-block postprocessor
renders them as popover buttons.

Only fences that already carry a block id are annotated, so tab and
code-group containers, which render their own code, are skipped until
their own pass.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.codeblock import Annotation
from ..models.context import ProcessingContext
from .converter import html_convert
from .features import LINKED_INFO
from .fences import Fence, fences_find
from .log import LOG
from .patterns import ANNOTATION_PATTERN

LIST_START = re.compile(r"\A(?:[ \t]*\n)*(?=\d+\.[ \t]+)")
LIST_ITEM = re.compile(r"^(\d+)\.[ \t]+(.*)$")
CONTINUATION = re.compile(r"^[ \t]{2,}(\S.*)$")


@dataclass
class AnnotationList:
    """Ordered list found after a fence: item texts and the end offset"""
    items: Dict[int, str]
    end: int


def list_parse(text: str) -> Optional[AnnotationList]:
    """
    Parse the ordered list at the start of text.

    Blank lines inside the list are kept, indented lines continue the
    current item, and the first other line ends the list.

    Returns:
        AnnotationList with offsets relative to text, or None when text
        does not start with an ordered list
    """
    start = LIST_START.match(text)
    if start is None:
        return None
    items: Dict[int, str] = {}
    number: Optional[int] = None
    current: List[str] = []
    position = start.end()
    for line in text[start.end():].splitlines(keepends=True):
        stripped = line.rstrip("\n")
        item = LIST_ITEM.match(stripped)
        continuation = CONTINUATION.match(stripped)
        if item:
            if number is not None:
                items[number] = "\n".join(current).strip()
            number = int(item.group(1))
            current = [item.group(2).rstrip()]
        elif number is not None and continuation:
            current.append(continuation.group(1).rstrip())
        elif number is not None and not stripped.strip():
            current.append("")
        else:
            break
        position += len(line)
    if number is not None:
        items[number] = "\n".join(current).strip()
    if not items:
        return None
    return AnnotationList(items=items, end=position)


def markers_find(body: str) -> Dict[int, int]:
    """Source line -> annotation number for every marked line of body"""
    markers: Dict[int, int] = {}
    for index, line in enumerate(body.split("\n"), start=1):
        match = ANNOTATION_PATTERN.search(line)
        if match:
            markers[index] = int(next(group for group in match.groups() if group))
    return markers


def markers_remove(body: str) -> str:
    return "\n".join(ANNOTATION_PATTERN.sub("", line) for line in body.split("\n"))


def fence_blockId(fence: Fence) -> Optional[int]:
    linked = LINKED_INFO.match(fence.info)
    return int(linked.group("id")) if linked else None


def annotations_attach(markdown: str, context: ProcessingContext) -> str:
    """
    Move annotation lists of linked fences into their recorded features.

    Returns:
        markdown with the markers and the consumed lists removed
    """
    pieces: List[str] = []
    cursor = 0
    for fence in fences_find(markdown):
        if fence.start < cursor:
            continue
        block_id = fence_blockId(fence)
        if block_id is None or block_id >= len(context.code_blocks):
            continue
        markers = markers_find(fence.body)
        if not markers:
            continue
        found = list_parse(markdown[fence.end:])
        if found is None:
            continue

        features = context.code_blocks[block_id]
        for line, number in markers.items():
            if number in found.items:
                features.annotations[line] = Annotation(
                    number=number, content=html_convert(found.items[number]).strip()
                )
        LOG(f"Annotated code block {block_id}: {sorted(features.annotations)}", level=3)

        pieces.append(markdown[cursor:fence.body_start])
        pieces.append(markers_remove(fence.body))
        pieces.append(markdown[fence.body_end:fence.end])
        pieces.append("\n")
        cursor = fence.end + found.end
    pieces.append(markdown[cursor:])
    return "".join(pieces)


def annotations_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Attach ``# (1)`` annotations to recorded code blocks"""
    if not context.code_blocks:
        return markdown
    return annotations_attach(markdown, context)

"""
Per-line wrapping of highlighted code

The highlighter emits one stream of HTML for a whole block. To decorate
individual lines (highlight, diff, focus, error, warning) that stream is
split into lines first. A ``<span>`` whose content runs across a newline
is closed at the end of the line and reopened, with the same attributes,
at the start of the next one, so every produced line is balanced.
Annotated lines end with a numbered popover button.

Highlighted lines are matched by display number (counting from the
block's start line); diff, focus, error and warning lines by source
number (always counting from 1).
"""

import re
import html as htmllib
from typing import Dict, Iterable, List, Optional

from ..models.codeblock import Annotation, CodeBlockFeatures, DiffKind

LINE_CLASS = "docdown-code-line"

_TOKEN = re.compile(r"(<[^>]+>|\n)")
_CODE = re.compile(r"(<pre[^>]*><code[^>]*>)(.*?)(</code></pre>)", re.DOTALL)


def lines_parse(html: str) -> List[str]:
    """
    Split highlighter HTML into balanced per-line fragments.

    Args:
        html: Inner HTML of a ``<code>`` element

    Returns:
        One fragment per source line, newline not included. Nested open
        spans are reopened outermost first. A trailing empty line is
        dropped; empty input yields a single empty line.

    Example:
        >>> lines_parse('<span class="c1">/* a\\nb */</span>\\n')
        ['<span class="c1">/* a</span>', '<span class="c1">b */</span>']
    """
    lines: List[str] = []
    current: List[str] = []
    open_tags: List[str] = []

    for token in _TOKEN.split(html):
        if not token:
            continue
        if token == "\n":
            current.extend("</span>" for _ in open_tags)
            lines.append("".join(current))
            current = list(open_tags)
        elif token.startswith("<span"):
            open_tags.append(token)
            current.append(token)
        elif token.startswith("</span"):
            if open_tags:
                open_tags.pop()
            current.append(token)
        else:
            current.append(token)

    tail = "".join(current)
    if tail != "".join(open_tags):
        current.extend("</span>" for _ in open_tags)
        lines.append("".join(current))

    return lines or [""]


def lineClasses_build(
    source_line: int,
    display_line: int,
    highlights: Iterable[int],
    diff_lines: Dict[int, DiffKind],
    focus_lines: Iterable[int],
    error_lines: Iterable[int] = (),
    warning_lines: Iterable[int] = (),
) -> List[str]:
    """CSS classes for one line"""
    classes = [LINE_CLASS]
    if display_line in highlights:
        classes.append(f"{LINE_CLASS}--highlighted")
    kind = diff_lines.get(source_line)
    if kind is DiffKind.ADDITION:
        classes.append(f"{LINE_CLASS}--diff-add")
    elif kind is DiffKind.DELETION:
        classes.append(f"{LINE_CLASS}--diff-remove")
    if source_line in focus_lines:
        classes.append(f"{LINE_CLASS}--focus")
    if source_line in error_lines:
        classes.append(f"{LINE_CLASS}--error")
    if source_line in warning_lines:
        classes.append(f"{LINE_CLASS}--warning")
    return classes


def annotation_render(annotation: Annotation) -> str:
    """Popover trigger for one annotated line"""
    content = htmllib.escape(annotation.content, quote=True)
    return (
        f'<button class="docdown-code-annotation" type="button" '
        f'aria-label="Annotation {annotation.number}" data-annotation-content="{content}">'
        f'{annotation.number}</button>'
    )


def codeBlock_wrap(
    html: str,
    highlights: Iterable[int] = (),
    diff_lines: Optional[Dict[int, DiffKind]] = None,
    focus_lines: Iterable[int] = (),
    start_line: int = 1,
    error_lines: Iterable[int] = (),
    warning_lines: Iterable[int] = (),
    annotations: Optional[Dict[int, Annotation]] = None,
) -> str:
    """
    Wrap every line inside the block's ``<pre><code>`` in a line span.

    Args:
        html: Highlighted block (anything containing ``<pre><code>``)
        highlights: Display line numbers to highlight
        diff_lines: Source line -> DiffKind
        focus_lines: Source lines in focus
        start_line: Display number of the first line
        error_lines: Source lines marked error
        warning_lines: Source lines marked warning
        annotations: Source line -> Annotation, rendered after the code

    Returns:
        html with the code content replaced by wrapped lines; unchanged
        if no ``<pre><code>`` element is present
    """
    highlights = set(highlights)
    diff_lines = diff_lines or {}
    focus_lines = set(focus_lines)
    error_lines = set(error_lines)
    warning_lines = set(warning_lines)
    annotations = annotations or {}

    def content_wrap(match: re.Match[str]) -> str:
        wrapped = []
        for index, line in enumerate(lines_parse(match.group(2))):
            classes = lineClasses_build(
                source_line=index + 1,
                display_line=start_line + index,
                highlights=highlights,
                diff_lines=diff_lines,
                focus_lines=focus_lines,
                error_lines=error_lines,
                warning_lines=warning_lines,
            )
            annotation = annotations.get(index + 1)
            if annotation is not None:
                line += annotation_render(annotation)
            wrapped.append(f'<span class="{" ".join(classes)}">{line}\n</span>')
        return match.group(1) + "".join(wrapped) + match.group(3)

    return _CODE.sub(content_wrap, html, count=1)


def features_wrap(html: str, features: CodeBlockFeatures) -> str:
    """codeBlock_wrap driven by a CodeBlockFeatures record"""
    return codeBlock_wrap(
        html,
        highlights=features.highlights,
        diff_lines=features.diff_lines,
        focus_lines=features.focus_lines,
        start_line=features.start_line,
        error_lines=features.error_lines,
        warning_lines=features.warning_lines,
        annotations=features.annotations,
    )

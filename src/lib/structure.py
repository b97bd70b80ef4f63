"""
Document structure postprocessors

custom-anchor (25)       ``## Title {#id}`` sets the heading id
heading-anchor (30)      h2-h6 with an id get a trailing ``#`` link
table-of-contents (35)   h2-h4 collected into ``context.toc``
table-wrapper (100)      tables wrapped for horizontal scrolling

All four work on a BeautifulSoup tree, so headings and tables written as
raw HTML in the Markdown are handled like converted ones.
"""

import html as htmllib
import re
from typing import List

from bs4 import BeautifulSoup, Tag

from ..models.components import TocEntry
from ..models.context import ProcessingContext
from .markup import attribute_escape

HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
ANCHORED_HEADINGS = HEADINGS[1:]
TOC_HEADINGS = ["h2", "h3", "h4"]
ANCHOR_CLASS = "heading-anchor"
CUSTOM_ID = re.compile(r"\s*\{#([\w-]+)\}\s*$")


def anchor_render(anchor_id: str) -> str:
    return (
        f'<a href="#{attribute_escape(anchor_id)}" class="{ANCHOR_CLASS}" '
        'aria-label="Link to this section">#</a>'
    )


def customAnchors_postprocess(html: str, context: ProcessingContext) -> str:
    """Move a trailing ``{#id}`` out of heading text into the heading id"""
    if "{#" not in html:
        return html
    soup = BeautifulSoup(html, "html.parser")
    for heading in soup.find_all(HEADINGS):
        strings = heading.find_all(string=True)
        if not strings:
            continue
        last = strings[-1]
        match = CUSTOM_ID.search(last)
        if match is None:
            continue
        heading["id"] = match.group(1)
        last.replace_with(last[:match.start()])
    return str(soup)


def headingAnchors_postprocess(html: str, context: ProcessingContext) -> str:
    """Append an anchor link to every h2-h6 that has an id"""
    soup = BeautifulSoup(html, "html.parser")
    headings = [
        heading for heading in soup.find_all(ANCHORED_HEADINGS)
        if heading.get("id") and not heading.find("a", class_=ANCHOR_CLASS)
    ]
    if not headings:
        return html
    for heading in headings:
        heading.append(BeautifulSoup(anchor_render(heading["id"]), "html.parser"))
    return str(soup)


def headingText_extract(heading: Tag) -> str:
    """Plain heading text without the anchor link"""
    parts = [
        str(text) for text in heading.find_all(string=True)
        if text.find_parent("a", class_=ANCHOR_CLASS) is None
    ]
    return " ".join("".join(parts).split())


def tocHierarchy_build(entries: List[TocEntry]) -> List[TocEntry]:
    """
    Nest flat headings by level.

    A heading becomes a child of the nearest preceding heading with a
    lower level.
    """
    root: List[TocEntry] = []
    stack: List[TocEntry] = []
    for entry in entries:
        while stack and stack[-1].level >= entry.level:
            stack.pop()
        if stack:
            stack[-1].children.append(entry)
        else:
            root.append(entry)
        stack.append(entry)
    return root


def toc_postprocess(html: str, context: ProcessingContext) -> str:
    """Collect h2-h4 headings into context.toc; html is returned unchanged"""
    soup = BeautifulSoup(html, "html.parser")
    entries = [
        TocEntry(level=int(heading.name[1]), id=heading["id"], text=headingText_extract(heading))
        for heading in soup.find_all(TOC_HEADINGS)
        if heading.get("id")
    ]
    context.toc = tocHierarchy_build(entries)
    return html


def tables_postprocess(html: str, context: ProcessingContext) -> str:
    """Wrap every table in ``<div class="table-wrapper">``"""
    soup = BeautifulSoup(html, "html.parser")
    tables = [
        table for table in soup.find_all("table")
        if "table-wrapper" not in (table.parent.get("class") or [])
    ]
    if not tables:
        return html
    for table in tables:
        table.wrap(soup.new_tag("div", attrs={"class": "table-wrapper"}))
    return str(soup)


def toc_render(entries: List[TocEntry]) -> str:
    """Nested ``<ul>`` for a table of contents, empty string when empty"""
    if not entries:
        return ""
    items = "".join(
        f'<li><a href="#{attribute_escape(entry.id)}">{htmllib.escape(entry.text)}</a>'
        f'{toc_render(entry.children)}</li>'
        for entry in entries
    )
    return f"<ul>{items}</ul>"

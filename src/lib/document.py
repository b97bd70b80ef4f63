"""
Document rendering

A Document is one Markdown page: optional YAML front matter followed by
the body. Rendering runs the registry's preprocessors, converts, and runs
the postprocessors, all against a fresh ProcessingContext.

Example:
    >>> doc = Document("---\\ntitle: Hello\\n---\\n:::note\\nHi\\n:::\\n")
    >>> doc.title
    'Hello'
    >>> 'role="note"' in doc.html
    True
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..models.components import TocEntry
from ..models.context import ProcessingContext
from .converter import html_convert
from .fences import fenceRanges_find, position_inRanges
from .log import LOG
from .registry import ComponentRegistry

FRONTMATTER = re.compile(r"\A---[ \t]*\n(.*?\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)
FIRST_H1 = re.compile(r"^#[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)


def frontmatter_split(raw: str) -> tuple[Dict[str, Any], str]:
    """
    Separate YAML front matter from the Markdown body.

    Malformed or non-mapping front matter yields an empty dict; the body
    is still stripped of it.

    Returns:
        (front matter, body)
    """
    match = FRONTMATTER.match(raw)
    if match is None:
        return {}, raw
    body = raw[match.end():]
    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as error:
        LOG(f"Ignoring malformed front matter: {error}", level=1)
        return {}, body
    return (data if isinstance(data, dict) else {}), body


class Document:
    """
    One renderable Markdown page

    Attributes:
        raw: Source text including front matter
        frontmatter: Parsed front matter mapping
        content: Markdown body without front matter
        registry: Processor chain used for rendering
        variables: Site-wide ``{{ name }}`` values
        context: ProcessingContext of the latest render
    """

    def __init__(
        self,
        raw: str,
        registry: Optional[ComponentRegistry] = None,
        docs_root: Optional[Path] = None,
        current_file: Optional[Path] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.raw = raw
        self.frontmatter, self.content = frontmatter_split(raw)
        self.registry = registry if registry is not None else ComponentRegistry()
        self.docs_root = docs_root
        self.current_file = current_file
        self.variables = variables or {}
        self.context: Optional[ProcessingContext] = None
        self._html: Optional[str] = None

    def context_make(self) -> ProcessingContext:
        """Fresh context; front matter variables override site variables"""
        config = dict(self.frontmatter)
        page_variables = config.get("variables")
        if self.variables or isinstance(page_variables, dict):
            merged = dict(self.variables)
            if isinstance(page_variables, dict):
                merged.update(page_variables)
            config["variables"] = merged
        return ProcessingContext(
            docs_root=self.docs_root,
            current_file=self.current_file,
            config=config,
        )

    def render(self) -> str:
        """
        Run the full pipeline on the body.

        Returns:
            HTML fragment; a fresh context is used on every call
        """
        context = self.context_make()
        markdown = self.registry.preprocessors_run(self.content, context)
        html = html_convert(markdown, context)
        html = self.registry.postprocessors_run(html, context)
        self.context = context
        self._html = html
        return html

    @property
    def html(self) -> str:
        """Rendered HTML, computed on first access"""
        if self._html is None:
            self.render()
        return self._html or ""

    @property
    def title(self) -> Optional[str]:
        """Front matter title, else the first level-one heading"""
        title = self.frontmatter.get("title")
        if title:
            return str(title)
        fences = fenceRanges_find(self.content)
        for match in FIRST_H1.finditer(self.content):
            if not position_inRanges(match.start(), fences):
                return match.group(1)
        return None

    @property
    def description(self) -> Optional[str]:
        description = self.frontmatter.get("description")
        return str(description) if description else None

    @property
    def toc(self) -> List[TocEntry]:
        """Table of contents of the rendered page"""
        if self.context is None:
            self.render()
        return self.context.toc if self.context else []

"""
Markdown include preprocessor

    <!--@include: shared/install.md-->
    <!-- @include: ./partials/note.md -->

Paths starting with ``./`` or ``../`` are relative to the file holding
the directive; every other path is relative to the docs root. Only Markdown
files can be included (use ``<<< @/path`` snippet imports for code), and
included files may include others.

A failure (missing file, non-Markdown file, a file that includes itself
through the chain) is rendered as a warning alert in place of the
directive.
"""

import re
from pathlib import Path
from typing import Optional, Tuple

from ..models.context import ProcessingContext
from .fences import fenceRanges_find, position_inRanges
from .log import LOG

INCLUDE_DIRECTIVE = re.compile(r"<!--\s*@include:\s*(\S+?)\s*-->")

MARKDOWN_SUFFIXES = (".md", ".markdown", ".mdx")


class IncludeError(Exception):
    """Raised internally when an include cannot be resolved"""


def include_resolve(path: str, root: Path, base: Optional[Path]) -> Path:
    """
    Locate an included file.

    Args:
        path: Path as written in the directive
        root: Resolved docs root
        base: File the directive appears in, None for an unnamed page

    Raises:
        IncludeError: For a missing file, a relative path without a
            base file, or a path outside the docs root
    """
    if path.startswith(("./", "../")):
        if base is None:
            raise IncludeError("File not found")
        target = (base.parent / path).resolve()
    else:
        target = (root / path).resolve()
    if not target.is_relative_to(root):
        raise IncludeError("Path escapes docs root")
    if not target.is_file():
        raise IncludeError("File not found")
    return target


def includeError_render(path: str, message: str) -> str:
    return f"> [!WARNING]\n> Include error: {path} - {message}\n"


def includes_expand(
    markdown: str, context: ProcessingContext, chain: Tuple[Path, ...] = ()
) -> str:
    """
    Expand include directives outside fences, recursively.

    Args:
        markdown: Markdown to expand
        context: Supplies the docs root
        chain: Files currently being expanded, outermost first; the
            last one anchors relative paths
    """
    if "@include" not in markdown:
        return markdown
    fences = fenceRanges_find(markdown)
    root = context.docsRoot_get().resolve()

    def directive_replace(match: re.Match[str]) -> str:
        if position_inRanges(match.start(), fences):
            return match.group(0)
        path = match.group(1)
        try:
            if not path.lower().endswith(MARKDOWN_SUFFIXES):
                raise IncludeError("Use code snippets for non-markdown files")
            target = include_resolve(path, root, chain[-1] if chain else None)
            if target in chain:
                raise IncludeError("Circular include detected")
            content = target.read_text(encoding="utf-8").strip()
        except (IncludeError, OSError, UnicodeDecodeError) as error:
            LOG(f"Error including {path}: {error}", level=1)
            return includeError_render(path, str(error))
        LOG(f"Included {path}", level=2)
        return includes_expand(content, context, chain + (target,))

    return INCLUDE_DIRECTIVE.sub(directive_replace, markdown)


def includes_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Replace ``<!--@include: path-->`` directives with file contents"""
    current: Optional[Path] = context.current_file
    chain = (current.resolve(),) if current is not None else ()
    return includes_expand(markdown, context, chain)

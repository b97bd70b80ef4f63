"""
Snippet import preprocessor

    <<< @/examples/app.js
    <<< @/examples/app.js#setup
    <<< @/examples/app.js{5-12}
    <<< @/examples/app.js{#setup}
    <<< @/examples/app.js{1,3 typescript}

Paths are relative to the docs root. A ``{...}`` suffix holds, space
separated: a line range ``N`` or ``N-M`` (1-based, inclusive), a region
``#name``, highlighted lines ``a,b`` or a language override. Regions are
delimited by ``#region name`` / ``#endregion`` comments, which are not
part of the extracted text.

Failures (missing file, missing region, path outside the docs root) are
rendered inline as an error code block and never stop the document.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..models.context import ProcessingContext
from .fences import fenceRanges_find, position_inRanges
from .log import LOG

IMPORT_DIRECTIVE = re.compile(
    r"^<<<[ \t]+@/([^\s{#]+)(?:#([\w-]+))?(?:\{([^}\n]*)\})?[ \t]*$", re.MULTILINE
)

EXTENSION_MAP: Dict[str, str] = {
    "rb": "ruby",
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "yml": "yaml",
    "md": "markdown",
    "sh": "bash",
    "zsh": "bash",
    "jsx": "jsx",
    "tsx": "tsx",
}


class SnippetError(Exception):
    """Raised internally when an import cannot be resolved"""


@dataclass
class ImportOptions:
    line_range: Optional[str] = None
    region: Optional[str] = None
    highlights: Optional[str] = None
    language: Optional[str] = None


def options_parse(text: Optional[str]) -> ImportOptions:
    """Classify the space separated parts of a ``{...}`` suffix"""
    options = ImportOptions()
    for part in (text or "").split():
        if re.fullmatch(r"\d+(?:-\d+)?", part):
            options.line_range = part
        elif re.fullmatch(r"#[\w-]+", part):
            options.region = part[1:]
        elif re.fullmatch(r"[\d,-]+", part):
            options.highlights = part
        else:
            options.language = part
    return options


def region_extract(content: str, name: str) -> str:
    """
    Extract the lines between ``#region name`` and its ``#endregion``.

    Raises:
        SnippetError: When the region start or end is missing
    """
    start_marker = re.compile(
        rf"^[ \t]*(?://|#|/\*|<!--)[ \t]*#region[ \t]+{re.escape(name)}\b"
    )
    end_marker = re.compile(
        rf"^[ \t]*(?://|#|/\*|\*/|<!--)[ \t]*#endregion(?:[ \t]+{re.escape(name)}\b|[ \t]*(?:\*/|-->)?[ \t]*$)"
    )
    lines = content.splitlines(keepends=True)
    for start, line in enumerate(lines):
        if start_marker.match(line):
            break
    else:
        raise SnippetError(f"Region '{name}' not found")
    for end in range(start + 1, len(lines)):
        if end_marker.match(lines[end]):
            return "".join(lines[start + 1:end])
    raise SnippetError(f"Region '{name}' not found")


def lineRange_extract(content: str, spec: str) -> str:
    """Lines first..last (1-based, inclusive) of content"""
    first, _, last = spec.partition("-")
    start = int(first)
    stop = int(last) if last else start
    lines = content.splitlines(keepends=True)
    return "".join(lines[max(start - 1, 0):stop])


def language_detect(path: str) -> str:
    extension = Path(path).suffix.lstrip(".")
    return EXTENSION_MAP.get(extension, extension)


def path_resolve(docs_root: Path, relative: str) -> Path:
    """
    Join relative onto docs_root, refusing paths that leave it.

    Raises:
        SnippetError: For traversal outside the root or a missing file
    """
    root = docs_root.resolve()
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise SnippetError("Path escapes docs root")
    if not target.is_file():
        raise SnippetError("File not found")
    return target


def snippet_build(path: str, region: Optional[str], suffix: Optional[str], docs_root: Path) -> str:
    """
    Build the fenced block for one import directive.

    Raises:
        SnippetError: When the file or region cannot be resolved
    """
    options = options_parse(suffix)
    region = region or options.region
    content = path_resolve(docs_root, path).read_text(encoding="utf-8")
    if region:
        content = region_extract(content, region)
    if options.line_range:
        content = lineRange_extract(content, options.line_range)

    language = options.language or language_detect(path)
    meta = f" [{Path(path).name}]"
    if options.highlights:
        meta += f" {{{options.highlights}}}"
    return f"```{language}{meta}\n{content.rstrip(chr(10))}\n```"


def snippets_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Replace ``<<< @/path`` directives outside fences with code blocks"""
    if "<<<" not in markdown:
        return markdown
    fences = fenceRanges_find(markdown)
    docs_root = context.docsRoot_get()

    def directive_replace(match: re.Match[str]) -> str:
        if position_inRanges(match.start(), fences):
            return match.group(0)
        path = match.group(1)
        try:
            block = snippet_build(path, match.group(2), match.group(3), docs_root)
        except (SnippetError, OSError, UnicodeDecodeError) as error:
            LOG(f"Error importing {path}: {error}", level=1)
            return f"```\nError importing {path}: {error}\n```"
        LOG(f"Imported snippet {path}", level=2)
        return block

    return IMPORT_DIRECTIVE.sub(directive_replace, markdown)

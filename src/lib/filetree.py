"""
File tree processor

    ```filetree
    docs/
      index.md
      guide/ # user guide
        setup.md *
    pyproject.toml
    ```

Indentation nests entries, a trailing ``/`` marks a folder, `` # text``
adds a comment and a trailing `` *`` highlights the entry. The fence is
replaced by a nested list with folder and file icons.
"""

from typing import List

from ..models.components import FileTreeEntry
from ..models.context import ProcessingContext
from .fences import fences_find
from .icons import phosphor_render
from .markup import text_escape

FILETREE_LANGUAGE = "filetree"


def entry_parse(line: str) -> FileTreeEntry:
    """Parse one non-blank tree line"""
    indent = len(line) - len(line.lstrip(" "))
    name = line.strip()
    highlighted = name.endswith(" *")
    if highlighted:
        name = name[:-2].rstrip()
    comment = None
    if " # " in name:
        name, comment = name.split(" # ", 1)
    is_folder = name.endswith("/")
    if is_folder:
        name = name.rstrip("/")
    return FileTreeEntry(
        name=name, is_folder=is_folder, highlighted=highlighted, comment=comment, indent=indent
    )


def tree_parse(body: str) -> List[FileTreeEntry]:
    """
    Build the entry hierarchy of a tree body.

    An entry is a child of the nearest preceding folder with a smaller
    indent; files never take children.
    """
    roots: List[FileTreeEntry] = []
    stack: List[FileTreeEntry] = []
    for line in body.split("\n"):
        if not line.strip():
            continue
        entry = entry_parse(line)
        while stack and stack[-1].indent >= entry.indent:
            stack.pop()
        if stack:
            stack[-1].children.append(entry)
        else:
            roots.append(entry)
        if entry.is_folder:
            stack.append(entry)
    return roots


def entry_render(entry: FileTreeEntry) -> str:
    kind = "folder" if entry.is_folder else "file"
    classes = ["docdown-filetree__item", f"docdown-filetree__item--{kind}"]
    if entry.highlighted:
        classes.append("docdown-filetree__item--highlighted")
    icon = phosphor_render("folder-open" if entry.is_folder else "file-text")
    comment = (
        f'<span class="docdown-filetree__comment">{text_escape(entry.comment)}</span>'
        if entry.comment else ""
    )
    return (
        f'<li class="{" ".join(classes)}">'
        '<span class="docdown-filetree__entry">'
        f'{icon}<span class="docdown-filetree__name">{text_escape(entry.name)}</span>{comment}'
        '</span>'
        f'{tree_render(entry.children)}'
        '</li>'
    )


def tree_render(entries: List[FileTreeEntry]) -> str:
    """Nested ``<ul>`` for entries, empty string when there are none"""
    if not entries:
        return ""
    return f'<ul class="docdown-filetree__list">{"".join(entry_render(entry) for entry in entries)}</ul>'


def fileTrees_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Replace ``filetree`` fences with rendered trees"""
    if FILETREE_LANGUAGE not in markdown:
        return markdown
    pieces: List[str] = []
    cursor = 0
    for fence in fences_find(markdown):
        if fence.language != FILETREE_LANGUAGE:
            continue
        tree_html = f'<div class="docdown-filetree">{tree_render(tree_parse(fence.body))}</div>'
        pieces.append(markdown[cursor:fence.start])
        pieces.append(context.raw_block(tree_html))
        cursor = fence.end
    pieces.append(markdown[cursor:])
    return "".join(pieces)

"""
Markdown to HTML conversion

Wraps Python-Markdown configured for docdown: GFM-style tables and
strikethrough, fenced code highlighted by Pygments through codehilite,
and heading ids for anchors and the table of contents. Stashed raw HTML
is restored after conversion.

Fenced code renders as:

    <div class="highlight"><pre><code class="language-js">...</code></pre></div>

A fence whose opener reads ``{ .js docdown_block=3 }`` after the backticks
carries the index of its recorded features through codehilite to the
formatter, which writes it out as ``data-block="3"`` on the ``<code>``
element.
"""

from typing import Any, Dict, Optional

import markdown
from pygments.formatters import HtmlFormatter

from ..models.context import ProcessingContext


BLOCK_OPTION = "docdown_block"


class CodeHtmlFormatter(HtmlFormatter):
    """
    HtmlFormatter emitting ``<pre><code class="language-X">``.

    codehilite passes the ``language-`` prefixed lexer alias as lang_str,
    plus every option of the fence attribute list; BLOCK_OPTION becomes the
    ``data-block`` attribute. The ``<div class="highlight">`` wrapper comes
    from the base class.
    """

    def __init__(self, lang_str: str = "", **options: Any) -> None:
        self.block_id = options.pop(BLOCK_OPTION, None)
        super().__init__(**options)
        self.lang_str = lang_str

    def wrap(self, source):
        block = f' data-block="{self.block_id}"' if self.block_id is not None else ""
        yield 0, f'<pre><code class="{self.lang_str}"{block}>'
        yield from source
        yield 0, '</code></pre>'


EXTENSIONS = [
    "tables",
    "fenced_code",
    "codehilite",
    "toc",
    "pymdownx.tilde",
]

EXTENSION_CONFIGS: Dict[str, Dict[str, Any]] = {
    "codehilite": {
        "css_class": "highlight",
        "guess_lang": False,
        "pygments_formatter": CodeHtmlFormatter,
    },
    "pymdownx.tilde": {
        "subscript": False,
    },
}


def markdown_make() -> markdown.Markdown:
    """Fresh converter instance (Markdown objects carry per-document state)"""
    return markdown.Markdown(extensions=EXTENSIONS, extension_configs=EXTENSION_CONFIGS)


def html_convert(text: str, context: Optional[ProcessingContext] = None) -> str:
    """
    Convert Markdown to HTML and restore stashed fragments.

    Args:
        text: Markdown (front matter already removed)
        context: Context holding the raw HTML stash

    Returns:
        HTML fragment; empty string for blank input
    """
    if not text.strip():
        return ""
    html = markdown_make().convert(text)
    if context is not None:
        html = context.raw_restore(html)
    return html

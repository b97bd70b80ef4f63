"""
Accordion processor

    :::details{title="Advanced options" open}
    Hidden **markdown**
    :::

Renders a native ``<details>`` element; the title defaults to "Details".
"""

import re

from ..models.context import ProcessingContext
from .codeblocks import markdown_render
from .icons import phosphor_render
from .markup import BlockMatch, attribute_get, attributes_parse, blocks_substitute, text_escape

DETAILS_OPENER = re.compile(r"^:::details(?:\{([^}\n]*)\})?[ \t]*\n", re.MULTILINE)
DEFAULT_TITLE = "Details"


def accordion_render(title: str, content_html: str, is_open: bool = False) -> str:
    open_attribute = " open" if is_open else ""
    return (
        f'<details class="docdown-accordion"{open_attribute}>'
        '<summary class="docdown-accordion__summary">'
        f'<span class="docdown-accordion__title">{text_escape(title)}</span>'
        f'<span class="docdown-accordion__chevron">{phosphor_render("caret-down")}</span>'
        '</summary>'
        f'<div class="docdown-accordion__content">{content_html}</div>'
        '</details>'
    )


def accordions_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::details`` blocks outside fenced code"""

    def block_render(block: BlockMatch) -> str:
        attributes = attributes_parse(block.opener.group(1))
        title = attribute_get(attributes, "title") or DEFAULT_TITLE
        is_open = attributes.get("open") not in (None, False, "false")
        return accordion_render(title, markdown_render(block.body.strip(), context), is_open)

    return blocks_substitute(markdown, DETAILS_OPENER, block_render, context)

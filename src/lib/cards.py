"""
Cards processor

    :::cards
    ::card{title="Quick start" icon="rocket" href="/start"}
    Up and running in five minutes.
    ::

    ::card{title="Reference"}
    Every option explained.
    ::
    :::

A card with ``href`` renders as a link; without an ``icon`` the icon
wrapper is omitted; a missing title defaults to "Card".
"""

import re
from typing import Optional

from ..models.context import ProcessingContext
from .codeblocks import markdown_render
from .icons import phosphor_render
from .markup import (
    BlockMatch,
    attribute_escape,
    attribute_get,
    attributes_parse,
    blocks_substitute,
    text_escape,
)

CARDS_OPENER = re.compile(r"^:::[ \t]*cards[ \t]*\n", re.MULTILINE)
CARD = re.compile(r"^::card\{([^}\n]*)\}[ \t]*\n(.*?)^::[ \t]*$", re.MULTILINE | re.DOTALL)
DEFAULT_TITLE = "Card"


def card_render(
    title: Optional[str], content_html: str, icon: Optional[str] = None, href: Optional[str] = None
) -> str:
    """
    Render one card.

    Args:
        title: Card title, "Card" when None
        content_html: Rendered body
        icon: Phosphor icon name, or None for no icon wrapper
        href: Link target; makes the card an ``<a>`` element
    """
    icon_html = f'<div class="docdown-card__icon">{phosphor_render(icon)}</div>' if icon else ""
    inner = (
        f'{icon_html}'
        f'<div class="docdown-card__title">{text_escape(title or DEFAULT_TITLE)}</div>'
        f'<div class="docdown-card__content">{content_html}</div>'
    )
    if href:
        return f'<a class="docdown-card docdown-card--link" href="{attribute_escape(href)}">{inner}</a>'
    return f'<div class="docdown-card">{inner}</div>'


def cards_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::cards`` grids outside fenced code"""

    def block_render(block: BlockMatch) -> Optional[str]:
        cards = []
        for match in CARD.finditer(block.body):
            attributes = attributes_parse(match.group(1))
            cards.append(card_render(
                title=attribute_get(attributes, "title"),
                content_html=markdown_render(match.group(2).strip(), context),
                icon=attribute_get(attributes, "icon"),
                href=attribute_get(attributes, "href"),
            ))
        if not cards:
            return None
        return f'<div class="docdown-cards">{"".join(cards)}</div>'

    return blocks_substitute(markdown, CARDS_OPENER, block_render, context)

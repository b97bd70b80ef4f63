"""
Callout processor

Container syntax (preprocess):

    :::warning Optional title
    Body **markdown**
    :::

GitHub alert syntax (postprocess, blockquotes only exist after conversion):

    > [!CAUTION]
    > Body

Only the five known types are recognized; any other ``:::word`` block is
left exactly as written.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional

from bs4 import BeautifulSoup

from ..models.context import ProcessingContext
from .codeblocks import markdown_render
from .icons import phosphor_render
from .markup import BlockMatch, blocks_substitute, text_escape


@dataclass(frozen=True)
class CalloutType:
    title: str
    icon: str
    role: str


CALLOUT_TYPES: Dict[str, CalloutType] = {
    "note": CalloutType(title="Note", icon="info", role="note"),
    "tip": CalloutType(title="Tip", icon="lightbulb", role="note"),
    "important": CalloutType(title="Important", icon="warning-circle", role="note"),
    "warning": CalloutType(title="Warning", icon="warning", role="alert"),
    "danger": CalloutType(title="Danger", icon="siren", role="alert"),
}

GITHUB_ALERT_TYPES: Dict[str, str] = {
    "NOTE": "note",
    "TIP": "tip",
    "IMPORTANT": "important",
    "WARNING": "warning",
    "CAUTION": "danger",
}

CALLOUT_OPENER = re.compile(
    r"^:::[ \t]*(" + "|".join(CALLOUT_TYPES) + r")(?:[ \t]+([^\n]+?))?[ \t]*\n",
    re.MULTILINE | re.IGNORECASE,
)

GITHUB_ALERT = re.compile(
    r"\s*\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\][ \t]*(?:<br\s*/?>)?\s*(.*)\Z",
    re.DOTALL,
)


def callout_render(kind: str, title: Optional[str], content_html: str) -> str:
    """
    Render one callout.

    Args:
        kind: Known callout type (lower case)
        title: Custom title, or None for the type's default
        content_html: Rendered body

    Returns:
        ``<div class="docdown-callout docdown-callout--{kind}">`` element
    """
    spec = CALLOUT_TYPES[kind]
    title = title.strip() if title and title.strip() else spec.title
    return (
        f'<div class="docdown-callout docdown-callout--{kind}" role="{spec.role}">'
        f'<div class="docdown-callout__icon">{phosphor_render(spec.icon)}</div>'
        '<div class="docdown-callout__body">'
        f'<div class="docdown-callout__title">{text_escape(title)}</div>'
        f'<div class="docdown-callout__content">{content_html}</div>'
        '</div>'
        '</div>'
    )


def callouts_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::type`` callouts outside fenced code"""
    if ":::" not in markdown:
        return markdown

    def block_render(block: BlockMatch) -> str:
        kind = block.opener.group(1).lower()
        content_html = markdown_render(block.body.strip(), context)
        return callout_render(kind, block.opener.group(2), content_html)

    return blocks_substitute(markdown, CALLOUT_OPENER, block_render, context)


def githubAlerts_postprocess(html: str, context: ProcessingContext) -> str:
    """Turn ``> [!NOTE]`` style blockquotes into callouts"""
    if "[!" not in html:
        return html
    soup = BeautifulSoup(html, "html.parser")
    for blockquote in soup.find_all("blockquote"):
        first = blockquote.find("p")
        if first is None or first.parent is not blockquote or first.find_previous_sibling():
            continue
        marker = GITHUB_ALERT.match(first.decode_contents())
        if marker is None:
            continue
        kind = GITHUB_ALERT_TYPES[marker.group(1)]
        lead = marker.group(2).strip()
        rest = "".join(str(node) for node in first.find_next_siblings())
        content_html = (f"<p>{lead}</p>" if lead else "") + rest
        blockquote.replace_with(
            BeautifulSoup(callout_render(kind, None, content_html), "html.parser")
        )
    return str(soup)

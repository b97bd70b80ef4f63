"""
Badge processor

    Status :badge[Stable]{type=success}

Runs on rendered HTML. Badges inside ``<code>``/``<pre>`` stay literal;
an unknown or missing type falls back to ``default``.
"""

import re

from ..models.context import ProcessingContext
from .icons import protected_split
from .markup import attribute_get, attributes_parse

BADGE = re.compile(r":badge\[([^\]]*)\](?:\{([^}]*)\})?")
VALID_TYPES = ("default", "success", "warning", "danger")


def badge_render(text: str, kind: str = "default") -> str:
    """Badge element; text must already be HTML-safe"""
    if kind not in VALID_TYPES:
        kind = "default"
    return f'<span class="docdown-badge docdown-badge--{kind}">{text}</span>'


def badges_postprocess(html: str, context: ProcessingContext) -> str:
    """Render ``:badge[text]{type=...}`` outside code"""
    def badge_replace(match: re.Match[str]) -> str:
        attributes = attributes_parse(match.group(2))
        return badge_render(match.group(1), attribute_get(attributes, "type") or "default")

    return "".join(
        chunk if protected else BADGE.sub(badge_replace, chunk)
        for protected, chunk in protected_split(html)
    )

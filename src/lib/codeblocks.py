"""
Code block processors

Two halves of one feature, joined through the ProcessingContext:

    code-block-features (preprocess, priority 5)
        Extract info-string options and ``[!code ...]`` markers from every
        top-level fence and record them in ``context.code_blocks``. The
        cleaned fence carries the index of its record as a block id.

    code-block (postprocess, priority 20)
        Find each rendered ``<div class="highlight">`` whose code carries a
        block id, look up the recorded features by that id and render the
        finished block: title header with icon, optional line-number
        gutter, per-line state classes and a copy button.

Pairing goes by id, never by position. Tab groups and code groups render
their own code blocks (see ``markdown_render``) and are skipped by both
halves.
"""

import html as htmllib
import re
from typing import Optional, Sequence

from ..config import appsettings
from ..models.codeblock import CodeBlockFeatures
from ..models.context import ProcessingContext
from .annotations import annotations_attach
from .converter import html_convert
from .features import features_extract, features_summarize
from .fences import position_inRanges
from .icons import icon_render, phosphor_render, titleIcon_detect
from .linewrap import features_wrap
from .log import LOG
from .markup import attribute_escape, blockRanges_find, text_escape
from .ranges import containerRanges_find

HIGHLIGHT_BLOCK = re.compile(r'<div class="highlight">(.*?)</div>', re.DOTALL)
BLOCK_ATTRIBUTE = re.compile(r' data-block="(\d+)"')

# Markdown-level containers whose fences are rendered by their own processor
SELF_RENDERING_OPENER = re.compile(
    r"^:::[ \t]*(?:tabs|code-group)[ \t]*\n", re.MULTILINE
)


def codeText_extract(highlighted: str) -> str:
    """Plain source text of a highlighted block"""
    text = re.sub(r"<[^>]+>", "", highlighted)
    return htmllib.unescape(text).strip("\n")


def lineNumbers_enabled(features: CodeBlockFeatures) -> bool:
    if features.line_numbers is not None:
        return features.line_numbers.enabled
    return appsettings.line_numbers_default


def lineNumbers_render(code_text: str, start: int) -> str:
    count = max(len(code_text.split("\n")), 1)
    numbers = "".join(f"<span>{number}</span>" for number in range(start, start + count))
    return f'<div class="docdown-code-block__line-numbers" aria-hidden="true">{numbers}</div>'


def codeBlock_render(
    highlighted: str, features: Optional[CodeBlockFeatures] = None, show_title: bool = True
) -> str:
    """
    Render the finished HTML for one code block.

    Args:
        highlighted: Converter output ``<div class="highlight">...</div>``
        features: Recorded features for the block, or None
        show_title: Render the title header (code groups show the title
            as a tab label instead)

    Returns:
        ``<div class="docdown-code-block">`` element
    """
    features = features or CodeBlockFeatures()
    code_text = codeText_extract(highlighted)
    body = features_wrap(highlighted, features) if features.lineWrapping_needed() else highlighted

    classes = ["docdown-code-block"]
    gutter = ""
    if lineNumbers_enabled(features):
        classes.append("docdown-code-block--line-numbers")
        gutter = lineNumbers_render(code_text, features.start_line)
    if features.focus_lines:
        classes.append("docdown-code-block--has-focus")
    if features.diff_lines:
        classes.append("docdown-code-block--has-diff")

    header = ""
    if show_title and features.title:
        resolution = titleIcon_detect(features.title, features.language)
        icon = icon_render(resolution)
        icon_html = f'<span class="docdown-code-block__icon">{icon}</span>' if icon else ""
        header = (
            '<div class="docdown-code-block__header">'
            f'{icon_html}'
            f'<span class="docdown-code-block__title">{text_escape(resolution.label or "")}</span>'
            '</div>'
        )

    copy_button = (
        '<button class="docdown-code-block__copy" type="button" aria-label="Copy code" '
        f'data-code="{attribute_escape(code_text)}">{phosphor_render("copy")}</button>'
    )

    return (
        f'<div class="{" ".join(classes)}">'
        f'{header}'
        f'<div class="docdown-code-block__body">{gutter}{body}</div>'
        f'{copy_button}'
        '</div>'
    )


def codeBlocks_render(
    html: str, blocks: Sequence[CodeBlockFeatures], skip: Sequence[range] = ()
) -> str:
    """
    Replace each linked highlight div outside skip with its finished block.

    A highlight div is linked when its ``<code>`` carries ``data-block="N"``;
    it is paired with ``blocks[N]``. Unlinked divs (already finished code,
    or code the converter produced on its own) are left as they are.
    """
    def block_replace(match: re.Match[str]) -> str:
        linked = BLOCK_ATTRIBUTE.search(match.group(0))
        if linked is None or position_inRanges(match.start(), skip):
            return match.group(0)
        index = int(linked.group(1))
        highlighted = BLOCK_ATTRIBUTE.sub("", match.group(0), count=1)
        if index >= len(blocks):
            LOG(f"Code block {index} has no recorded features", level=2)
            return codeBlock_render(highlighted)
        return codeBlock_render(highlighted, blocks[index])

    return HIGHLIGHT_BLOCK.sub(block_replace, html)


def markdown_render(markdown: str, context: ProcessingContext) -> str:
    """
    Render a Markdown fragment with fully featured code blocks.

    Used by components whose bodies are finalized during preprocessing.
    Fences not seen yet are recorded in ``context.code_blocks``; fences
    recorded earlier keep their block id.
    """
    extracted = features_extract(markdown, first_id=len(context.code_blocks))
    context.code_blocks.extend(extracted.blocks)
    html = html_convert(annotations_attach(extracted.markdown, context), context)
    return codeBlocks_render(html, context.code_blocks)


def codeFeatures_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Record features of fences outside tab and code-group containers"""
    skip = blockRanges_find(markdown, SELF_RENDERING_OPENER)
    extracted = features_extract(markdown, skip=skip, first_id=len(context.code_blocks))
    context.code_blocks.extend(extracted.blocks)
    for features in extracted.blocks:
        LOG(f"Code block features: {features_summarize(features)}", level=3)
    return extracted.markdown


def codeBlocks_postprocess(html: str, context: ProcessingContext) -> str:
    """Finalize linked highlight divs outside finished containers"""
    return codeBlocks_render(html, context.code_blocks, skip=containerRanges_find(html))

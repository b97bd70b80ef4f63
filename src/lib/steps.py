"""
Steps processor

    :::steps
    ### Install
    pip install docdown

    ### Build
    docdown docs/ site/
    :::

Headings are numbered from 1; only the final step carries the ``--last``
modifier and no connector follows it.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from ..models.context import ProcessingContext
from .codeblocks import markdown_render
from .fences import fenceRanges_find, position_inRanges
from .markup import BlockMatch, blocks_substitute, text_escape

STEPS_OPENER = re.compile(r"^:::[ \t]*steps[ \t]*\n", re.MULTILINE)
STEP_HEADING = re.compile(r"^###[ \t]+(.+?)[ \t]*$", re.MULTILINE)


@dataclass
class Step:
    title: str
    body: str


def steps_parse(body: str) -> List[Step]:
    """Split a steps body at ``### `` headings outside fences"""
    fences = fenceRanges_find(body)
    headings = [
        match for match in STEP_HEADING.finditer(body)
        if not position_inRanges(match.start(), fences)
    ]
    steps = []
    for index, heading in enumerate(headings):
        end = headings[index + 1].start() if index + 1 < len(headings) else len(body)
        steps.append(Step(title=heading.group(1), body=body[heading.end():end].strip()))
    return steps


def steps_render(steps: List[Step], context: ProcessingContext) -> str:
    items = []
    for number, step in enumerate(steps, start=1):
        is_last = number == len(steps)
        classes = "docdown-step docdown-step--last" if is_last else "docdown-step"
        connector = "" if is_last else '<span class="docdown-step__connector" aria-hidden="true"></span>'
        items.append(
            f'<div class="{classes}">'
            '<div class="docdown-step__indicator">'
            f'<span class="docdown-step__number">{number}</span>{connector}'
            '</div>'
            '<div class="docdown-step__content">'
            f'<h3 class="docdown-step__title">{text_escape(step.title)}</h3>'
            f'<div class="docdown-step__body">{markdown_render(step.body, context)}</div>'
            '</div>'
            '</div>'
        )
    return f'<div class="docdown-steps">{"".join(items)}</div>'


def steps_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::steps`` blocks outside fenced code"""

    def block_render(block: BlockMatch) -> Optional[str]:
        steps = steps_parse(block.body)
        if not steps:
            return None
        return steps_render(steps, context)

    return blocks_substitute(markdown, STEPS_OPENER, block_render, context)

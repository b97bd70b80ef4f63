"""
Code group processor

    :::code-group
    ```js [config.js]
    export default {}
    ```

    ```ts [:gear: config.ts]
    export default {} satisfies Config
    ```
    :::

Every labelled fence becomes one tab of the group; the label is the
fence title and the tab icon comes from a manual prefix or the fence
language. Fences without a label are ignored.
"""

import re
from typing import List, Optional, Tuple

from ..models.codeblock import CodeBlockFeatures
from ..models.context import ProcessingContext
from .codeblocks import codeBlock_render
from .converter import html_convert
from .fences import fences_find
from .features import fence_process
from .icons import icon_render, titleIcon_detect
from .markup import BlockMatch, blocks_substitute, text_escape
from .tabs import groupId_make

CODE_GROUP_OPENER = re.compile(r"^:::[ \t]*code-group[ \t]*\n", re.MULTILINE)


def codeGroup_parse(body: str, context: ProcessingContext) -> List[Tuple[CodeBlockFeatures, str]]:
    """
    Render every labelled fence of a code-group body.

    Returns:
        (features, finished code block HTML) per labelled fence
    """
    entries: List[Tuple[CodeBlockFeatures, str]] = []
    for fence in fences_find(body):
        cleaned, features = fence_process(fence)
        if not features.title:
            continue
        highlighted = html_convert(cleaned, context)
        entries.append((features, codeBlock_render(highlighted, features, show_title=False)))
    return entries


def codeGroup_render(
    entries: List[Tuple[CodeBlockFeatures, str]], group_id: Optional[str] = None
) -> str:
    """
    Render a code group as an ARIA tab set.

    Args:
        entries: (features, rendered code block) in source order
        group_id: Id shared by the group's elements; random when None
    """
    group_id = group_id or groupId_make()
    buttons = []
    panels = []
    for index, (features, block_html) in enumerate(entries):
        selected = index == 0
        tab_id = f"cg-tab-{group_id}-{index}"
        panel_id = f"cg-panel-{group_id}-{index}"
        resolution = titleIcon_detect(features.title, features.language)
        icon = icon_render(resolution)
        icon_html = f'<span class="docdown-code-group__icon">{icon}</span>' if icon else ""
        buttons.append(
            f'<button class="docdown-code-group__tab" role="tab" id="{tab_id}" '
            f'aria-controls="{panel_id}" aria-selected="{str(selected).lower()}" '
            f'tabindex="{0 if selected else -1}" type="button">'
            f'{icon_html}'
            f'<span class="docdown-code-group__label">{text_escape(resolution.label or "")}</span>'
            '</button>'
        )
        panels.append(
            f'<div class="docdown-code-group__panel" role="tabpanel" id="{panel_id}" '
            f'aria-labelledby="{tab_id}" aria-hidden="{str(not selected).lower()}" tabindex="0">'
            f'{block_html}'
            '</div>'
        )
    return (
        f'<div class="docdown-code-group" data-code-group="{group_id}">'
        f'<div class="docdown-code-group__tabs" role="tablist" aria-label="Code examples">{"".join(buttons)}</div>'
        f'<div class="docdown-code-group__panels">{"".join(panels)}</div>'
        '</div>'
    )


def codeGroups_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::code-group`` blocks outside fenced code"""

    def block_render(block: BlockMatch) -> Optional[str]:
        entries = codeGroup_parse(block.body, context)
        if not entries:
            return None
        return codeGroup_render(entries)

    return blocks_substitute(markdown, CODE_GROUP_OPENER, block_render, context)

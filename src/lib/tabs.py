"""
Tabs processor

    :::tabs
    == :package: npm
    ```bash
    npm install docdown
    ```

    == yarn
    yarn add docdown
    :::

Each ``== Label`` section becomes one ARIA tab/tabpanel pair. The first
tab is selected. Tab and panel ids share a random group id so several tab
groups can live on one page.
"""

import re
import secrets
from typing import List, Optional

from ..models.components import IconResolution, TabEntry
from ..models.context import ProcessingContext
from .codeblocks import markdown_render
from .fences import fenceRanges_find, position_inRanges
from .icons import icon_detect, icon_render
from .markup import BlockMatch, blocks_substitute, text_escape

TABS_OPENER = re.compile(r"^:::[ \t]*tabs[ \t]*\n", re.MULTILINE)
TAB_HEADER = re.compile(r"^==[ \t]+", re.MULTILINE)


def groupId_make() -> str:
    """Random id shared by the tabs and panels of one group"""
    return secrets.token_hex(4)


def sections_split(body: str) -> List[str]:
    """Split a tabs body at ``== `` headers that are not inside fences"""
    fences = fenceRanges_find(body)
    starts = [
        match.start() for match in TAB_HEADER.finditer(body)
        if not position_inRanges(match.start(), fences)
    ]
    return [body[start:end] for start, end in zip(starts, starts[1:] + [len(body)])]


def tabs_parse(body: str, context: ProcessingContext) -> List[TabEntry]:
    """
    Parse the sections of a tabs block into TabEntry records.

    Sections without a label are dropped. The icon is decided on the raw
    section body; the body is then rendered with full code block support.
    """
    tabs: List[TabEntry] = []
    for section in sections_split(body):
        section = TAB_HEADER.sub("", section, count=1)
        label, _, content = section.partition("\n")
        label = label.strip()
        if not label:
            continue
        content = content.strip()
        resolution = icon_detect(label, content)
        tabs.append(TabEntry(
            name=resolution.label or label,
            content=markdown_render(content, context),
            icon=resolution.icon,
            icon_source=resolution.source,
        ))
    return tabs


def tabIcon_render(tab: TabEntry) -> str:
    if tab.icon is None:
        return ""
    icon = icon_render(IconResolution(label=tab.name, icon=tab.icon, source=tab.icon_source))
    return f'<span class="docdown-tabs__icon">{icon}</span>'


def tabs_render(tabs: List[TabEntry], group_id: Optional[str] = None) -> str:
    """
    Render a tab group.

    Args:
        tabs: Tabs in source order
        group_id: Id shared by the group's elements; random when None

    Returns:
        ``<div class="docdown-tabs">`` element
    """
    group_id = group_id or groupId_make()
    buttons = []
    panels = []
    for index, tab in enumerate(tabs):
        selected = index == 0
        tab_id = f"tab-{group_id}-{index}"
        panel_id = f"tabpanel-{group_id}-{index}"
        buttons.append(
            f'<button class="docdown-tabs__tab" role="tab" id="{tab_id}" '
            f'aria-controls="{panel_id}" aria-selected="{str(selected).lower()}" '
            f'tabindex="{0 if selected else -1}" type="button">'
            f'{tabIcon_render(tab)}'
            f'<span class="docdown-tabs__label">{text_escape(tab.name)}</span>'
            '</button>'
        )
        panels.append(
            f'<div class="docdown-tabs__panel" role="tabpanel" id="{panel_id}" '
            f'aria-labelledby="{tab_id}" aria-hidden="{str(not selected).lower()}" tabindex="0">'
            f'{tab.content}'
            '</div>'
        )
    return (
        f'<div class="docdown-tabs" data-tabs="{group_id}">'
        '<div class="docdown-tabs__list-wrapper">'
        f'<div class="docdown-tabs__list" role="tablist">{"".join(buttons)}</div>'
        '</div>'
        f'<div class="docdown-tabs__panels">{"".join(panels)}</div>'
        '</div>'
    )


def tabs_preprocess(markdown: str, context: ProcessingContext) -> str:
    """Render ``:::tabs`` blocks outside fenced code"""

    def block_render(block: BlockMatch) -> Optional[str]:
        tabs = tabs_parse(block.body, context)
        if not tabs:
            return None
        return tabs_render(tabs)

    return blocks_substitute(markdown, TABS_OPENER, block_render, context)

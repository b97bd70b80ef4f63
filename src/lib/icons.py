"""
Icon detection and rendering

Decides which icon decorates a tab, a code-group label or a code block
title, and renders icons as Phosphor (``ph``) or Devicon elements. Also
hosts the inline ``:name:`` / ``:name:weight:`` icon postprocessor.

Detection precedence:
    1. Manual ``:identifier: Label`` prefix - always wins
    2. Body that is exactly one fenced code block - icon from its language
    3. Nothing
"""

import re
from typing import Dict, List, Optional, Tuple

from ..models.components import IconResolution, IconSource
from ..models.context import ProcessingContext
from .fences import fences_find

MANUAL_ICON = re.compile(r"^:([a-z0-9-]+):\s+(.+)$", re.IGNORECASE | re.DOTALL)
INLINE_ICON = re.compile(r":([a-z][a-z0-9-]*):(?:([a-z]+):)?", re.IGNORECASE)

TERMINAL_LANGUAGES = frozenset({"bash", "sh", "shell", "powershell"})
TERMINAL_ICON = "terminal-window"
GENERIC_FILE_ICON = "file"

VALID_WEIGHTS = ("regular", "bold", "fill", "light", "thin", "duotone")

LANGUAGE_TO_EXTENSION: Dict[str, str] = {
    "js": "js",
    "javascript": "js",
    "ts": "ts",
    "typescript": "ts",
    "jsx": "jsx",
    "tsx": "tsx",
    "py": "py",
    "python": "py",
    "rb": "rb",
    "ruby": "rb",
    "go": "go",
    "golang": "go",
    "rs": "rs",
    "rust": "rs",
    "php": "php",
    "html": "html",
    "htm": "html",
    "html5": "html",
    "css": "css",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "sql": "sql",
    "mysql": "mysql",
    "postgresql": "pgsql",
    "postgres": "pgsql",
    "pgsql": "pgsql",
    "graphql": "graphql",
    "gql": "graphql",
    "vue": "vue",
    "svelte": "svelte",
    "proto": "proto",
    "protobuf": "proto",
}

DEVICONS: Dict[str, str] = {
    "js": "devicon-javascript-plain colored",
    "ts": "devicon-typescript-plain colored",
    "jsx": "devicon-react-original colored",
    "tsx": "devicon-react-original colored",
    "py": "devicon-python-plain colored",
    "rb": "devicon-ruby-plain colored",
    "go": "devicon-go-original-wordmark colored",
    "rs": "devicon-rust-original",
    "php": "devicon-php-plain colored",
    "html": "devicon-html5-plain colored",
    "css": "devicon-css3-plain colored",
    "json": "devicon-json-plain colored",
    "yaml": "devicon-yaml-plain colored",
    "toml": "devicon-toml-plain",
    "sql": "devicon-azuresqldatabase-plain colored",
    "mysql": "devicon-mysql-original colored",
    "pgsql": "devicon-postgresql-plain colored",
    "graphql": "devicon-graphql-plain colored",
    "vue": "devicon-vuejs-plain colored",
    "svelte": "devicon-svelte-plain colored",
    "proto": "devicon-grpc-plain",
}


def extension_forLanguage(language: Optional[str]) -> Optional[str]:
    """File-extension icon key for a language tag, None if unmapped"""
    if not language:
        return None
    return LANGUAGE_TO_EXTENSION.get(language.lower())


def languageIcon_resolve(language: Optional[str]) -> Tuple[str, IconSource]:
    """
    Icon for a confirmed code block language.

    Never returns an empty icon: unmapped languages get a generic file.
    """
    if language and language.lower() in TERMINAL_LANGUAGES:
        return TERMINAL_ICON, IconSource.PHOSPHOR
    extension = extension_forLanguage(language)
    if extension:
        return extension, IconSource.FILE_EXTENSION
    return GENERIC_FILE_ICON, IconSource.PHOSPHOR


def manualIcon_match(label: str) -> Optional[IconResolution]:
    """Resolve ``:icon: Label`` syntax, None when label has no valid prefix"""
    match = MANUAL_ICON.match(label.strip())
    if match is None:
        return None
    return IconResolution(
        label=match.group(2).strip(), icon=match.group(1), source=IconSource.PHOSPHOR
    )


def singleFence_language(body: str) -> Tuple[bool, Optional[str]]:
    """
    Check whether body is exactly one fenced code block.

    Returns:
        (is single fence, its language)
    """
    stripped = body.strip()
    fences = fences_find(stripped)
    if len(fences) != 1:
        return False, None
    fence = fences[0]
    if fence.start != 0 or fence.end != len(stripped):
        return False, None
    return True, fence.language


def icon_detect(label: str, body: str) -> IconResolution:
    """
    Decide the icon for a labelled block such as a tab.

    Args:
        label: Display text, possibly prefixed with ``:icon:``
        body: Raw Markdown body the label belongs to

    Returns:
        IconResolution; icon and source are None when nothing applies

    Example:
        >>> icon_detect(":star: Featured", "```js\\nx\\n```").icon
        'star'
        >>> icon_detect("npm", "```bash\\nnpm i\\n```").icon
        'terminal-window'
    """
    manual = manualIcon_match(label)
    if manual is not None:
        return manual
    is_single, language = singleFence_language(body)
    if is_single:
        icon, source = languageIcon_resolve(language)
        return IconResolution(label=label, icon=icon, source=source)
    return IconResolution(label=label)


def titleIcon_detect(title: Optional[str], language: Optional[str]) -> IconResolution:
    """
    Icon for a code block title or code-group label.

    A manual prefix wins; otherwise the block's language decides. Untitled
    blocks get no icon.
    """
    if title is None:
        return IconResolution(label=None)
    manual = manualIcon_match(title)
    if manual is not None:
        return manual
    if not language:
        return IconResolution(label=title)
    icon, source = languageIcon_resolve(language)
    return IconResolution(label=title, icon=icon, source=source)


def phosphor_render(name: str, weight: str = "regular") -> str:
    """Phosphor icon element; unknown weights fall back to regular"""
    name = name.replace("_", "-")
    if weight not in VALID_WEIGHTS:
        weight = "regular"
    weight_class = "ph" if weight == "regular" else f"ph-{weight}"
    return f'<i class="{weight_class} ph-{name}" aria-hidden="true"></i>'


def icon_render(resolution: IconResolution) -> str:
    """Render a resolved icon, empty string when there is none"""
    if resolution.icon is None:
        return ""
    if resolution.source is IconSource.FILE_EXTENSION:
        devicon = DEVICONS.get(resolution.icon)
        if devicon:
            return f'<i class="{devicon}" aria-hidden="true"></i>'
        return phosphor_render("file-code")
    return phosphor_render(resolution.icon)


_PROTECTED = re.compile(r"<(code|pre)\b[^>]*>.*?</\1>", re.DOTALL)
_TAG = re.compile(r"(<[^>]+>)")


def protected_split(html: str) -> List[Tuple[bool, str]]:
    """
    Split html into (is_protected, chunk) pieces.

    ``<code>``/``<pre>`` elements and tags themselves are protected; only
    the remaining text is safe for inline substitutions.
    """
    pieces: List[Tuple[bool, str]] = []
    cursor = 0
    for match in _PROTECTED.finditer(html):
        pieces.extend(_textTags_split(html[cursor:match.start()]))
        pieces.append((True, match.group(0)))
        cursor = match.end()
    pieces.extend(_textTags_split(html[cursor:]))
    return pieces


def _textTags_split(html: str) -> List[Tuple[bool, str]]:
    return [(chunk.startswith("<"), chunk) for chunk in _TAG.split(html) if chunk]


def inlineIcons_postprocess(html: str, context: ProcessingContext) -> str:
    """
    Replace ``:name:`` and ``:name:weight:`` in text with Phosphor icons.

    Text inside ``<code>``/``<pre>`` and inside tags is left alone.
    """
    def icon_replace(match: re.Match[str]) -> str:
        return phosphor_render(match.group(1).lower(), (match.group(2) or "regular").lower())

    return "".join(
        chunk if protected else INLINE_ICON.sub(icon_replace, chunk)
        for protected, chunk in protected_split(html)
    )

"""
Per-document processing context

One ProcessingContext is created for every document render and threaded
by reference through preprocess, conversion and postprocess. Preprocessors
write to it, postprocessors read from it; it is never shared between
documents.
"""

import re
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import appsettings
from .codeblock import CodeBlockFeatures
from .components import TocEntry


@dataclass
class ProcessingContext:
    """
    Typed build context for one document.

    Attributes:
        docs_root: Root used to resolve ``<<< @/path`` imports
        current_file: Source file being rendered, if any
        config: Free-form per-document options (front matter lands here)
        code_blocks: Features of recorded fences; a cleaned fence carries
            its index here as its block id. Written by code-block-features
            and component renders, read by code-annotation and code-block
        toc: Table of contents collected during postprocessing
        raw_blocks: Rendered HTML fragments hidden from the Markdown
            converter behind stash tokens
    """
    docs_root: Optional[Path] = None
    current_file: Optional[Path] = None
    config: Dict[str, Any] = field(default_factory=dict)
    code_blocks: List[CodeBlockFeatures] = field(default_factory=list)
    toc: List[TocEntry] = field(default_factory=list)
    raw_blocks: List[str] = field(default_factory=list)

    def docsRoot_get(self) -> Path:
        """Docs root, falling back to the configured default"""
        return self.docs_root if self.docs_root is not None else Path(appsettings.docs_dir)

    def raw_store(self, html: str) -> str:
        """
        Stash rendered HTML and return its token.

        The token is alphanumeric, so Python-Markdown wraps it in a plain
        paragraph and never reinterprets the fragment.

        Args:
            html: Rendered HTML fragment

        Returns:
            Stash token to put in place of the fragment
        """
        self.raw_blocks.append(html)
        return appsettings.rawToken_make(len(self.raw_blocks) - 1)

    def raw_block(self, html: str) -> str:
        """Stash html and return its token as a standalone Markdown block"""
        return f"\n\n{self.raw_store(html)}\n\n"

    def raw_restore(self, text: str) -> str:
        """
        Replace stash tokens (and the paragraphs wrapping them) with HTML.

        Restores repeatedly so fragments that contain tokens themselves
        are fully expanded.
        """
        token_re = re.compile(
            r"(?:<p>)?(" + re.escape(appsettings.raw_prefix) + r"\d+"
            + re.escape(appsettings.raw_suffix) + r")(?:</p>)?"
        )

        def token_expand(match: re.Match[str]) -> str:
            index = appsettings.rawIndex_extract(match.group(1))
            if index is None or index >= len(self.raw_blocks):
                return match.group(0)
            return self.raw_blocks[index]

        while True:
            restored = token_re.sub(token_expand, text)
            if restored == text:
                return restored
            text = restored

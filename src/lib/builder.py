"""
Static site builder

Renders every Markdown page below a docs directory into a standalone
HTML page, copies every other file verbatim, and writes the Pygments
stylesheet the highlighted code blocks rely on.

Layout:
    docs/index.md          -> site/index.html
    docs/guide/setup.md    -> site/guide/setup.html
    docs/img/logo.png      -> site/img/logo.png
                              site/assets/docdown-code.css
"""

import html as htmllib
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from pygments.formatters import HtmlFormatter

from ..config import appsettings
from .document import Document
from .log import LOG
from .registry import ComponentRegistry
from .structure import toc_render

STYLESHEET = Path("assets") / "docdown-code.css"


class SiteBuilder:
    """
    Build a static site from a docs directory

    The builder owns one ComponentRegistry shared by every page; each page
    still gets its own ProcessingContext.
    """

    def __init__(
        self,
        docs_dir: str,
        output_dir: str,
        site_title: Optional[str] = None,
        registry: Optional[ComponentRegistry] = None,
        pygments_style: Optional[str] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize builder

        Args:
            docs_dir: Directory containing Markdown sources and assets
            output_dir: Directory for the generated site
            site_title: Title used in every page shell
            registry: Processor chain; built-ins when None
            pygments_style: Pygments style for the code stylesheet
            variables: Site-wide {{ name }} values, overridden per page by
                front matter
        """
        self.docs_dir = Path(docs_dir)
        self.output_dir = Path(output_dir)
        self.site_title = site_title or appsettings.site_title
        self.registry = registry if registry is not None else ComponentRegistry()
        self.pygments_style = pygments_style or appsettings.pygments_style
        self.variables = variables or {}
        self.pages: List[Path] = []

    def sources_collect(self) -> List[Path]:
        """Markdown files below docs_dir, sorted, hidden entries skipped"""
        sources = []
        for path in sorted(self.docs_dir.rglob("*.md")):
            relative = path.relative_to(self.docs_dir)
            if any(part.startswith(".") for part in relative.parts):
                continue
            sources.append(path)
        return sources

    def build(self) -> Dict[str, Any]:
        """
        Build the whole site

        Returns:
            dict with build results (status, output_dir, page_count, pages)
        """
        LOG(f"Building site from {self.docs_dir}", level=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.pages = []
        for source in self.sources_collect():
            self.pages.append(self.page_build(source))

        self.assets_copy()
        self.stylesheet_write()

        return {
            'status': True,
            'output_dir': str(self.output_dir),
            'page_count': len(self.pages),
            'pages': [str(page) for page in self.pages],
        }

    def page_build(self, source: Path) -> Path:
        """Render one Markdown file and write its HTML page"""
        relative = source.relative_to(self.docs_dir)
        document = Document(
            source.read_text(encoding="utf-8"),
            registry=self.registry,
            docs_root=self.docs_dir,
            current_file=source,
            variables=self.variables,
        )
        target = self.output_dir / relative.with_suffix(".html")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.htmlDocument_build(document, relative), encoding="utf-8")
        LOG(f"Rendered {relative}", level=1)
        return target

    def htmlDocument_build(self, document: Document, relative: Path) -> str:
        """
        Wrap a rendered document in the page shell

        Args:
            document: Page to render
            relative: Source path relative to docs_dir (sets asset depth)

        Returns:
            Complete HTML document
        """
        content = document.html
        page_title = document.title or relative.stem
        depth = len(relative.parts) - 1
        stylesheet = "../" * depth + STYLESHEET.as_posix()
        description = document.description
        meta = (
            f'\n    <meta name="description" content="{htmllib.escape(description)}">'
            if description else ""
        )
        toc_html = toc_render(document.toc)
        toc_nav = (
            f'\n        <nav class="docdown-toc" aria-label="On this page">{toc_html}</nav>'
            if toc_html else ""
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{htmllib.escape(page_title)} | {htmllib.escape(self.site_title)}</title>{meta}
    <link rel="stylesheet" href="{stylesheet}">
</head>
<body>
    <header class="docdown-header">{htmllib.escape(self.site_title)}</header>
    <div class="docdown-layout">
        <main class="docdown-content">
{content}
        </main>{toc_nav}
    </div>
</body>
</html>
"""

    def assets_copy(self) -> None:
        """Copy every non-Markdown file to the output tree"""
        output = self.output_dir.resolve()
        for root, dirs, files in os.walk(self.docs_dir):
            dirs[:] = [
                name for name in dirs
                if not name.startswith(".") and (Path(root) / name).resolve() != output
            ]
            for name in files:
                if name.endswith(".md") or name.startswith("."):
                    continue
                source = Path(root) / name
                target = self.output_dir / source.relative_to(self.docs_dir)
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
                LOG(f"Copied {source.relative_to(self.docs_dir)}", level=3)

    def stylesheet_write(self) -> Path:
        """Write the Pygments stylesheet for ``.highlight`` blocks"""
        target = self.output_dir / STYLESHEET
        target.parent.mkdir(parents=True, exist_ok=True)
        css = HtmlFormatter(style=self.pygments_style).get_style_defs(".highlight")
        target.write_text(css, encoding="utf-8")
        LOG(f"Wrote {target} ({self.pygments_style})", level=2)
        return target

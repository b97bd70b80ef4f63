"""
Markdown include tests
"""

import pytest

from docdown.lib.document import Document
from docdown.lib.includes import includes_preprocess
from docdown.models.context import ProcessingContext


@pytest.fixture
def docs(tmp_path):
    root = tmp_path / "docs"
    (root / "shared").mkdir(parents=True)
    (root / "guide").mkdir()
    (root / "shared" / "install.md").write_text("Run `pip install docdown`.\n", encoding="utf-8")
    (root / "shared" / "outer.md").write_text("Outer\n\n<!--@include: ./inner.md-->\n", encoding="utf-8")
    (root / "shared" / "inner.md").write_text("Inner", encoding="utf-8")
    (root / "shared" / "loop.md").write_text("<!--@include: shared/loop.md-->", encoding="utf-8")
    (root / "guide" / "partial.md").write_text("Guide partial", encoding="utf-8")
    (root / "app.py").write_text("x = 1\n", encoding="utf-8")
    (tmp_path / "outside.md").write_text("secret", encoding="utf-8")
    return root


def included(markdown, docs_root, current_file=None):
    context = ProcessingContext(docs_root=docs_root, current_file=current_file)
    return includes_preprocess(markdown, context)


class TestIncludes:
    """Directives replaced by file contents"""

    def test_root_relative(self, docs):
        """Plain paths resolve against the docs root"""
        result = included("Before\n\n<!--@include: shared/install.md-->\n\nAfter", docs)
        assert result == "Before\n\nRun `pip install docdown`.\n\nAfter"

    def test_spaced_directive(self, docs):
        """Spaces inside the comment are allowed"""
        assert included("<!-- @include: shared/install.md -->", docs).startswith("Run")

    def test_file_relative(self, docs):
        """./ paths resolve against the including file"""
        result = included("<!--@include: ./partial.md-->", docs, current_file=docs / "guide" / "page.md")
        assert result == "Guide partial"

    def test_nested(self, docs):
        """Included files may include others"""
        assert included("<!--@include: shared/outer.md-->", docs) == "Outer\n\nInner"

    def test_inside_fence_untouched(self, docs):
        """Directives shown in code stay literal"""
        markdown = "```md\n<!--@include: shared/install.md-->\n```"
        assert included(markdown, docs) == markdown


class TestIncludeErrors:
    """Failures rendered as warnings in place"""

    @pytest.mark.parametrize("path, message", [
        ("shared/missing.md", "File not found"),
        ("app.py", "Use code snippets for non-markdown files"),
        ("../outside.md", "File not found"),
        ("shared/loop.md", "Circular include detected"),
    ])
    def test_warning(self, docs, path, message):
        """Each failure names the path and the reason"""
        result = included(f"<!--@include: {path}-->", docs)
        assert f"Include error: {path} - {message}" in result
        assert result.startswith("> [!WARNING]")

    def test_escape_from_root(self, docs):
        """A root path leading outside the docs root is refused"""
        result = included("<!--@include: shared/../../outside.md-->", docs)
        assert "Path escapes docs root" in result

    def test_warning_rendered_as_alert(self, docs):
        """The warning becomes a callout in the page"""
        html = Document("<!--@include: shared/missing.md-->", docs_root=docs).html
        assert "docdown-callout--warning" in html
        assert "shared/missing.md" in html

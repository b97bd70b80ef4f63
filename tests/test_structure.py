"""
Heading anchor, table of contents and table wrapper tests
"""

from docdown.lib.document import Document
from docdown.lib.structure import (
    customAnchors_postprocess,
    headingAnchors_postprocess,
    tables_postprocess,
    toc_postprocess,
    toc_render,
)
from docdown.models.context import ProcessingContext


class TestHeadingAnchors:
    """h2-h6 with ids get anchor links"""

    def test_anchor_added(self):
        """Anchor appended inside the heading"""
        html = headingAnchors_postprocess('<h2 id="install">Install</h2>', ProcessingContext())
        assert html == (
            '<h2 id="install">Install<a href="#install" class="heading-anchor" '
            'aria-label="Link to this section">#</a></h2>'
        )

    def test_h1_and_idless_skipped(self):
        """Page titles and headings without ids are untouched"""
        source = '<h1 id="top">Top</h1><h3>No id</h3>'
        assert headingAnchors_postprocess(source, ProcessingContext()) == source


class TestToc:
    """h2-h4 collected into a hierarchy"""

    def test_hierarchy(self):
        """h3 nests under the h2 before it; h5 is not collected"""
        context = ProcessingContext()
        html = (
            '<h2 id="a">A</h2><h3 id="b">B <code>x</code></h3>'
            '<h2 id="c">C</h2><h5 id="d">D</h5>'
        )
        assert toc_postprocess(html, context) == html

        assert [entry.id for entry in context.toc] == ["a", "c"]
        assert context.toc[0].children[0].text == "B x"
        assert context.toc[1].children == []

    def test_anchor_text_not_in_toc(self):
        """The # link added by heading-anchor is not part of the text"""
        context = ProcessingContext()
        html = headingAnchors_postprocess('<h2 id="a">Alpha</h2>', context)
        toc_postprocess(html, context)
        assert context.toc[0].text == "Alpha"

    def test_render(self):
        """Nested list, empty for no entries"""
        context = ProcessingContext()
        toc_postprocess('<h2 id="a">A</h2><h3 id="b">B</h3>', context)
        assert toc_render(context.toc) == (
            '<ul><li><a href="#a">A</a><ul><li><a href="#b">B</a></li></ul></li></ul>'
        )
        assert toc_render([]) == ""

    def test_raw_html_heading(self):
        """Headings written as HTML are anchored and collected too"""
        document = Document('## Intro\n\n<h2 class="lead" id="start">Start</h2>\n')
        html = document.html
        assert [entry.id for entry in document.toc] == ["intro", "start"]
        assert html.count('class="heading-anchor"') == 2


class TestCustomAnchors:
    """Trailing {#id} on a heading"""

    def test_id_replaced(self):
        """The written id wins and the marker leaves the text"""
        html = customAnchors_postprocess('<h2 id="setup-install">Setup {#install}</h2>', ProcessingContext())
        assert html == '<h2 id="install">Setup</h2>'

    def test_marker_after_inline_code(self):
        """Only the last text node carries the marker"""
        html = customAnchors_postprocess(
            '<h3 id="x">Use <code>pip</code> {#use-pip}</h3>', ProcessingContext()
        )
        assert html == '<h3 id="use-pip">Use <code>pip</code></h3>'

    def test_plain_text_untouched(self):
        """Braces outside headings are not anchors"""
        source = "<p>See {#id} here</p>"
        assert customAnchors_postprocess(source, ProcessingContext()) == source

    def test_through_pipeline(self):
        """The custom id reaches the anchor link and the table of contents"""
        document = Document("## Installation {#install}\n")
        assert document.toc[0].id == "install"
        assert document.toc[0].text == "Installation"
        assert 'href="#install"' in document.html
        assert "{#" not in document.html


class TestTables:
    """Tables wrapped for scrolling"""

    def test_wrapped(self):
        """Every table gets a wrapper"""
        html = tables_postprocess("<table><tr><td>1</td></tr></table>", ProcessingContext())
        assert html == '<div class="table-wrapper"><table><tr><td>1</td></tr></table></div>'

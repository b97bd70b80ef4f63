"""
Line wrapping tests

Splitting highlighter output into balanced lines and decorating each
line by display or source number.
"""

import re

from docdown.lib.linewrap import codeBlock_wrap, lines_parse
from docdown.models.codeblock import Annotation, DiffKind


def lineClasses_collect(html):
    return re.findall(r'<span class="(docdown-code-line[^"]*)">', html)


class TestLinesParse:
    """Per-line fragments stay well formed"""

    def test_span_across_newline_reopened(self):
        """A comment span spanning two lines is closed and reopened"""
        html = '<span class="c1">/* a\nb */</span>\n'
        lines = lines_parse(html)

        assert lines == ['<span class="c1">/* a</span>', '<span class="c1">b */</span>']

    def test_inner_text_preserved(self):
        """Dropping the tags reproduces the original text"""
        html = '<span class="k">def</span> <span class="c1">"""doc\nstring"""</span>\nx\n'
        lines = lines_parse(html)
        text = "\n".join(re.sub(r"<[^>]+>", "", line) for line in lines)
        assert text == 'def """doc\nstring"""\nx'

    def test_each_line_balanced(self):
        """Every fragment opens and closes the same number of spans"""
        html = '<span class="a"><span class="b">x\ny\nz</span></span>\n'
        for line in lines_parse(html):
            assert line.count("<span") == line.count("</span>")

    def test_nested_spans_reopen_outermost_first(self):
        """Reopened spans keep their nesting order"""
        lines = lines_parse('<span class="a"><span class="b">x\ny</span></span>')
        assert lines[1] == '<span class="a"><span class="b">y</span></span>'

    def test_empty_input(self):
        """Empty code still has one line"""
        assert lines_parse("") == [""]


class TestCodeBlockWrap:
    """Line classes driven by display and source numbers"""

    def test_plain_wrapping(self):
        """Every line gets the base line class"""
        html = codeBlock_wrap("<pre><code>a\nb\n</code></pre>")
        assert lineClasses_collect(html) == ["docdown-code-line", "docdown-code-line"]

    def test_display_and_source_numbers_diverge(self):
        """With a start line of 10, display 11 and source 2 are the same line"""
        html = codeBlock_wrap(
            "<pre><code>a\nb\nc\n</code></pre>",
            highlights=[12],
            diff_lines={2: DiffKind.ADDITION},
            focus_lines=[1],
            start_line=10,
        )
        classes = lineClasses_collect(html)

        assert classes[0] == "docdown-code-line docdown-code-line--focus"
        assert classes[1] == "docdown-code-line docdown-code-line--diff-add"
        assert classes[2] == "docdown-code-line docdown-code-line--highlighted"

    def test_source_number_is_not_a_display_number(self):
        """A highlight below the start line selects nothing"""
        html = codeBlock_wrap("<pre><code>a\nb\n</code></pre>", highlights=[2], start_line=5)
        assert "--highlighted" not in html

    def test_error_warning_and_removal(self):
        """Remaining line states"""
        html = codeBlock_wrap(
            "<pre><code>a\nb\nc\n</code></pre>",
            diff_lines={1: DiffKind.DELETION},
            error_lines=[2],
            warning_lines=[3],
        )
        classes = lineClasses_collect(html)
        assert classes == [
            "docdown-code-line docdown-code-line--diff-remove",
            "docdown-code-line docdown-code-line--error",
            "docdown-code-line docdown-code-line--warning",
        ]

    def test_annotation_button(self):
        """An annotated line ends with its popover button, by source number"""
        html = codeBlock_wrap(
            "<pre><code>a\nb\n</code></pre>",
            start_line=7,
            annotations={2: Annotation(number=1, content="<p>Why \"b\"</p>")},
        )
        assert html.count("docdown-code-annotation") == 1
        assert html.index("a\n") < html.index('aria-label="Annotation 1"')
        assert 'data-annotation-content="&lt;p&gt;Why &quot;b&quot;&lt;/p&gt;"' in html
        assert ">1</button>\n</span>" in html

    def test_without_code_element(self):
        """Input without <pre><code> is returned unchanged"""
        assert codeBlock_wrap("<p>x</p>", highlights=[1]) == "<p>x</p>"

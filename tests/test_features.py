"""
Code block feature extraction tests

Info string parsing, marker stripping over whole fences, and the
cleaned Markdown handed to the converter.
"""

from docdown.lib.features import (
    features_extract,
    features_summarize,
    highlights_parse,
    info_parse,
)
from docdown.models.codeblock import DiffKind


class TestInfoParse:
    """Fence info string grammar"""

    def test_full_info_string(self):
        """Language, title, line numbers and highlights together"""
        features = info_parse("js [app.js]:line-numbers=10 {1,3-4}")
        assert features.language == "js"
        assert features.title == "app.js"
        assert features.line_numbers.enabled is True
        assert features.line_numbers.start == 10
        assert features.highlights == [1, 3, 4]

    def test_language_only(self):
        """Plain language tag"""
        features = info_parse("python")
        assert features.language == "python"
        assert features.title is None
        assert features.line_numbers is None
        assert features.highlights == []

    def test_line_number_options(self):
        """Enable, disable and start value"""
        assert info_parse("js:line-numbers").line_numbers.start == 1
        assert info_parse("js:no-line-numbers").line_numbers.enabled is False
        assert info_parse("js:unknown").line_numbers is None

    def test_icon_prefixed_title(self):
        """Title keeps a manual icon prefix for later resolution"""
        assert info_parse("py [:rocket: app.py]").title == ":rocket: app.py"

    def test_ungrammatical_info_falls_back(self):
        """First word is still the language"""
        features = info_parse("python some other words")
        assert features.language == "python"
        assert features.highlights == []

    def test_highlights_parse(self):
        """Ranges expand, duplicates collapse, junk is ignored"""
        assert highlights_parse("3,1-2,x,2") == [1, 2, 3]
        assert highlights_parse(None) == []


class TestFeaturesExtract:
    """Extraction over whole documents"""

    def test_highlight_and_addition_scenario(self):
        """Highlight on line 2 plus an addition marker on line 2"""
        markdown = "```js {2}\nconst x = 1;\nconst y = 2; // [!code ++]\n```"
        result = features_extract(markdown)

        assert result.markdown == "```js\nconst x = 1;\nconst y = 2;\n```"
        assert len(result.blocks) == 1
        features = result.blocks[0]
        assert features.language == "js"
        assert features.highlights == [2]
        assert features.diff_lines == {2: DiffKind.ADDITION}

    def test_every_fence_recorded(self):
        """Fences without features are recorded too"""
        markdown = "```\nplain\n```\n\n```py\nx = 1  # [!code focus]\n```\n"
        result = features_extract(markdown)

        assert len(result.blocks) == 2
        assert result.blocks[0].lineWrapping_needed() is False
        assert result.blocks[1].focus_lines == {1}

    def test_all_marker_kinds(self):
        """Each marker kind lands in its own map"""
        markdown = (
            "```py\n"
            "a = 1  # [!code --]\n"
            "b = 2  # [!code ++]\n"
            "c = 3  # [!code error]\n"
            "d = 4  # [!code warning]\n"
            "```"
        )
        features = features_extract(markdown).blocks[0]
        assert features.diff_lines == {1: DiffKind.DELETION, 2: DiffKind.ADDITION}
        assert features.error_lines == {3}
        assert features.warning_lines == {4}
        assert "[!code" not in features_extract(markdown).markdown

    def test_skip_ranges(self):
        """Fences starting inside a skip range are left alone"""
        markdown = "```js [a.js]\nx\n```\n"
        result = features_extract(markdown, skip=[range(0, len(markdown))])
        assert result.markdown == markdown
        assert result.blocks == []

    def test_text_outside_fences_untouched(self):
        """Markers in prose are not code markers"""
        markdown = "Write `// [!code ++]` to mark an addition.\n"
        assert features_extract(markdown).markdown == markdown

    def test_summary(self):
        """Plain-dict view for logging"""
        features = features_extract("```js {1}\nx // [!code ++]\n```").blocks[0]
        summary = features_summarize(features)
        assert summary["highlights"] == [1]
        assert summary["diff"] == {1: "add"}

    def test_diff_and_focus_on_one_line(self):
        """Two markers on one line are both recorded and both stripped"""
        markdown = "```js\nconst y = 2; // [!code ++] // [!code focus]\n```"
        result = features_extract(markdown)

        assert result.markdown == "```js\nconst y = 2;\n```"
        features = result.blocks[0]
        assert features.diff_lines == {1: DiffKind.ADDITION}
        assert features.focus_lines == {1}


class TestBlockIds:
    """Cleaned fences linked to their recorded features"""

    def test_linked_openers(self):
        """Ids count up from first_id in document order"""
        markdown = "```js\na\n```\n\n```\nb\n```"
        result = features_extract(markdown, first_id=3)
        assert result.markdown == (
            "``` { .js docdown_block=3 }\na\n```\n\n``` { .text docdown_block=4 }\nb\n```"
        )
        assert len(result.blocks) == 2

    def test_linked_fences_not_recorded_twice(self):
        """A second pass leaves already linked fences alone"""
        first = features_extract("```js {1}\na\n```", first_id=0)
        second = features_extract(first.markdown, first_id=1)
        assert second.markdown == first.markdown
        assert second.blocks == []

    def test_filetree_fences_not_recorded(self):
        """Component fences are rendered by their own processor"""
        markdown = "```filetree\nsrc/\n  main.py\n```"
        result = features_extract(markdown, first_id=0)
        assert result.markdown == markdown
        assert result.blocks == []

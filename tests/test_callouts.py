"""
Callout tests

Container callouts, unknown types, fence immunity and GitHub alerts.
"""

import pytest

from docdown.lib.callouts import callouts_preprocess, githubAlerts_postprocess
from docdown.lib.converter import html_convert
from docdown.models.context import ProcessingContext


def callout_html(markdown):
    context = ProcessingContext()
    return html_convert(callouts_preprocess(markdown, context), context)


class TestContainerCallouts:
    """:::type blocks"""

    def test_note_default_title(self):
        """Note callout with its default title"""
        html = callout_html(":::note\nHello\n:::")

        assert 'class="docdown-callout docdown-callout--note"' in html
        assert 'role="note"' in html
        assert '<div class="docdown-callout__title">Note</div>' in html
        assert "<p>Hello</p>" in html
        assert 'class="ph ph-info"' in html

    def test_custom_title(self):
        """Text after the type is the title"""
        html = callout_html(":::warning Be careful\nText\n:::")
        assert 'role="alert"' in html
        assert '<div class="docdown-callout__title">Be careful</div>' in html

    @pytest.mark.parametrize("kind,role", [
        ("note", "note"), ("tip", "note"), ("important", "note"),
        ("warning", "alert"), ("danger", "alert"),
    ])
    def test_roles(self, kind, role):
        """Warning and danger are alerts, the rest are notes"""
        assert f'role="{role}"' in callout_html(f":::{kind}\nx\n:::")

    def test_markdown_body(self):
        """Body is rendered as Markdown"""
        html = callout_html(":::tip\n**bold** and `code`\n:::")
        assert "<strong>bold</strong>" in html
        assert "<code>code</code>" in html

    def test_unknown_type_unchanged(self):
        """Unknown types are left exactly as written"""
        markdown = ":::unknowntype\nHello\n:::"
        assert callouts_preprocess(markdown, ProcessingContext()) == markdown

    def test_unterminated_unchanged(self):
        """No closer, no conversion"""
        markdown = ":::note\nHello"
        assert callouts_preprocess(markdown, ProcessingContext()) == markdown

    def test_fence_immunity(self):
        """The trigger inside a fence stays, the one outside converts"""
        fenced = "```md\n:::note\nInside\n:::\n```\n"
        context = ProcessingContext()
        result = callouts_preprocess(fenced + "\n:::note\nOutside\n:::\n", context)

        assert result.startswith(fenced)
        assert len(context.raw_blocks) == 1
        assert "Outside" in context.raw_blocks[0]


class TestGithubAlerts:
    """> [!TYPE] blockquotes"""

    def test_caution_maps_to_danger(self):
        """CAUTION renders as a danger callout"""
        html = githubAlerts_postprocess(
            html_convert("> [!CAUTION]\n> Do not do this"), ProcessingContext()
        )
        assert "docdown-callout--danger" in html
        assert 'role="alert"' in html
        assert "<p>Do not do this</p>" in html
        assert "<blockquote>" not in html

    def test_note_alert(self):
        """NOTE gets the default Note title"""
        html = githubAlerts_postprocess(html_convert("> [!NOTE]\n> Heads up"), ProcessingContext())
        assert '<div class="docdown-callout__title">Note</div>' in html

    def test_plain_blockquote_untouched(self):
        """Ordinary quotes are not callouts"""
        source = html_convert("> Just a quote")
        assert githubAlerts_postprocess(source, ProcessingContext()) == source

    def test_following_blocks_kept(self):
        """Paragraphs and lists after the marker line stay in the callout"""
        html = githubAlerts_postprocess(
            html_convert("> [!TIP]\n> First\n>\n> - item"), ProcessingContext()
        )
        assert "docdown-callout--tip" in html
        assert "<p>First</p>" in html
        assert "<li>item</li>" in html

    def test_marker_not_first(self):
        """A marker after other quote content is literal text"""
        source = html_convert("> Intro\n>\n> [!NOTE] later")
        html = githubAlerts_postprocess(source, ProcessingContext())
        assert "docdown-callout" not in html
        assert "[!NOTE] later" in html

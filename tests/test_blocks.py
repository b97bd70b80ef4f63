"""
Accordion, card and step component tests
"""

from docdown.lib.accordions import accordions_preprocess
from docdown.lib.cards import cards_preprocess
from docdown.lib.converter import html_convert
from docdown.lib.steps import steps_parse, steps_preprocess
from docdown.models.context import ProcessingContext


def rendered(preprocess, markdown):
    context = ProcessingContext()
    return html_convert(preprocess(markdown, context), context)


class TestAccordion:
    """:::details blocks"""

    def test_title_and_open(self):
        """Attributes set the summary and open state"""
        html = rendered(accordions_preprocess, ':::details{title="Advanced" open}\nHidden **text**\n:::')

        assert '<details class="docdown-accordion" open>' in html
        assert '<span class="docdown-accordion__title">Advanced</span>' in html
        assert "<strong>text</strong>" in html

    def test_defaults(self):
        """Closed, titled Details"""
        html = rendered(accordions_preprocess, ":::details\nBody\n:::")
        assert '<details class="docdown-accordion">' in html
        assert ">Details</span>" in html

    def test_single_quoted_title(self):
        """Quote styles are interchangeable"""
        html = rendered(accordions_preprocess, ":::details{title='More info'}\nx\n:::")
        assert ">More info</span>" in html

    def test_unterminated_unchanged(self):
        """No closer, no conversion"""
        markdown = ":::details\nBody"
        assert accordions_preprocess(markdown, ProcessingContext()) == markdown


class TestCards:
    """:::cards grids"""

    SOURCE = (
        ":::cards\n"
        '::card{title="Quick start" icon="rocket" href="/start"}\n'
        "Up and running.\n"
        "::\n"
        "\n"
        '::card{title="Reference"}\n'
        "Every option.\n"
        "::\n"
        ":::"
    )

    def test_link_card(self):
        """href turns the card into a link"""
        html = rendered(cards_preprocess, self.SOURCE)
        assert '<a class="docdown-card docdown-card--link" href="/start">' in html
        assert 'class="ph ph-rocket"' in html
        assert "<p>Up and running.</p>" in html

    def test_plain_card(self):
        """No href, no icon wrapper"""
        html = rendered(cards_preprocess, self.SOURCE)
        assert html.count('<div class="docdown-card">') == 1
        assert html.count("docdown-card__icon") == 1
        assert '<div class="docdown-card__title">Reference</div>' in html

    def test_default_title(self):
        """Untitled cards are called Card"""
        html = rendered(cards_preprocess, ":::cards\n::card{}\nx\n::\n:::")
        assert '<div class="docdown-card__title">Card</div>' in html

    def test_no_cards_unchanged(self):
        """A grid without cards is left alone"""
        markdown = ":::cards\njust text\n:::"
        assert cards_preprocess(markdown, ProcessingContext()) == markdown


class TestSteps:
    """:::steps lists"""

    SOURCE = ":::steps\n### Install\npip install docdown\n\n### Configure\nEdit it\n\n### Build\nRun it\n:::"

    def test_numbering(self):
        """Steps are numbered from one"""
        html = rendered(steps_preprocess, self.SOURCE)
        numbers = [f'<span class="docdown-step__number">{n}</span>' for n in (1, 2, 3)]
        for number in numbers:
            assert number in html
        assert '<h3 class="docdown-step__title">Configure</h3>' in html

    def test_last_step(self):
        """Only the final step is last and has no connector"""
        html = rendered(steps_preprocess, self.SOURCE)
        assert html.count("docdown-step--last") == 1
        assert html.count("docdown-step__connector") == 2

    def test_heading_inside_fence_ignored(self):
        """### in a fence is body text"""
        steps = steps_parse("### One\n```sh\n### comment\n```\n### Two\nx")
        assert [step.title for step in steps] == ["One", "Two"]

    def test_no_headings_unchanged(self):
        """Steps block without headings is left alone"""
        markdown = ":::steps\nnothing\n:::"
        assert steps_preprocess(markdown, ProcessingContext()) == markdown

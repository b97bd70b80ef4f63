"""
Docdown Pygments lexer tests
"""

from pygments.token import Token

from docdown.lib.lexer import DocdownLexer


def tokens_get(text):
    return [(token, value) for token, value in DocdownLexer().get_tokens(text) if value.strip()]


class TestDocdownLexer:
    """Token types for component markup"""

    def test_container(self):
        """Opener, tab label and closer"""
        tokens = tokens_get(":::tabs\n== npm\nnpm i\n:::\n")
        assert (Token.Punctuation, ":::") in tokens
        assert (Token.Keyword.Declaration, "tabs") in tokens
        assert (Token.Generic.Heading, "== npm") in tokens
        assert tokens[-1] == (Token.Punctuation, ":::")

    def test_attributes(self):
        """Attribute keys and values inside braces"""
        tokens = tokens_get(':::details{title="More" open}\nx\n:::\n')
        assert (Token.Keyword.Declaration, "details") in tokens
        assert (Token.Name.Attribute, "title") in tokens
        assert (Token.Literal.String, '"More"') in tokens
        assert (Token.Name.Attribute, "open") in tokens

    def test_inline_components(self):
        """Badges, icons and code markers"""
        tokens = tokens_get("Status :badge[Beta] :rocket: x // [!code focus]\n")
        assert (Token.Name.Function, ":badge") in tokens
        assert (Token.Name.Function, ":rocket:") in tokens
        assert (Token.Comment.Special, "[!code focus]") in tokens

    def test_snippet_import(self):
        """Import path is highlighted"""
        tokens = tokens_get("<<< @/examples/app.js\n")
        assert (Token.Literal.String.Other, "@/examples/app.js") in tokens

    def test_aliases(self):
        """Lexer names"""
        assert DocdownLexer.aliases == ["docdown", "dd"]

"""
Custom Pygments lexer for docdown component markup

Highlights docdown's Markdown extensions when documentation shows its own
syntax, e.g. inside a ```docdown fence. Registered with Pygments through
the ``pygments.lexers`` entry point, so ``get_lexer_by_name("docdown")``
(and therefore codehilite) finds it once the package is installed.

Token types:
- Keyword.Declaration: container openers (:::tabs, :::note, ...)
- Punctuation: ::: and :: delimiters, braces, brackets
- Name.Attribute / Literal.String: attribute keys and values
- Name.Function: inline components (:badge, :icon:)
- Generic.Heading: tab labels (== Label) and step headings
- Comment.Special: [!code ...] markers
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Literal,
    Name,
    Punctuation,
    String,
    Text,
)


class DocdownLexer(RegexLexer):
    """
    Lexer for docdown component markup

    Example:
        :::tabs
        == npm
        npm i
        :::

    Tokens:
        ::: -> Punctuation
        tabs -> Keyword.Declaration
        == npm -> Generic.Heading
        npm i -> Text
    """

    name = 'Docdown'
    aliases = ['docdown', 'dd']
    filenames = []

    tokens = {
        'root': [
            # Container openers with optional attribute list
            (r'^(:::)([ \t]*)([\w-]+)(\{)',
             bygroups(Punctuation, Text, Keyword.Declaration, Punctuation), 'attributes'),
            (r'^(:::)([ \t]*)([\w-]+)([^\n]*)(\n)',
             bygroups(Punctuation, Text, Keyword.Declaration, Generic.Subheading, Text)),

            # Container closers
            (r'^:::[ \t]*$', Punctuation),

            # Card entries
            (r'^(::)(card)(\{)', bygroups(Punctuation, Keyword.Declaration, Punctuation), 'attributes'),
            (r'^::[ \t]*$', Punctuation),

            # Tab labels and step headings
            (r'^==[ \t]+[^\n]*', Generic.Heading),
            (r'^###[ \t]+[^\n]*', Generic.Heading),

            # Snippet imports
            (r'^(<<<)([ \t]+)(@/[^\s{]+)', bygroups(Punctuation, Text, String.Other)),

            # Code markers
            (r'\[!code[ \t]*(?:\+\+|--|focus|error|warning)[ \t]*\]', Comment.Special),

            # Inline components
            (r'(:badge)(\[)([^\]]*)(\])', bygroups(Name.Function, Punctuation, String, Punctuation)),
            (r'\{', Punctuation, 'attributes'),
            (r':[a-zA-Z][\w-]*:(?:[a-z]+:)?', Name.Function),

            (r'[^:\[{<=#\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'attributes': [
            (r'\}', Punctuation, '#pop'),
            (r'([\w-]+)(=)("[^"]*"|\'[^\']*\'|[^\s,}]+)',
             bygroups(Name.Attribute, Punctuation, Literal.String)),
            (r'[\w-]+', Name.Attribute),
            (r'[\s,]+', Text),
            (r'.', Text),
        ],
    }


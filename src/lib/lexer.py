"""
Pygments lexer for HTML fragments

Tokenizes the HTML-like sources handled by htmlinclude into a flat token
stream that TreeBuilder turns into a node tree. Unlike pygments' own
HtmlLexer this lexer:

- keeps tag and attribute names exactly as written (``$title``, ``:class``)
- never delegates script/style bodies to other lexers; the content of
  opaque elements is emitted verbatim
- has a catch-all rule in every state, so newlines never reset the state
  stack

Token types:
- StartTag: ``<div`` (the tag opener, attributes follow)
- AttrName / AttrValue: attribute name and raw (still quoted) value
- TagClose: ``>`` or ``/>``
- EndTag: ``</div>``
- Comment.Multiline: ``<!-- ... -->``
- Comment.Preproc: ``<!DOCTYPE ...>``, ``<?xml ...?>``
- Text: everything else
"""

from typing import Dict, List

from pygments.lexer import RegexLexer, bygroups, include
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Operator,
    Comment,
)


StartTag = Name.Tag
EndTag = Name.Tag.End
TagClose = Punctuation
AttrName = Name.Attribute
AttrValue = String

# Elements whose content is never parsed as markup
OPAQUE_ELEMENTS = ('script', 'style', 'pre', 'noscript')


def _opaque_states(name: str) -> Dict[str, List]:
    """
    Build the lexer states for one opaque element

    ``<name-open>`` lexes the attributes of the start tag; a self-closing
    ``/>`` pops both states, ``>`` drops into ``<name-body>`` which swallows
    everything up to the matching end tag.
    """
    return {
        f'{name}-open': [
            include('attributes'),
            (r'/\s*>', TagClose, '#pop:2'),
            (r'>', TagClose, '#pop'),
            (r'[\s\S]', Text),
        ],
        f'{name}-body': [
            (rf'(?i)[\s\S]+?(?=</{name}\s*>)', Text),
            (rf'(?i)</{name}\s*>', EndTag, '#pop'),
            (r'[\s\S]+', Text),
        ],
    }


def _opaque_rules() -> List:
    return [
        (rf'(?i)<{name}(?=[\s/>])', StartTag, (f'{name}-body', f'{name}-open'))
        for name in OPAQUE_ELEMENTS
    ]


class FragmentLexer(RegexLexer):
    """
    Lexer for HTML documents and fragments containing include directives

    Example:
        <include file="card.html" $title="Hi" class="wide">Body</include>

    Tokens:
        <include → StartTag
        file, $title, class → AttrName
        "card.html", "Hi", "wide" → AttrValue
        > → TagClose
        Body → Text
        </include> → EndTag
    """

    name = 'HTML fragment'
    aliases = ['html-fragment']
    filenames = ['*.html', '*.svg']

    tokens = {
        'root': [
            (r'<!--[\s\S]*?-->', Comment.Multiline),
            (r'<!--[\s\S]*', Comment.Multiline),
            (r'<![^>]*>', Comment.Preproc),
            (r'<\?[\s\S]*?\?>', Comment.Preproc),

            *_opaque_rules(),

            (r'</[^\s>]+\s*>', EndTag),
            (r'<[A-Za-z][^\s/>]*', StartTag, 'tag'),

            (r'[^<]+', Text),
            (r'<', Text),
        ],

        'attributes': [
            (r'\s+', Text),
            (r'''([^\s"'>/=]+)(\s*)(=)(\s*)("[^"]*"|'[^']*'|[^\s"'>]+)''',
             bygroups(AttrName, Text, Operator, Text, AttrValue)),
            (r'''[^\s"'>/=]+''', AttrName),
        ],

        'tag': [
            include('attributes'),
            (r'/\s*>', TagClose, '#pop'),
            (r'>', TagClose, '#pop'),
            (r'[\s\S]', Text),
        ],

        **_opaque_states('script'),
        **_opaque_states('style'),
        **_opaque_states('pre'),
        **_opaque_states('noscript'),
    }


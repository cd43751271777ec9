"""
Fragment tree for HTML-like documents

Builds a mutable node tree from FragmentLexer tokens and serializes it back
to text. The tree is deliberately non-normalizing: whitespace, comments,
doctypes, raw attribute values and the content of opaque elements
(script, style, pre, noscript) are reproduced as written, so only the
parts of a document that the expander edits change in the output.

Example:
    >>> doc = fragment_parse('<div class="card"><slot/></div>')
    >>> slot = doc.element_find('slot')
    >>> slot.replace_with(*fragment_parse('Hello').children)
    >>> doc.html()
    '<div class="card">Hello</div>'
"""

from typing import Dict, Iterator, List, Optional

from .lexer import (
    FragmentLexer,
    StartTag,
    EndTag,
    TagClose,
    AttrName,
    AttrValue,
)
from pygments.token import Comment


# Elements that never have content or an end tag
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})

_P_CLOSERS = frozenset({
    'address', 'article', 'aside', 'blockquote', 'details', 'dialog',
    'div', 'dl', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hgroup', 'hr', 'main',
    'menu', 'nav', 'ol', 'p', 'pre', 'section', 'table', 'ul',
})

# Open element -> start tags that end it without an end tag
IMPLIED_END = {
    'p': _P_CLOSERS,
    'li': frozenset({'li'}),
    'dt': frozenset({'dt', 'dd'}),
    'dd': frozenset({'dt', 'dd'}),
    'option': frozenset({'option', 'optgroup'}),
    'optgroup': frozenset({'optgroup'}),
    'tr': frozenset({'tr', 'tbody', 'tfoot'}),
    'td': frozenset({'td', 'th', 'tr', 'tbody', 'tfoot'}),
    'th': frozenset({'td', 'th', 'tr', 'tbody', 'tfoot'}),
    'thead': frozenset({'tbody', 'tfoot'}),
    'tbody': frozenset({'tbody', 'tfoot'}),
}

_lexer = FragmentLexer()


class Node:
    """Base class of every node in a fragment tree"""

    parent: Optional['Element'] = None

    def html(self) -> str:
        raise NotImplementedError

    def remove(self) -> None:
        """Detach this node from its parent (no-op if already detached)"""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def replace_with(self, *nodes: 'Node') -> None:
        """
        Replace this node by the given nodes, in order

        The replacement nodes are detached from wherever they currently
        live before being spliced in.
        """
        parent = self.parent
        if parent is None:
            return
        for node in nodes:
            node.remove()
        index = parent.children.index(self)
        for node in nodes:
            node.parent = parent
        parent.children[index:index + 1] = list(nodes)
        self.parent = None


class TextNode(Node):
    """Raw text, emitted exactly as it was read"""

    def __init__(self, text: str) -> None:
        self.text = text

    def html(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


class CommentNode(Node):
    """Comment, doctype or processing instruction, kept verbatim"""

    def __init__(self, text: str) -> None:
        self.text = text

    def html(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"CommentNode({self.text!r})"


class Element(Node):
    """
    Element node

    Attributes:
        tag: Tag name as written in the source (case preserved)
        attributes: Ordered mapping of attribute name to raw value;
                    None marks a bare boolean attribute (``<input disabled>``)
        children: Ordered child nodes
        self_closing: Element was written as ``<tag/>``
        end_tag: End tag text as written (``</div>``), or None when the
                 source left the element open
    """

    def __init__(
        self,
        tag: str,
        attributes: Optional[Dict[str, Optional[str]]] = None,
        self_closing: bool = False,
        end_tag: Optional[str] = None,
    ) -> None:
        self.tag = tag
        self.attributes: Dict[str, Optional[str]] = attributes or {}
        self.children: List[Node] = []
        self.self_closing = self_closing
        self.end_tag = end_tag

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, {self.attributes!r})"

    def tag_is(self, name: str) -> bool:
        return self.tag.lower() == name.lower()

    def attr_get(self, name: str) -> Optional[str]:
        """Get an attribute value; bare attributes read as ''"""
        if name not in self.attributes:
            return None
        value = self.attributes[name]
        return '' if value is None else value

    def attr_set(self, name: str, value: Optional[str]) -> None:
        self.attributes[name] = value

    def child_append(self, node: Node) -> None:
        node.remove()
        node.parent = self
        self.children.append(node)

    def descendants_iter(self) -> Iterator[Node]:
        """Pre-order (document order) walk over all descendants"""
        for child in self.children:
            yield child
            if isinstance(child, Element):
                yield from child.descendants_iter()

    def element_find(self, name: str) -> Optional['Element']:
        """First descendant element with the given tag, in document order"""
        for node in self.descendants_iter():
            if isinstance(node, Element) and node.tag_is(name):
                return node
        return None

    def elements_findAll(self, name: str) -> List['Element']:
        return [
            node for node in self.descendants_iter()
            if isinstance(node, Element) and node.tag_is(name)
        ]

    def elements_children(self) -> List['Element']:
        """Direct children that are elements (text and comments skipped)"""
        return [child for child in self.children if isinstance(child, Element)]

    def innerHTML(self) -> str:
        return ''.join(child.html() for child in self.children)

    def startTag_render(self) -> str:
        parts = [self.tag]
        for name, value in self.attributes.items():
            if value is None:
                parts.append(name)
            else:
                parts.append(f'{name}="{value.replace(chr(34), "&quot;")}"')
        return '<' + ' '.join(parts)

    def html(self) -> str:
        opening = self.startTag_render()
        if self.self_closing and not self.children:
            return opening + ' />'
        return f"{opening}>{self.innerHTML()}{self.end_tag or ''}"


class Document(Element):
    """Root of a parsed document or fragment; serializes as its children"""

    def __init__(self) -> None:
        super().__init__('#document')

    def html(self) -> str:
        return self.innerHTML()

    def __repr__(self) -> str:
        return f"Document({len(self.children)} children)"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in '"\'' and value[-1] == value[0]:
        return value[1:-1]
    return value


class TreeBuilder:
    """
    Turns a FragmentLexer token stream into a Document

    Handles:
    - Void elements (no children, no end tag)
    - Self-closing syntax on any element (``<slot/>``)
    - Implied end tags (``<p>a<p>b``, ``<li>a<li>b``), see IMPLIED_END
    - Stray end tags (kept as text)
    - Unclosed elements (left open, serialized without an end tag)
    - Duplicate attributes (first occurrence wins)
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.document = Document()
        self.stack: List[Element] = [self.document]
        self.pending: Optional[Element] = None
        self.pending_attr: Optional[str] = None

    def build(self) -> Document:
        for _, ttype, value in _lexer.get_tokens_unprocessed(self.source):
            if ttype is EndTag:
                self.endTag_handle(value)
            elif ttype is StartTag:
                self.pending = Element(value[1:])
                self.pending_attr = None
            elif self.pending is not None:
                self.tagToken_handle(self.pending, ttype, value)
            elif ttype in Comment:
                self.stack[-1].child_append(CommentNode(value))
            else:
                self.text_append(value)

        if self.pending is not None:
            self.startTag_finish(self.pending, self_closing=False)
        return self.document

    def tagToken_handle(self, element: Element, ttype, value: str) -> None:
        """Attribute and close tokens arriving while a start tag is open"""
        if ttype is AttrName:
            if value in element.attributes:
                self.pending_attr = None
            else:
                element.attributes[value] = None
                self.pending_attr = value
        elif ttype is AttrValue:
            if self.pending_attr is not None:
                element.attributes[self.pending_attr] = _unquote(value)
            self.pending_attr = None
        elif ttype is TagClose:
            self.startTag_finish(element, self_closing=value.startswith('/'))

    def impliedEnd_apply(self, name: str) -> None:
        """Pop open elements that a start tag ``name`` ends implicitly"""
        while len(self.stack) > 1:
            closers = IMPLIED_END.get(self.stack[-1].tag.lower())
            if closers is None or name not in closers:
                return
            self.stack.pop()

    def startTag_finish(self, element: Element, self_closing: bool) -> None:
        self.pending = None
        self.pending_attr = None
        element.self_closing = self_closing
        self.impliedEnd_apply(element.tag.lower())
        self.stack[-1].child_append(element)
        if not self_closing and element.tag.lower() not in VOID_ELEMENTS:
            self.stack.append(element)

    def endTag_handle(self, value: str) -> None:
        if self.pending is not None:
            self.startTag_finish(self.pending, self_closing=False)
        name = value[2:-1].strip().lower()
        for depth in range(len(self.stack) - 1, 0, -1):
            element = self.stack[depth]
            if element.tag.lower() == name:
                element.end_tag = value
                del self.stack[depth:]
                return
        self.text_append(value)

    def text_append(self, text: str) -> None:
        parent = self.stack[-1]
        if parent.children and isinstance(parent.children[-1], TextNode):
            parent.children[-1].text += text
        else:
            parent.child_append(TextNode(text))


def fragment_parse(source: str) -> Document:
    """Parse HTML text into a Document"""
    return TreeBuilder(source).build()

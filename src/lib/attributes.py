"""
Attribute merging onto an included fragment's root element

Every pass-through attribute of the <include> tag ends up on the single
top-level element of the fragment. class and style are combined with the
element's own values; anything else overwrites.
"""

from .tree import Document, Element
from .variables import SIGIL

# Attributes of <include> that are consumed by the directive itself
DIRECTIVE_ATTRIBUTES = frozenset({'file'})


def class_merge(existing: str, incoming: str) -> str:
    return f"{existing} {incoming}".strip()


def style_merge(existing: str, incoming: str) -> str:
    """
    Concatenate two style declarations

    Example:
        >>> style_merge('color: red;', 'margin: 0')
        'color: red; margin: 0;'
    """
    parts = [s.strip().rstrip(';') for s in (existing, incoming) if s]
    return '; '.join(parts) + ';'


def passthrough_is(name: str) -> bool:
    return not name.startswith(SIGIL) and name not in DIRECTIVE_ATTRIBUTES


def rootAttributes_merge(tag: Element, fragment: Document) -> bool:
    """
    Copy pass-through attributes of tag onto the fragment root

    Args:
        tag: The <include> element
        fragment: Expanded, slot-filled fragment

    Returns:
        False if the fragment has no single root element while tag carries
        class or style (those attributes are then dropped), True otherwise
    """
    roots = fragment.elements_children()
    if len(roots) != 1:
        return not (tag.attr_get('class') or tag.attr_get('style'))

    root = roots[0]
    for name, value in tag.attributes.items():
        if not passthrough_is(name):
            continue
        if name == 'class':
            root.attr_set('class', class_merge(root.attr_get('class') or '', value or ''))
        elif name == 'style':
            root.attr_set('style', style_merge(root.attr_get('style') or '', value or ''))
        else:
            root.attr_set(name, value)
    return True

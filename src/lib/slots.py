"""
Slot substitution

A caller passes markup into an included fragment through the body of the
<include> tag:

    <include file="card.html">
      <template slot="footer">Read more</template>
      Card body
    </include>

and the fragment marks the insertion points with <slot> elements, whose
own content is the fallback:

    <div class="card"><slot></slot><footer><slot name="footer">-</slot></footer></div>
"""

from typing import Dict, List, Optional

from .tree import Document, Element, fragment_parse

DEFAULT_SLOT = 'default'


def include_owner(node: Element, stop: Element) -> Optional[Element]:
    """Nearest <include> ancestor of node, searching no further than stop"""
    parent = node.parent
    while parent is not None:
        if parent.tag_is('include'):
            return parent
        if parent is stop:
            return None
        parent = parent.parent
    return None


def templates_find(tag: Element) -> List[Element]:
    """<template slot="..."> descendants that belong to tag, not to a nested include"""
    return [
        tpl for tpl in tag.elements_findAll('template')
        if tpl.attr_get('slot') and include_owner(tpl, tag) is tag
    ]


def slotMap_build(tag: Element) -> Dict[str, str]:
    """
    Build the slot map of an <include> tag

    Named templates are detached from the tag; whatever remains of its
    content becomes the 'default' entry (if not blank). A template named
    'default' takes precedence over that remaining content.

    Args:
        tag: The <include> element (mutated: templates removed)

    Returns:
        Mapping of slot name to trimmed markup
    """
    named: Dict[str, str] = {}
    for tpl in templates_find(tag):
        named[tpl.attr_get('slot') or DEFAULT_SLOT] = tpl.innerHTML().strip()
        tpl.remove()

    slot_map: Dict[str, str] = {}
    remaining = tag.innerHTML().strip()
    if remaining:
        slot_map[DEFAULT_SLOT] = remaining
    slot_map.update(named)
    return slot_map


def slots_fill(fragment: Document, slot_map: Dict[str, str]) -> int:
    """
    Replace every <slot> of fragment with mapped or fallback markup

    Slots are visited last to first so a slot nested in another slot's
    fallback content is resolved before the enclosing slot is replaced.
    Inserted markup is never scanned for slots again.

    Returns:
        Number of slots replaced
    """
    slots = fragment.elements_findAll('slot')
    for slot in reversed(slots):
        name = slot.attr_get('name') or DEFAULT_SLOT
        if name in slot_map:
            markup = slot_map[name]
        else:
            markup = slot.innerHTML().strip()
        slot.replace_with(*fragment_parse(markup).children)
    return len(slots)

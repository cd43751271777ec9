"""
Attribute merge and slot map tests

Unit tests for the class/style merge rules and for building slot maps
from <include> bodies.
"""

import pytest

from htmlinclude.lib.attributes import class_merge, style_merge, rootAttributes_merge
from htmlinclude.lib.slots import slotMap_build
from htmlinclude.lib.tree import fragment_parse


class TestMergeRules:
    """Test class and style concatenation"""

    def test_class_merge(self):
        assert class_merge("card", "highlight") == "card highlight"
        assert class_merge("", "highlight") == "highlight"
        assert class_merge("card", "") == "card"

    def test_style_merge_strips_semicolons(self):
        """Trailing semicolons are normalized"""
        assert style_merge("color: red;;", "margin: 0;") == "color: red; margin: 0;"

    def test_style_merge_single_side(self):
        """One empty side yields a single terminated declaration"""
        assert style_merge("", "margin: 0") == "margin: 0;"
        assert style_merge("color: red", "") == "color: red;"


class TestRootAttributes:
    """Test attribute transfer onto a fragment"""

    def test_single_root(self):
        """Attributes land on the only element"""
        tag = fragment_parse('<include file="x.html" title="t" $v="1"></include>').children[0]
        fragment = fragment_parse("<p>x</p>")
        assert rootAttributes_merge(tag, fragment) is True
        assert fragment.html() == '<p title="t">x</p>'

    def test_no_root_with_style(self):
        """Text-only fragments cannot take style"""
        tag = fragment_parse('<include file="x.html" style="a: b"></include>').children[0]
        fragment = fragment_parse("just text")
        assert rootAttributes_merge(tag, fragment) is False
        assert fragment.html() == "just text"


class TestSlotMap:
    """Test slot map construction"""

    def test_default_and_named(self):
        """Templates are taken out; the rest is the default entry"""
        tag = fragment_parse(
            '<include file="x.html"> <template slot="head"> H </template> Body </include>'
        ).children[0]
        assert slotMap_build(tag) == {"head": "H", "default": "Body"}

    def test_default_template_wins(self):
        """A template named 'default' overrides the body"""
        tag = fragment_parse(
            '<include file="x.html">Body<template slot="default">T</template></include>'
        ).children[0]
        assert slotMap_build(tag) == {"default": "T"}

    def test_blank_body(self):
        """Whitespace-only bodies give no default entry"""
        tag = fragment_parse('<include file="x.html">\n  \n</include>').children[0]
        assert slotMap_build(tag) == {}

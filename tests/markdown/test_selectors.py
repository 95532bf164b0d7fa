"""Tests for the inline selector micro-syntax."""

from __future__ import annotations

import pytest

from sitcom.errors import SelectorError
from sitcom.markdown.selectors import is_selector, selector_to_attrs


def test_selector_produces_id_class_and_attributes() -> None:
    attrs = selector_to_attrs("#a.b.c[x=1]")

    assert attrs.count('id="a"') == 1
    assert 'class="b c"' in attrs
    assert 'x="1"' in attrs
    assert attrs == ' id="a" class="b c" x="1"'


def test_classes_are_deduplicated_in_first_seen_order() -> None:
    assert selector_to_attrs(".wide.dark.wide") == ' class="wide dark"'


def test_bracketed_values_may_contain_selector_characters() -> None:
    attrs = selector_to_attrs('[href=#top][data-size=1.5][title="say "hi""]')
    assert attrs == ' href="#top" data-size="1.5" title="say &quot;hi&quot;"'


def test_bare_attributes_render_as_booleans() -> None:
    assert selector_to_attrs("[hidden].x") == ' class="x" hidden'


@pytest.mark.parametrize("selector", ["#a#b", "bad text", "#a bad", ".ok[x=1] tail"])
def test_malformed_selectors_raise(selector: str) -> None:
    with pytest.raises(SelectorError):
        selector_to_attrs(selector)


def test_is_selector_requires_leading_marker() -> None:
    assert is_selector("#id")
    assert is_selector(".cls")
    assert is_selector("[x=1]")
    assert not is_selector("A tooltip")
    assert not is_selector("")
    assert not is_selector(None)

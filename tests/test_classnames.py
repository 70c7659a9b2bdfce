"""
Tests for classname resolution.
"""

import logging

from bento.classnames import (
    block_class,
    build_classes,
    classnames,
    flatten_classes,
    join_classes,
    process_class_part,
)
from bento.hooks import Hooks


class TestHelpers:
    def test_flatten(self):
        assert flatten_classes(["a", ["b", ["c"]], None, 3]) == ["a", "b", "c"]

    def test_join_dedupes_and_trims(self):
        assert join_classes([" a ", "b a", "", ["c", "b"]]) == "a b c"


class TestBlockClass:
    def test_block_only(self):
        assert block_class("", "card") == "card"

    def test_element_and_modifier(self):
        assert block_class("title", "card", "large") == "card__title--large"

    def test_custom_separators(self):
        assert block_class("title", "card", "large", separator="-", mod_separator="_") == "card-title_large"

    def test_missing_block_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert block_class("title", "") == ""
        assert "block_class: No block name provided." in caplog.text


class TestProcessClassPart:
    def test_string(self):
        assert process_class_part("card") == ["card"]

    def test_conditional_map(self):
        assert process_class_part({"active": True, "disabled": False, "base": 1}) == ["active", "base"]

    def test_integer_keys_are_unconditional(self):
        assert process_class_part({0: "always", "maybe": None}) == ["always"]

    def test_flat_list(self):
        assert process_class_part(["a", {"b": True, "c": False}, ["d"]]) == ["a", "b", "d"]

    def test_nested_lists(self):
        assert process_class_part([["a"], ["b", {"c": True}]]) == [["a"], ["b", "c"]]

    def test_callable_receives_props_and_slots(self):
        result = process_class_part(
            lambda props, slots: ["card", {"has-footer": bool(slots.get("footer"))}],
            {},
            {"footer": "x"},
        )
        assert result == ["card", "has-footer"]

    def test_callable_with_props_only(self):
        assert process_class_part(lambda props: props["variant"], {"variant": "info"}) == ["info"]

    def test_empty_values(self):
        assert process_class_part(None) == []
        assert process_class_part(False) == []

    def test_non_string_list_items_are_dropped(self):
        assert process_class_part(["a", 1, 2.5, "b"]) == ["a", "b"]


class TestBuildClasses:
    def test_wrapped(self):
        assert build_classes(["a", "b", "a"]) == 'class="a b"'

    def test_unwrapped(self):
        assert build_classes(["a", "b"], wrap=False) == "a b"

    def test_empty(self):
        assert build_classes([]) == ""
        assert build_classes(["", " "]) == ""

    def test_nested(self):
        assert build_classes([["a"], ["b"]]) == ['class="a"', 'class="b"']

    def test_escaped(self):
        assert build_classes(['x"y']) == 'class="x&quot;y"'

    def test_mixed_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert build_classes([["a"], "b"], "item") == ""
        assert "classnames: Part 'item' has a mix of string and array children" in caplog.text


class TestClassnames:
    def test_conditional_classes(self):
        result = classnames({"root": {"active": True, "disabled": False, "base": 1}})
        assert result == {"root": 'class="active base"'}

    def test_multiple_parts(self):
        result = classnames(
            {
                "root": lambda props: ["alert", {"alert--dismissible": props["dismissible"]}],
                "title": "alert__title",
            },
            {"dismissible": True},
        )
        assert result == {"root": 'class="alert alert--dismissible"', "title": 'class="alert__title"'}

    def test_nested_part(self):
        result = classnames({"item": lambda props: [[f"item-{i}"] for i in range(props["count"])]}, {"count": 2})
        assert result == {"item": ['class="item-0"', 'class="item-1"']}

    def test_malformed_part_fails_whole_call(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = classnames({"root": "ok", "title": lambda props: 42})
        assert result is False
        assert "classnames: Part 'title'" in caplog.text

    def test_number_in_class_list_keeps_other_parts(self):
        result = classnames({"root": ["a", 1], "title": "t"})
        assert result == {"root": 'class="a"', "title": 'class="t"'}

    def test_unwrapped(self):
        assert classnames({"root": ["a", "b"]}, wrap=False) == {"root": "a b"}

    def test_part_hook(self):
        hooks = Hooks()
        seen = []

        def hook(value, class_list, props):
            seen.append((class_list, props))
            return value.replace("card", "tile")

        hooks.add_filter("bento/component/Card/class/root", hook)
        result = classnames({"root": "card"}, {"x": 1}, "Card", hooks=hooks)
        assert result == {"root": 'class="tile"'}
        assert seen == [(["card"], {"x": 1})]

    def test_whole_map_hook(self):
        hooks = Hooks()
        hooks.add_filter("bento/component/Card/classes", lambda result: {**result, "body": 'class="b"'})
        assert classnames({"root": "card"}, {}, "Card", hooks=hooks) == {"root": 'class="card"', "body": 'class="b"'}

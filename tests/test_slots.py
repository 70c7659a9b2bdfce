"""
Tests for named content slots.
"""

import pytest

from bento.core import SafeHTML
from bento.errors import SlotTypeMismatch
from bento.hooks import Hooks
from bento.slots import DEFAULT_SLOT, SlotStore


class TestSlotStore:
    def test_unset_slot_returns_fallback(self):
        slots = SlotStore("Card")
        assert slots.get("footer", "<p>none</p>") == "<p>none</p>"

    def test_default_slot_name(self):
        slots = SlotStore("Card")
        slots.set(None, "body")
        assert slots.has(DEFAULT_SLOT)
        assert slots.get() == "body"
        assert slots.get("") == "body"

    def test_override_replaces(self):
        slots = SlotStore("Card")
        slots.set("footer", "a")
        slots.set("footer", "b")
        assert slots.get("footer") == "b"

    def test_append_keeps_order(self):
        slots = SlotStore("Card")
        slots.set("footer", "a")
        slots.set("footer", "b", override=False)
        slots.set("footer", lambda: "c", override=False)
        assert slots.get("footer") == "abc"

    def test_callable_receives_scope_positionally(self):
        slots = SlotStore("List")
        slots.set("item", lambda item, index: f"<li>{index}:{item}</li>")
        assert slots.get("item", scope={"item": "apple", "index": 0}) == "<li>0:apple</li>"

    def test_callable_may_ignore_scope(self):
        slots = SlotStore("List")
        slots.set("item", lambda: "static")
        assert slots.get("item", scope={"item": "x"}) == "static"

    def test_safe_html_content(self):
        slots = SlotStore("Card")
        slots.set("title", SafeHTML("<b>t</b>"))
        assert slots.get("title") == "<b>t</b>"

    def test_remove(self):
        slots = SlotStore("Card")
        slots.set("footer", "x")
        slots.remove("footer")
        assert not slots.has("footer")


class TestSlotSchema:
    def test_type_mismatch(self):
        slots = SlotStore("Card")
        slots.define({"title": "string"})
        with pytest.raises(SlotTypeMismatch) as exc:
            slots.set("title", lambda: "x")
        assert exc.value.name == "title"
        assert exc.value.actual == "callable"

    def test_callable_allowed(self):
        slots = SlotStore("Card")
        slots.define({"title": ["string", "callable"]})
        slots.set("title", lambda: "x")
        assert slots.get("title") == "x"

    def test_undeclared_slot_accepts_anything(self):
        slots = SlotStore("Card")
        slots.define({"title": "string"})
        slots.set("extra", 12)
        assert slots.get("extra") == "12"

    def test_resolve_covers_declared_slots_only(self):
        slots = SlotStore("Card")
        slots.define({"title": "string", "footer": "string"})
        slots.set("title", "T")
        slots.set("aside", "A")
        assert slots.resolve() == {"title": "T", "footer": ""}


class TestSlotState:
    def test_unset_slot(self):
        slots = SlotStore("Card")
        assert not slots.has("footer")
        assert slots.is_empty("footer")
        assert not slots.is_active("footer")

    def test_whitespace_only_slot_is_empty(self):
        slots = SlotStore("Card")
        slots.set("footer", "   \n ")
        assert slots.has("footer")
        assert slots.is_empty("footer")
        assert not slots.is_active("footer")

    def test_callable_rendering_blank_is_empty(self):
        slots = SlotStore("Card")
        slots.set("footer", lambda: "")
        assert slots.is_empty("footer")

    def test_filled_slot_is_active(self):
        slots = SlotStore("Card")
        slots.set("footer", "x")
        assert slots.is_active("footer")


class TestSlotHooks:
    def test_entry_hook(self):
        hooks = Hooks()
        hooks.add_filter("bento/component/Card/slot/title", lambda v: f"<h2>{v}</h2>")
        slots = SlotStore("Card", hooks=hooks)
        slots.set("title", "a")
        slots.set("title", "b", override=False)
        assert slots.get("title") == "<h2>a</h2><h2>b</h2>"


class TestMappingSugar:
    def test_item_access(self):
        slots = SlotStore("Card")
        slots["title"] = "T"
        assert slots["title"] == "T"
        assert "title" in slots
        del slots["title"]
        assert "title" not in slots

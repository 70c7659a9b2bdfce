"""
Tests for the Component base class.
"""

import logging

import pytest

from bento import BentoConfig, Component, Hooks, SafeHTML
from bento.errors import MissingRequiredProp, SlotTypeMismatch, TypeMismatch
from bento.rendering import RenderContext


class Alert(Component):
    def setup(self):
        self.define_props(
            {
                "title": ["", "string", True],
                "dismissible": [False, "boolean"],
            }
        )
        self.define_slots({"default": ["string", "callable"]})
        self.define_classnames(
            lambda props, slots: {
                "root": ["alert", {"alert--dismissible": props["dismissible"]}],
                "title": "alert__title",
            }
        )
        self.define_attributes({"root": {"role": "alert", "id": "generated"}, "title": "data-title"})

    def template(self):
        parts = self.use_attributes()
        return f"<div {parts['root']}><strong {parts['title']}>{self.prop('title')}</strong>{self.slot()}</div>"


class Broken(Component):
    def setup(self):
        self.define_props({"title": "x"})

    def template(self):
        raise RuntimeError("template <exploded>")


class Bare(Component):
    def setup(self):
        pass


class TestConstruction:
    def test_setup_is_required(self):
        with pytest.raises(NotImplementedError):
            Component()

    def test_missing_required_prop_aborts(self):
        with pytest.raises(MissingRequiredProp):
            Alert()

    def test_type_error_aborts(self):
        with pytest.raises(TypeMismatch):
            Alert({"title": "x", "dismissible": "yes"})

    def test_slot_schema_checked_on_construction(self):
        with pytest.raises(SlotTypeMismatch):
            Alert({"title": "x"}, slots={"default": 12})

    def test_global_props_without_definitions(self):
        bare = Bare({"id": "b"})
        assert bare.prop("id") == "b"
        assert "reset_attributes" in bare.props.definitions

    def test_component_name(self):
        class Named(Bare):
            name = "fancy-card"

        assert Alert({"title": "x"}).component_name == "Alert"
        assert Named().component_name == "fancy-card"


class TestProps:
    def test_prop_and_use_props(self):
        alert = Alert({"title": "Saved"})
        assert alert.prop("title") == "Saved"
        assert alert.prop("missing", "fallback") == "fallback"
        assert alert.use_props()["dismissible"] is False

    def test_with_props(self):
        alert = Alert({"title": "Saved", "dismissible": True})
        assert alert.with_props(["title", "dismissible"], lambda t, d: f"{t}:{d}") == "Saved:True"

    def test_computed_cleared_each_render(self):
        calls = []

        class Counter(Bare):
            def setup(self):
                self.computed("n", lambda props: calls.append(1) or len(calls))

            def template(self):
                return f"{self.prop('n')},{self.prop('n')}"

        counter = Counter()
        first = str(counter).split(",")
        second = str(counter).split(",")
        assert first[0] == first[1]
        assert second[0] == second[1]
        assert int(second[0]) == int(first[0]) + 1


class TestSlots:
    def test_slot_helpers(self):
        alert = Alert({"title": "x"}, slots={"default": "Body"})
        assert alert.has_slot()
        assert alert.slot_is_active()
        assert not alert.slot_is_empty()
        assert alert.slot() == SafeHTML("Body")

    def test_use_slot_append(self):
        alert = Alert({"title": "x"})
        alert.use_slot("footer", "a")
        alert.use_slot("footer", "b", override=False)
        assert str(alert.slot("footer")) == "ab"

    def test_slot_fallback_and_scope(self):
        alert = Alert({"title": "x"})
        assert str(alert.slot("footer", "none")) == "none"
        alert.use_slot("row", lambda row: f"<td>{row}</td>")
        assert str(alert.slot("row", scope={"row": 3})) == "<td>3</td>"


class TestAttributes:
    def test_use_attributes(self):
        parts = Alert({"title": "x", "dismissible": True}).use_attributes()
        assert parts["root"] == 'role="alert" id="generated" class="alert alert--dismissible"'
        assert parts["title"] == 'data-title class="alert__title"'

    def test_id_prop_wins(self):
        parts = Alert({"title": "x", "id": "foo"}).use_attributes()
        assert parts["root"] == 'id="foo" role="alert" class="alert"'

    def test_prop_overrides(self):
        parts = Alert(
            {
                "title": "x",
                "attributes": {"root": {"data-x": "1"}},
                "classes": {"root": "shadow", "title": ["bold"]},
            }
        ).use_attributes()
        assert parts["root"] == 'role="alert" id="generated" data-x="1" class="alert shadow"'
        assert parts["title"] == 'data-title class="alert__title bold"'

    def test_reset_attributes(self):
        parts = Alert(
            {
                "title": "x",
                "reset_attributes": {"root": {"data-x": "y"}},
                "reset_classes": {"root": "plain"},
            }
        ).use_attributes()
        assert parts["root"] == 'data-x="y" class="plain"'

    def test_ad_hoc_parts(self):
        alert = Alert({"title": "x"})
        assert alert.classnames({"icon": "icon"}) == {"icon": 'class="icon"'}
        assert alert.attributes(lambda props, slots: {"icon": {"aria-hidden": "true"}}) == {
            "icon": 'aria-hidden="true"'
        }

    def test_defined_parts(self):
        alert = Alert({"title": "x"})
        assert alert.classnames()["title"] == 'class="alert__title"'
        assert alert.attributes()["title"] == "data-title"

    def test_block_class(self):
        alert = Alert({"title": "x"})
        assert alert.block_name() == "alert"
        assert alert.block_class("title") == "alert__title"
        assert alert.block_class("title", "card", "big") == "card__title--big"
        assert Alert({"title": "x", "block_name": "notice"}).block_class("icon") == "notice__icon"


class TestRendering:
    def test_render(self):
        html = str(Alert({"title": "Saved"}, slots={"default": "All good."}))
        assert html == (
            '<div role="alert" id="generated" class="alert">'
            '<strong data-title class="alert__title">Saved</strong>All good.</div>'
        )

    def test_html_protocol(self):
        alert = Alert({"title": "Saved"})
        assert alert.__html__() == str(alert)

    def test_hooks_from_config(self):
        hooks = Hooks()
        hooks.add_filter("bento/component/Alert/prop/title", lambda v: v.upper())
        alert = Alert({"title": "saved"}, config=BentoConfig(hooks=hooks))
        assert "<strong data-title class=\"alert__title\">SAVED</strong>" in str(alert)

    def test_lifecycle_hooks(self):
        events = []

        class Tracked(Bare):
            def before_render(self):
                super().before_render()
                events.append("before")

            def after_render(self, output):
                events.append(("after", output))

            def template(self):
                events.append("render")
                return "<p>x</p>"

        Tracked().render_with_lifecycle()
        assert events == ["before", "render", ("after", "<p>x</p>")]

    def test_error_placeholder(self, caplog):
        broken = Broken()
        with caplog.at_level(logging.ERROR):
            html = broken.render_with_lifecycle()
        assert html == "<!-- Component render error: template &lt;exploded&gt; -->"
        assert broken.errors == ["template <exploded>"]
        assert "Component error in Broken: template <exploded>" in caplog.text

    def test_verbose_error_needs_debug_and_auth(self):
        debug = BentoConfig(debug=True)
        assert Broken(config=debug).render_with_lifecycle().startswith("<!--")
        assert Broken().render_with_lifecycle(RenderContext(authenticated=True)).startswith("<!--")

        html = Broken(config=debug).render_with_lifecycle(RenderContext(authenticated=True))
        assert 'class="bento-component-error"' in html
        assert "template &lt;exploded&gt;" in html
        assert "RuntimeError" in html

    def test_str_never_raises(self):
        class Exploding(Bare):
            def render_with_lifecycle(self, context=None):
                raise RuntimeError("boom")

        assert str(Exploding()) == "<!-- Component render error: boom -->"

    def test_no_template(self):
        assert str(Bare()) == "<!-- No template found for component: bare -->"

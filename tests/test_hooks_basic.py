"""Tests for instance-bound hook tables."""

import sys

import pytest

from viewroutes import EventSubscriber, Hooks, subscribe
from viewroutes.core.base_hooks import BaseHooks
from viewroutes.plugins._base_plugin import BasePlugin  # Not public API


class Greeter(EventSubscriber):
    def __init__(self, label: str):
        self.label = label
        self.events = Hooks(self, name="events")

    @subscribe("greet")
    def on_greet(self, event):
        return f"hello:{self.label}"

    @subscribe("greet", priority=10, name="loud")
    def on_greet_loud(self, event):
        return f"HELLO:{self.label}"


class PrefixedListeners(EventSubscriber):
    def __init__(self):
        self.events = Hooks(self, name="events", prefix="on_")

    @subscribe("save")
    def on_save(self, event):
        return "saved"


class ChildGreeter(Greeter):
    @subscribe("leave", priority=-5)
    def on_leave(self, event):
        return "bye"


class CapturePlugin(BasePlugin):
    plugin_code = "capture"
    plugin_description = "Records wrapped calls"

    __slots__ = ("calls",)

    def __init__(self, hooks, **config):
        self.calls = []
        super().__init__(hooks, **config)

    def on_decore(self, hooks, func, entry):
        entry.metadata["capture"] = True

    def wrap_handler(self, hooks, entry, call_next):
        def wrapper(*args, **kwargs):
            self.calls.append(entry.name)
            return call_next(*args, **kwargs)

        return wrapper


Hooks.register_plugin(CapturePlugin)


class CapturedService(EventSubscriber):
    def __init__(self):
        self.touched = False
        self.events = Hooks(self, name="events").plug("capture")

    @subscribe("work")
    def do_work(self, event=None):
        self.touched = True
        return "ok"


def test_marked_methods_are_bound_per_instance():
    first = Greeter("alpha")
    second = Greeter("beta")

    assert first.events.get("on_greet")(None) == "hello:alpha"
    assert second.events.get("on_greet")(None) == "hello:beta"
    assert first.events.get("on_greet") != second.events.get("on_greet")


def test_listeners_report_event_priority_and_name():
    greeter = Greeter("alpha")

    assert greeter.events.listeners() == [("greet", 0, "on_greet"), ("greet", 10, "loud")]
    assert greeter.events.listeners("missing") == []


def test_prefix_is_stripped_from_listener_names():
    svc = PrefixedListeners()

    assert svc.events.listeners() == [("save", 0, "save")]
    assert svc.events.get("save")(None) == "saved"


def test_listeners_declared_on_base_class_are_inherited():
    child = ChildGreeter("gamma")

    names = [name for _, _, name in child.events.listeners()]
    assert names == ["on_greet", "loud", "on_leave"]
    assert child.events.entry("on_leave").priority == -5


def test_subscribed_events_groups_by_event():
    child = ChildGreeter("gamma")

    assert child.subscribed_events() == {
        "greet": [("on_greet", 0), ("loud", 10)],
        "leave": [("on_leave", -5)],
    }


def test_add_entry_requires_event():
    class Manual(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events", auto_discover=False)

        def handle(self, event):
            return "handled"

    svc = Manual()
    with pytest.raises(ValueError):
        svc.events.add_entry("handle")
    svc.events.add_entry("handle", event="ping", priority=3)
    assert svc.events.listeners() == [("ping", 3, "handle")]


def test_add_entry_name_collision():
    greeter = Greeter("alpha")

    with pytest.raises(ValueError):
        greeter.events.add_entry("on_greet", event="greet")
    greeter.events.add_entry("on_greet", event="other", replace=True)
    assert greeter.events.entry("on_greet").event == "other"


def test_add_entry_accepts_names_and_plain_functions():
    class Manual(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events", auto_discover=False)

        def first(self, event):
            return "first"

        def second(self, event):
            return "second"

    def external(self, event):
        return f"external:{type(self).__name__}"

    svc = Manual()
    svc.events.add_entry("first", event="tick")
    svc.events.add_entry(" second ", event="tick", priority=2)
    svc.events.add_entry(external, event="tock", name="ext")
    assert svc.events.listeners() == [
        ("tick", 0, "first"),
        ("tick", 2, "second"),
        ("tock", 0, "ext"),
    ]
    assert svc.events.get("ext")(None) == "external:Manual"
    with pytest.raises(TypeError):
        svc.events.add_entry(42, event="tick")


def test_hooks_require_owner():
    with pytest.raises(ValueError):
        BaseHooks(None)


def test_get_with_default_returns_callable():
    greeter = Greeter("alpha")

    def fallback(event):
        return "fallback"

    assert greeter.events.get("missing", default_handler=fallback)(None) == "fallback"


def test_get_uses_init_default_handler():
    class DefaultService(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events", get_default_handler=lambda event: "init")

    svc = DefaultService()
    assert svc.events.get("missing")(None) == "init"
    assert svc.events.get("missing", default_handler=lambda event: "runtime")(None) == "runtime"


def test_get_without_default_raises():
    greeter = Greeter("alpha")

    with pytest.raises(NotImplementedError):
        greeter.events.get("unknown")


def test_get_with_smartasync(monkeypatch):
    calls = []

    def fake_smartasync(fn):
        def wrapper(*a, **k):
            calls.append("wrapped")
            return fn(*a, **k)

        return wrapper

    fake_module = type(sys)("smartasync")
    fake_module.smartasync = fake_smartasync
    monkeypatch.setitem(sys.modules, "smartasync", fake_module)
    greeter = Greeter("alpha")
    handler = greeter.events.get("on_greet", use_smartasync=True)
    assert handler(None) == "hello:alpha"
    assert calls == ["wrapped"]


def test_get_can_disable_init_smartasync(monkeypatch):
    calls = []

    def fake_smartasync(fn):
        calls.append("wrapped")
        return fn

    fake_module = type(sys)("smartasync")
    fake_module.smartasync = fake_smartasync
    monkeypatch.setitem(sys.modules, "smartasync", fake_module)

    class AsyncService(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events", get_use_smartasync=True)

        @subscribe("work")
        def do_work(self, event):
            return "ok"

    svc = AsyncService()
    assert svc.events.get("do_work")(None) == "ok"
    assert calls == ["wrapped"]
    assert svc.events.get("do_work", use_smartasync=False)(None) == "ok"
    assert calls == ["wrapped"]


def test_plugins_are_per_instance_and_accessible():
    svc = CapturedService()
    assert svc.events.capture.calls == []
    assert svc.events.get("do_work")() == "ok"
    assert svc.touched is True
    assert svc.events.capture.calls == ["do_work"]
    assert svc.events.entry("do_work").metadata["capture"] is True
    assert svc.events.entry("do_work").plugins == ["capture"]
    other = CapturedService()
    assert other.events.capture.calls == []


def test_unknown_plugin_attribute_raises():
    greeter = Greeter("alpha")

    with pytest.raises(AttributeError):
        greeter.events.capture  # noqa: B018


def test_plugin_enable_disable_at_runtime():
    svc = CapturedService()
    handler = svc.events.get("do_work")
    svc.events.set_plugin_enabled("do_work", "capture", False)
    handler()
    assert svc.events.capture.calls == []
    assert svc.events.is_plugin_enabled("do_work", "capture") is False
    svc.events.set_plugin_enabled("do_work", "capture", True)
    handler()
    assert svc.events.capture.calls == ["do_work"]


def test_plugin_switch_requires_attached_plugin():
    svc = CapturedService()

    with pytest.raises(AttributeError):
        svc.events.set_plugin_enabled("do_work", "missing", False)
    with pytest.raises(AttributeError):
        svc.events.is_plugin_enabled("do_work", "missing")


def test_get_hooks_reads_registry_and_attributes():
    greeter = Greeter("alpha")

    assert greeter.get_hooks("events") is greeter.events
    with pytest.raises(AttributeError):
        greeter.get_hooks("label")

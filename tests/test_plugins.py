"""Tests for the logging plugin and the plugin registry."""

import pytest
from pydantic import ValidationError

# Import to trigger plugin registration
import viewroutes.plugins.logging  # noqa: F401
from viewroutes import EventSubscriber, Hooks, subscribe
from viewroutes.plugins._base_plugin import BASE_BUCKET, BasePlugin


class DummyLogger:
    def __init__(self, records):
        self.records = records

    def hasHandlers(self):  # noqa: N802 - mirrors logging.Logger
        return True

    def info(self, message):
        self.records.append(message)


class LoggedService(EventSubscriber):
    def __init__(self):
        self.calls = 0
        self.events = Hooks(self, name="events").plug("logging")

    @subscribe("hello")
    def on_hello(self, event=None):
        self.calls += 1
        return "ok"


def test_logging_plugin_runs_per_instance():
    records = []
    svc = LoggedService()
    svc.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

    assert svc.events.get("on_hello")() == "ok"
    assert svc.calls == 1
    assert records[0] == "on_hello start"
    assert records[1].startswith("on_hello end (")

    other = LoggedService()
    assert other.calls == 0


def test_logging_plugin_respects_listener_flags():
    records = []

    class Service(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events").plug("logging")
            self.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

        @subscribe("hello", logging_flags="enabled:off")
        def on_hello(self, event=None):
            return "hi"

    svc = Service()
    svc.events.get("on_hello")()
    assert records == []


def test_logging_plugin_configure_flags_table_wide():
    records = []
    svc = LoggedService()
    svc.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

    svc.events.logging.configure(flags="before:off,after:on")
    svc.events.get("on_hello")()
    assert len(records) == 1
    assert records[0].startswith("on_hello end (")


def test_logging_plugin_configure_per_listener_target():
    records = []
    svc = LoggedService()
    svc.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

    svc.events.logging.configure(_target="on_hello", after=False)
    svc.events.get("on_hello")()
    assert records == ["on_hello start"]
    assert svc.events.logging.configuration("on_hello")["after"] is False
    assert svc.events.logging.configuration()["enabled"] is True


def test_logging_plugin_rejects_invalid_options():
    svc = LoggedService()

    with pytest.raises(ValidationError):
        svc.events.logging.configure(before="not-a-bool")
    with pytest.raises(ValidationError):
        svc.events.logging.configure(colour=True)


def test_logging_plugin_print_sink_overrides_logger(capsys):
    records = []

    class Service(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events").plug("logging")
            self.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

        @subscribe("hello", logging_log=False, logging_print=True)
        def on_hello(self, event=None):
            return "hi"

    svc = Service()
    svc.events.get("on_hello")()
    captured = capsys.readouterr()
    assert records == []
    assert "on_hello start" in captured.out and "on_hello end" in captured.out


def test_logging_plugin_falls_back_to_print_without_handlers(capsys):
    class SilentLogger:
        def hasHandlers(self):  # noqa: N802 - mirrors logging.Logger
            return False

        def info(self, message):  # pragma: no cover - must not be reached
            raise AssertionError(message)

    svc = LoggedService()
    svc.events.logging._logger = SilentLogger()  # type: ignore[attr-defined]
    svc.events.get("on_hello")()
    assert "on_hello start" in capsys.readouterr().out


def test_logging_plugin_skips_end_message_when_listener_raises():
    records = []

    class Service(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events").plug("logging")
            self.events.logging._logger = DummyLogger(records)  # type: ignore[attr-defined]

        @subscribe("boom")
        def on_boom(self, event=None):
            raise RuntimeError("boom")

    svc = Service()
    with pytest.raises(RuntimeError):
        svc.events.get("on_boom")()
    assert records == ["on_boom start"]


def test_register_plugin_validation():
    class NoCode(BasePlugin):
        pass

    class Duplicate(BasePlugin):
        plugin_code = "logging"
        plugin_description = "clashes with the built-in"

    with pytest.raises(TypeError):
        Hooks.register_plugin(object)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Hooks.register_plugin(NoCode)
    with pytest.raises(ValueError):
        Hooks.register_plugin(Duplicate)
    assert "logging" in Hooks.available_plugins()


def test_plug_unknown_plugin_raises():
    class Service(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events")

    svc = Service()
    with pytest.raises(ValueError):
        svc.events.plug("does-not-exist")
    with pytest.raises(TypeError):
        svc.events.plug(BasePlugin)  # type: ignore[arg-type]


def test_plugin_store_buckets():
    svc = LoggedService()
    store = svc.events._plugin_info["logging"]  # type: ignore[attr-defined]

    assert store[BASE_BUCKET]["config"]["enabled"] is True
    svc.events.logging.configure(_target="on_hello,other", before=False)
    assert store["on_hello"]["config"] == {"before": False}
    assert store["other"]["config"] == {"before": False}


def test_marker_plugin_options_become_listener_config():
    class Service(EventSubscriber):
        def __init__(self):
            self.events = Hooks(self, name="events").plug("logging")

        @subscribe("hello", logging_before=False)
        def on_hello(self, event=None):
            return "hi"

    svc = Service()
    assert svc.events.entry("on_hello").plugins == ["logging"]
    assert svc.events.logging.configuration("on_hello")["before"] is False
    assert "logging_before" not in svc.events.entry("on_hello").metadata

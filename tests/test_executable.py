"""Tests for view entities, executables and the applicable views listing."""

import pytest
from pydantic import ValidationError

from viewroutes.views import (
    ExecutableFactory,
    ViewConfig,
    ViewExecutable,
    ViewStorage,
    get_applicable_views,
)


def content_view(**overrides):
    data = {
        "id": "content",
        "label": "Content",
        "display": {
            "page_1": {"display_plugin": "page", "position": 1, "display_options": {"path": "admin/content"}},
            "block_1": {"display_plugin": "block", "position": 2},
            "feed_1": {"display_plugin": "feed", "position": 3, "display_options": {"path": "rss.xml"}},
        },
    }
    data.update(overrides)
    return data


def test_view_config_adds_default_display():
    view = ViewConfig.model_validate(content_view())

    assert view.display["default"].display_plugin == "default"
    assert view.display_ids() == ["default", "page_1", "block_1", "feed_1"]
    assert view.get_display("page_1").id == "page_1"
    assert view.get_display("missing") is None


def test_view_config_requires_display_plugin():
    with pytest.raises(ValidationError):
        ViewConfig.model_validate({"id": "broken", "display": {"page_1": {"position": 1}}})


def test_display_enabled_flag():
    view = ViewConfig.model_validate(
        {"id": "v", "display": {"page_1": {"display_plugin": "page", "display_options": {"enabled": False}}}}
    )

    assert view.display["page_1"].enabled is False
    assert view.display["default"].enabled is True


def test_view_storage_roundtrip():
    storage = ViewStorage([content_view(), {"id": "archive"}])

    assert storage.ids() == ["archive", "content"]
    assert storage.load("content").label == "Content"
    assert storage.load("missing") is None
    assert set(storage.load_multiple(["content", "missing"])) == {"content"}
    storage.delete("archive")
    assert storage.ids() == ["content"]


def test_set_display_defaults_to_master_display():
    executable = ViewExecutable(ViewConfig.model_validate(content_view()))

    assert executable.set_display() is True
    assert executable.current_display == "default"
    assert executable.display_handler.display_code == "default"


def test_set_display_unknown_id_keeps_current_display():
    executable = ViewExecutable(ViewConfig.model_validate(content_view()))

    assert executable.set_display("page_1") is True
    assert executable.set_display("page_9") is False
    assert executable.current_display == "page_1"


def test_display_handlers_are_built_lazily_and_released_on_destroy():
    view = ViewConfig.model_validate(content_view())
    with ViewExecutable(view) as executable:
        assert len(executable.displays) == 0
        executable.set_display("page_1")
        handler = executable.get_display_handler("page_1")
        assert executable.displays.get("page_1") is handler
        assert len(executable.displays) == 1
        assert executable.displays.ids() == view.display_ids()

    assert executable.destroyed is True
    assert executable.current_display is None
    assert handler.view is None
    assert len(executable.displays) == 0


def test_factory_rejects_unknown_display_plugins():
    view = ViewConfig.model_validate(
        {"id": "exotic", "display": {"map_1": {"display_plugin": "map"}}}
    )

    with pytest.raises(LookupError):
        ExecutableFactory().get(view)


def test_applicable_views_lists_route_displays_of_enabled_views():
    storage = ViewStorage(
        [
            content_view(),
            content_view(id="disabled", status=False),
            {"id": "exotic", "display": {"map_1": {"display_plugin": "map"}}},
            {
                "id": "frontpage",
                "display": {
                    "page_1": {"display_plugin": "page", "display_options": {"path": "node"}},
                    "page_2": {
                        "display_plugin": "page",
                        "display_options": {"path": "hidden", "enabled": False},
                    },
                },
            },
        ]
    )

    found = get_applicable_views(storage, "uses_route")
    assert [(executable.id, display_id) for executable, display_id in found] == [
        ("content", "page_1"),
        ("content", "feed_1"),
        ("frontpage", "page_1"),
    ]
    executable, display_id = found[0]
    assert executable.current_display == display_id
    for executable, _ in found:
        executable.destroy()

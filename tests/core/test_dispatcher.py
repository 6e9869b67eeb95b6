from __future__ import annotations

import os
import sys
from http import HTTPStatus

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config_manager import ConfigManager
from core.request import ActionRequest
from core.results import ErrorKind
from core.session_builder import SessionBuilder
from toolkit.memory import (
    MemoryCheckBox,
    MemoryDialog,
    MemoryItem,
    MemoryPushButton,
    MemoryToolkit,
    MemoryTree,
)


def _session(*widgets):
    toolkit = MemoryToolkit([MemoryDialog("Test", list(widgets))])
    return SessionBuilder(ConfigManager()).build(toolkit=toolkit)


def test_unknown_action_for_any_widget():
    button = MemoryPushButton("OK")
    checkbox = MemoryCheckBox("Enable")
    sess = _session(button, checkbox)
    for widget in (button, checkbox):
        res = sess.dispatcher.dispatch(widget, "frobnicate", ActionRequest(action="frobnicate"))
        assert res.status == HTTPStatus.NOT_FOUND
        assert res.error is ErrorKind.UNKNOWN_ACTION
        assert res.body == '{ "error" : "Unknown action" }\n'
        assert widget.calls == []


def test_press_on_checkbox_is_unsupported():
    checkbox = MemoryCheckBox("Enable")
    sess = _session(checkbox)
    res = sess.dispatcher.dispatch(checkbox, "press")
    assert res.error is ErrorKind.UNSUPPORTED_ACTION
    assert res.body == "Action is not supported for the selected widget: CheckBox\n"
    assert checkbox.calls == []


def test_item_not_found_is_caught_at_dispatch():
    tree = MemoryTree("Places", items=[MemoryItem("Europe", children=[MemoryItem("Prague")])])
    sess = _session(tree)
    res = sess.dispatcher.dispatch(tree, "select", ActionRequest(action="select", value="Region::City"))
    assert res.status == HTTPStatus.NOT_FOUND
    assert res.error is ErrorKind.ITEM_NOT_FOUND
    assert '"Region::City"' in res.body
    assert "tree" in res.body
    assert tree.calls == []


def test_success_returns_ok_with_empty_body():
    button = MemoryPushButton("OK")
    sess = _session(button)
    res = sess.dispatcher.dispatch(button, "press")
    assert res.ok
    assert res.body == ""
    assert button.call_names() == ["focus", "activate"]

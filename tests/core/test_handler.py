from __future__ import annotations

import json
import os
import sys
from http import HTTPStatus

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config_manager import ConfigManager
from core.results import ErrorKind
from core.session_builder import SessionBuilder
from toolkit.memory import (
    MemoryCheckBox,
    MemoryDialog,
    MemoryItem,
    MemoryPushButton,
    MemoryTable,
    MemoryToolkit,
)


def _session(toolkit):
    return SessionBuilder(ConfigManager()).build(toolkit=toolkit)


def _dialog_session(*widgets):
    toolkit = MemoryToolkit([MemoryDialog("Test", list(widgets))])
    return _session(toolkit), toolkit


def test_no_dialog_open():
    toolkit = MemoryToolkit()
    sess = _session(toolkit)
    resp = sess.handle_request({"label": "OK", "action": "press"})
    assert resp.status == HTTPStatus.NOT_FOUND
    assert resp.body == '{ "error" : "No dialog is open" }\n'
    assert resp.redraw is False
    assert toolkit.redraw_count == 0


def test_zero_matches_is_widget_not_found():
    button = MemoryPushButton("OK")
    sess, toolkit = _dialog_session(button)
    resp = sess.handle_request({"label": "Cancel", "action": "press"})
    assert resp.error is ErrorKind.WIDGET_NOT_FOUND
    assert resp.body == '{ "error" : "Widget not found" }\n'
    assert button.calls == []
    assert toolkit.redraw_count == 0


def test_ambiguous_selection_mutates_nothing():
    ok = MemoryPushButton("OK")
    cancel = MemoryPushButton("Cancel")
    sess, toolkit = _dialog_session(ok, cancel)
    resp = sess.handle_request({"type": "button", "action": "press"})
    assert resp.status == HTTPStatus.NOT_FOUND
    assert resp.error is ErrorKind.AMBIGUOUS_SELECTION
    assert "multicriteria search" in resp.body
    assert ok.calls == [] and cancel.calls == []
    assert ok.activations == 0 and cancel.activations == 0
    assert toolkit.redraw_count == 0


def test_missing_action_after_lookup():
    button = MemoryPushButton("OK")
    sess, _ = _dialog_session(button)
    resp = sess.handle_request({"label": "OK"})
    assert resp.error is ErrorKind.MISSING_ACTION
    assert resp.body == '{ "error" : "Missing action parameter" }\n'

    # The lookup runs first: a missing widget wins over a missing action
    resp = sess.handle_request({"label": "Nope"})
    assert resp.error is ErrorKind.WIDGET_NOT_FOUND


def test_press_single_button_focuses_then_activates_and_redraws():
    button = MemoryPushButton("OK", widget_id="ok")
    checkbox = MemoryCheckBox("Enable")
    sess, toolkit = _dialog_session(button, checkbox)
    resp = sess.handle_request({"type": "button", "action": "press"})
    assert resp.status == HTTPStatus.OK
    assert resp.body == ""
    assert resp.redraw is True
    assert button.call_names() == ["focus", "activate"]
    assert toolkit.redraw_count == 1


def test_shortcut_markers_are_ignored_in_labels():
    button = MemoryPushButton("&Next")
    sess, _ = _dialog_session(button)
    assert sess.handle_request({"label": "Next", "action": "press"}).ok
    assert sess.handle_request({"label": "&Next", "action": "press"}).ok
    assert button.activations == 2


def test_failed_action_does_not_redraw():
    checkbox = MemoryCheckBox("Enable")
    sess, toolkit = _dialog_session(checkbox)
    resp = sess.handle_request({"label": "Enable", "action": "press"})
    assert resp.error is ErrorKind.UNSUPPORTED_ACTION
    assert resp.redraw is False
    assert toolkit.redraw_count == 0


def test_table_column_omitted_equals_column_zero():
    def build():
        rows = [MemoryItem(cells=["vim", "9.1"]), MemoryItem(cells=["emacs", "29.4"])]
        return MemoryTable("Packages", widget_id="packages", items=rows)

    table_a = build()
    sess_a, _ = _dialog_session(table_a)
    resp_a = sess_a.handle_request({"id": "packages", "action": "select", "value": "emacs"})

    table_b = build()
    sess_b, _ = _dialog_session(table_b)
    resp_b = sess_b.handle_request({"id": "packages", "action": "select", "value": "emacs", "column": "0"})

    assert resp_a.ok and resp_b.ok
    assert table_a.calls == table_b.calls
    assert [row.is_selected() for row in table_a.items] == [row.is_selected() for row in table_b.items] == [False, True]


def test_table_other_column_and_missing_row():
    rows = [MemoryItem(cells=["vim", "9.1"]), MemoryItem(cells=["emacs", "29.4"])]
    table = MemoryTable("Packages", widget_id="packages", items=rows)
    sess, _ = _dialog_session(table)
    assert sess.handle_request({"id": "packages", "action": "select", "value": "29.4", "column": 1}).ok
    assert rows[1].is_selected()

    resp = sess.handle_request({"id": "packages", "action": "select", "value": "nano"})
    assert resp.body == '"nano" item cannot be found in the table\n'


def test_describe_lists_matching_widgets():
    ok = MemoryPushButton("OK", widget_id="ok")
    checkbox = MemoryCheckBox("Enable", widget_id="enable", checked=True)
    sess, _ = _dialog_session(ok, checkbox)

    resp = sess.describe_widgets({})
    assert resp.status == HTTPStatus.OK
    assert resp.body.endswith("\n")
    listed = json.loads(resp.body)
    assert [w["class"] for w in listed] == ["PushButton", "CheckBox"]
    assert listed[1]["value"] is True

    only = json.loads(sess.describe_widgets({"type": "checkbox"}).body)
    assert only == [{"class": "CheckBox", "id": "enable", "label": "Enable", "value": True}]

    missing = sess.describe_widgets({"id": "nope"})
    assert missing.body == '{ "error" : "Widget not found" }\n'

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config_manager import ConfigManager
from core.results import ErrorKind
from core.session_builder import SessionBuilder
from toolkit.memory import (
    MemoryComboBox,
    MemoryDialog,
    MemoryDumbTab,
    MemoryItem,
    MemoryRadioButton,
    MemorySelectionBox,
    MemoryToolkit,
    MemoryTree,
)


def _session(*widgets):
    toolkit = MemoryToolkit([MemoryDialog("Test", list(widgets))])
    return SessionBuilder(ConfigManager()).build(toolkit=toolkit)


def _tree():
    return MemoryTree("Location", widget_id="location", items=[
        MemoryItem("Europe", children=[
            MemoryItem("Czechia", children=[MemoryItem("Prague"), MemoryItem("Brno")]),
            MemoryItem("Germany"),
        ]),
    ])


def test_combo_box_focuses_before_lookup():
    combo = MemoryComboBox("Language", widget_id="language", items=[MemoryItem("English", selected=True), MemoryItem("Czech")])
    sess = _session(combo)
    assert sess.handle_request({"id": "language", "action": "select", "value": "Czech"}).ok
    assert combo.calls == [("focus",), ("select_item", "Czech"), ("activate",)]
    assert [item.is_selected() for item in combo.items] == [False, True]

    # Focus already happened when the lookup fails
    combo.calls.clear()
    resp = sess.handle_request({"id": "language", "action": "select", "value": "Klingon"})
    assert resp.body == '"Klingon" item cannot be found in the combo box\n'
    assert combo.calls == [("focus",)]


def test_tree_select_by_path():
    tree = _tree()
    sess = _session(tree)
    assert sess.handle_request({"id": "location", "action": "select", "value": "Europe::Czechia::Brno"}).ok
    assert tree.calls == [("focus",), ("select_item", "Brno"), ("activate",)]


def test_tree_missing_path_reports_value():
    tree = _tree()
    sess = _session(tree)
    resp = sess.handle_request({"id": "location", "action": "select", "value": "Region::City"})
    assert resp.error is ErrorKind.ITEM_NOT_FOUND
    assert '"Region::City"' in resp.body
    assert "tree" in resp.body
    assert tree.calls == []

    # Paths match per level, a leaf is not found from the root
    resp = sess.handle_request({"id": "location", "action": "select", "value": "Brno"})
    assert resp.error is ErrorKind.ITEM_NOT_FOUND


def test_tab_select():
    tab = MemoryDumbTab(widget_id="tabs", items=[MemoryItem("Overview"), MemoryItem("Details")])
    sess = _session(tab)
    assert sess.handle_request({"id": "tabs", "action": "select", "value": "Details"}).ok
    assert tab.calls == [("focus",), ("select_item", "Details"), ("activate",)]
    resp = sess.handle_request({"id": "tabs", "action": "select", "value": "Log"})
    assert resp.body == '"Log" item cannot be found in the tab\n'


def test_radio_button_group_is_exclusive():
    desktop = MemoryRadioButton("Desktop", widget_id="desktop", group="role", value=True)
    server = MemoryRadioButton("Server", widget_id="server", group="role")
    sess = _session(desktop, server)
    assert sess.handle_request({"id": "server", "action": "select"}).ok
    assert server.value is True
    assert desktop.value is False
    assert server.calls == [("focus",), ("set_value", True)]


def test_selection_box_select():
    box = MemorySelectionBox("Time zone", widget_id="tz", items=[MemoryItem("UTC"), MemoryItem("Europe/Prague")])
    sess = _session(box)
    assert sess.handle_request({"id": "tz", "action": "select", "value": "Europe/Prague"}).ok
    assert box.calls == [("focus",), ("select_item", "Europe/Prague")]
    resp = sess.handle_request({"id": "tz", "action": "select", "value": "Mars"})
    assert resp.body == '"Mars" item cannot be found in the selection box\n'

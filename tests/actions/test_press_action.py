from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config_manager import ConfigManager
from core.results import ErrorKind
from core.session_builder import SessionBuilder
from toolkit.memory import MemoryDialog, MemoryItem, MemoryMenuButton, MemoryRichText, MemoryToolkit


def _session(*widgets, **options):
    toolkit = MemoryToolkit([MemoryDialog("Test", list(widgets))])
    return SessionBuilder(ConfigManager()).build(toolkit=toolkit, **options)


def _menu():
    return MemoryMenuButton("&Actions", widget_id="actions", items=[
        MemoryItem("Export", children=[MemoryItem("As JSON"), MemoryItem("As CSV")]),
        MemoryItem("Reset"),
    ])


def test_richtext_link_activation():
    text = MemoryRichText(widget_id="summary", text='<a href="license">license</a>')
    sess = _session(text)
    assert sess.handle_request({"id": "summary", "action": "press", "value": "license"}).ok
    assert text.calls == [("focus",), ("activate_link", "license")]
    assert text.activated_links == ["license"]


def test_menu_button_activates_item_by_path():
    menu = _menu()
    sess = _session(menu)
    assert sess.handle_request({"id": "actions", "action": "press", "value": "Export::As CSV"}).ok
    assert [item.label() for item in menu.activated_items] == ["As CSV"]
    assert menu.call_names() == ["focus", "activate_item"]


def test_menu_button_missing_path():
    menu = _menu()
    sess = _session(menu)
    resp = sess.handle_request({"id": "actions", "action": "press", "value": "Export::As PDF"})
    assert resp.error is ErrorKind.ITEM_NOT_FOUND
    assert resp.body == 'Item with path: "Export::As PDF" cannot be found in the MenuButton widget\n'
    assert menu.calls == []


def test_menu_path_uses_configured_delimiter():
    menu = _menu()
    sess = _session(menu, path_delimiter="|")
    assert sess.path_delimiter == "|"
    assert sess.handle_request({"id": "actions", "action": "press", "value": "Export|As JSON"}).ok
    assert [item.label() for item in menu.activated_items] == ["As JSON"]

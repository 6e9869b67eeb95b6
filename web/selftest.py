from __future__ import annotations

"""
Lightweight self-test for WebApp endpoints using Starlette TestClient.

Runs without pytest against a session built over a small in-memory dialog:
 - an "OK" push button and a "Cancel" push button
 - a checkbox
 - a tree with nested items

Usage:
  python web/selftest.py
"""

import os, sys
# Ensure project root is on sys.path when executed as a script
_here = os.path.dirname(__file__)
_root = os.path.abspath(os.path.join(_here, os.pardir))
if _root not in sys.path:
    sys.path.insert(0, _root)

from starlette.testclient import TestClient

from config_manager import ConfigManager
from core.session_builder import SessionBuilder
from toolkit.loader import build_toolkit
from web.app import WebApp


DEMO_DIALOG = {
    "title": "Self test",
    "widgets": [
        {"kind": "button", "label": "&OK", "id": "ok"},
        {"kind": "button", "label": "&Cancel", "id": "cancel"},
        {"kind": "checkbox", "label": "Enable", "id": "enable"},
        {"kind": "tree", "label": "Places", "id": "places",
         "items": [{"label": "Europe", "children": ["Prague", "Brno"]}]},
    ],
}


def build_session():
    toolkit = build_toolkit(DEMO_DIALOG)
    return SessionBuilder(ConfigManager()).build(toolkit=toolkit), toolkit


def main() -> int:
    session, toolkit = build_session()
    app = WebApp(session)
    client = TestClient(app._app)

    failures = 0
    def check(cond: bool, label: str) -> None:
        nonlocal failures
        print(("PASS" if cond else "FAIL"), '-', label)
        if not cond:
            failures += 1

    # 1) Status
    r = client.get("/v1/status")
    j = r.json()
    check(r.status_code == 200 and j.get("ok") is True and j.get("dialog") is True, "/v1/status reports an open dialog")

    # 2) Widget listing
    r = client.get("/v1/widgets", params={"type": "button"})
    check(r.status_code == 200 and len(r.json()) == 2, "/v1/widgets lists both buttons")

    # 3) Press a single button
    r = client.post("/v1/widgets", params={"label": "OK", "action": "press"})
    check(r.status_code == 200 and toolkit.redraw_count == 1, "press on OK succeeds and redraws")

    # 4) Ambiguous selection mutates nothing
    r = client.post("/v1/widgets", params={"type": "button", "action": "press"})
    check(r.status_code == 404 and "Multiple widgets" in r.text and toolkit.redraw_count == 1, "ambiguous press is rejected")

    # 5) Unsupported action names the widget class
    r = client.post("/v1/widgets", json={"id": "enable", "action": "press"})
    check(r.status_code == 404 and "CheckBox" in r.text, "press on a checkbox is unsupported")

    # 6) Missing tree path
    r = client.post("/v1/widgets", params={"id": "places", "action": "select", "value": "Europe::Ostrava"})
    check(r.status_code == 404 and "Europe::Ostrava" in r.text and "tree" in r.text, "missing tree item reports the path")

    print("\nSelftest:", "OK" if failures == 0 else f"{failures} failure(s)")
    return 0 if failures == 0 else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print("Selftest error:", e)
        sys.exit(2)

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.request import ActionRequest, SelectionCriteria, to_int


def test_to_int_behaves_like_atoi():
    assert to_int("42") == 42
    assert to_int("  -7") == -7
    assert to_int("+3") == 3
    assert to_int("12abc") == 12
    assert to_int("abc") == 0
    assert to_int("") == 0
    assert to_int(None) == 0
    assert to_int(5) == 5
    assert to_int("x", fallback=9) == 9


def test_selection_criteria_presence_counts():
    assert SelectionCriteria.from_params({}).filtered is False
    # An empty label is still a filter
    crit = SelectionCriteria.from_params({"label": ""})
    assert crit.filtered is True
    assert crit.label == ""

    crit = SelectionCriteria.from_params({"id": "ok", "type": "button"})
    assert crit.widget_id == "ok"
    assert crit.widget_type == "button"
    assert crit.label is None


def test_action_request_defaults():
    req = ActionRequest.from_params({"action": "select"})
    assert req.action == "select"
    assert req.value == ""
    assert req.column == 0

    req = ActionRequest.from_params({"action": "select", "value": "emacs", "column": "1"})
    assert req.value == "emacs"
    assert req.column == 1

    # Non-numeric column falls back to the first column
    assert ActionRequest.from_params({"column": "first"}).column == 0
    assert ActionRequest.from_params({}).action is None

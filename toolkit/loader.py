"""Build in-memory dialogs from JSON descriptions.

A description is either one dialog::

    {"title": "Setup", "widgets": [{"kind": "button", "label": "OK", "id": "ok"}]}

or a stack of them, topmost last::

    {"dialogs": [{...}, {...}]}

Items are given as strings or objects with "label", "selected", "children"
and, for tables, "cells".
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Type

from toolkit.memory import (
    MemoryCheckBox,
    MemoryComboBox,
    MemoryContainer,
    MemoryDialog,
    MemoryDumbTab,
    MemoryInputField,
    MemoryIntField,
    MemoryItem,
    MemoryItemSelector,
    MemoryMenuButton,
    MemoryMultiLineEdit,
    MemoryPushButton,
    MemoryRadioButton,
    MemoryRichText,
    MemorySelectionBox,
    MemoryTable,
    MemoryToolkit,
    MemoryTree,
    MemoryWidget,
)


WIDGET_TYPES: List[Type[MemoryWidget]] = [
    MemoryPushButton,
    MemoryRichText,
    MemoryMenuButton,
    MemoryCheckBox,
    MemoryItemSelector,
    MemoryInputField,
    MemoryIntField,
    MemoryMultiLineEdit,
    MemoryComboBox,
    MemoryTable,
    MemoryTree,
    MemoryDumbTab,
    MemoryRadioButton,
    MemorySelectionBox,
    MemoryContainer,
]

KIND_MAP: Dict[str, Type[MemoryWidget]] = {}
for _cls in WIDGET_TYPES:
    KIND_MAP[_cls.WIDGET_CLASS.lower()] = _cls
    for _kind in _cls.KINDS:
        KIND_MAP[_kind] = _cls

_PASSTHROUGH = ('checked', 'value', 'text', 'header', 'minimum', 'maximum', 'group')


def build_item(desc: Any) -> MemoryItem:
    if isinstance(desc, str):
        return MemoryItem(desc)
    if isinstance(desc, list):
        return MemoryItem(cells=[str(cell) for cell in desc])
    if not isinstance(desc, dict):
        raise ValueError(f'item must be a string, list or object, got {type(desc).__name__}')
    return MemoryItem(
        label=str(desc.get('label', '')),
        selected=bool(desc.get('selected', False)),
        children=[build_item(child) for child in desc.get('children') or []],
        cells=[str(cell) for cell in desc.get('cells') or []],
    )


def build_widget(desc: Dict[str, Any]) -> MemoryWidget:
    if not isinstance(desc, dict):
        raise ValueError('widget description must be an object')
    kind = str(desc.get('kind') or desc.get('class') or '').strip().lower()
    cls = KIND_MAP.get(kind)
    if cls is None:
        raise ValueError(f"unknown widget kind '{kind}'")

    kwargs: Dict[str, Any] = {
        'label': str(desc.get('label', '')),
        'widget_id': str(desc['id']) if desc.get('id') is not None else None,
    }
    for key in _PASSTHROUGH:
        if key in desc:
            kwargs[key] = desc[key]
    if 'items' in desc:
        kwargs['items'] = [build_item(item) for item in desc.get('items') or []]
    if cls is MemoryContainer:
        kwargs['children'] = [build_widget(child) for child in desc.get('children') or []]
    return cls(**kwargs)


def build_dialog(desc: Dict[str, Any]) -> MemoryDialog:
    if not isinstance(desc, dict):
        raise ValueError('dialog description must be an object')
    widgets = [build_widget(widget) for widget in desc.get('widgets') or []]
    return MemoryDialog(title=str(desc.get('title', '')), widgets=widgets)


def build_toolkit(desc: Dict[str, Any]) -> MemoryToolkit:
    if not isinstance(desc, dict):
        raise ValueError('toolkit description must be an object')
    if 'dialogs' in desc:
        return MemoryToolkit([build_dialog(dialog) for dialog in desc.get('dialogs') or []])
    return MemoryToolkit([build_dialog(desc)])


def load_toolkit(path: str) -> MemoryToolkit:
    """Read a JSON dialog description; malformed files raise ValueError"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            desc = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f'invalid dialog file {path}: {e}') from e
    return build_toolkit(desc)

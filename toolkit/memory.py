"""In-memory widget toolkit implementing the base_classes contract.

Used by the CLI demo, the web self-test and the test-suite. Every widget
records the mutator calls it receives in `calls`, in order, so callers can
check focus/mutation sequencing.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from base_classes import (
    CheckBox,
    ComboBox,
    DumbTab,
    InputField,
    IntField,
    Item,
    ItemSelector,
    MenuButton,
    MultiLineEdit,
    PushButton,
    RadioButton,
    RichText,
    SelectionBox,
    Table,
    Tree,
    Widget,
    WidgetFinder,
)


def clean_shortcut(label: str) -> str:
    """Drop keyboard shortcut markers: '&OK' -> 'OK', '&&' -> '&'"""
    return (label or '').replace('&&', '\0').replace('&', '').replace('\0', '&')


class MemoryItem(Item):

    def __init__(self, label: str = '', selected: bool = False, children: Optional[List['MemoryItem']] = None,
                 cells: Optional[List[str]] = None) -> None:
        self._label = label
        self._selected = selected
        self.children: List[MemoryItem] = list(children or [])
        self.cells: List[str] = list(cells or [])
        self.parent: Optional[MemoryItem] = None
        for child in self.children:
            child.parent = self

    def label(self) -> str:
        if not self._label and self.cells:
            return self.cells[0]
        return self._label

    def is_selected(self) -> bool:
        return self._selected

    def set_selected(self, selected: bool = True) -> None:
        self._selected = bool(selected)

    def walk(self) -> Iterator['MemoryItem']:
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'label': self.label(), 'selected': self._selected}
        if self.cells:
            data['cells'] = list(self.cells)
        if self.children:
            data['children'] = [child.to_dict() for child in self.children]
        return data

    def __repr__(self) -> str:
        return f"MemoryItem({self.label()!r}, selected={self._selected})"


def find_item_by_label(items: Sequence[MemoryItem], label: str) -> Optional[MemoryItem]:
    for root in items:
        for item in root.walk():
            if item.label() == label:
                return item
    return None


def find_item_by_path(items: Sequence[MemoryItem], path: Sequence[str]) -> Optional[MemoryItem]:
    if not path:
        return None
    level: Sequence[MemoryItem] = items
    found: Optional[MemoryItem] = None
    for segment in path:
        found = next((item for item in level if item.label() == segment), None)
        if found is None:
            return None
        level = found.children
    return found


class MemoryWidget(Widget):
    WIDGET_CLASS = 'Widget'
    KINDS: Tuple[str, ...] = ()

    def __init__(self, label: str = '', widget_id: Optional[str] = None, **_: Any) -> None:
        self._label = label
        self._id = widget_id
        self.calls: List[Tuple[Any, ...]] = []
        self.dialog: Optional['MemoryDialog'] = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def widget_class(self) -> str:
        return self.WIDGET_CLASS

    def label(self) -> str:
        return self._label

    def widget_id(self) -> Optional[str]:
        return self._id

    def set_keyboard_focus(self) -> bool:
        self._record('focus')
        if self.dialog is not None:
            self.dialog.focused = self
        return True

    def matches_type(self, widget_type: str) -> bool:
        wanted = widget_type.lower()
        return wanted == self.WIDGET_CLASS.lower() or wanted in self.KINDS

    def children(self) -> List['MemoryWidget']:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._label!r}, id={self._id!r})"


class MemoryContainer(MemoryWidget):
    """Layout widget (frame, box); holds children, supports no action"""

    WIDGET_CLASS = 'Frame'
    KINDS = ('frame', 'vbox', 'hbox', 'container')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, children: Optional[List[MemoryWidget]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._children: List[MemoryWidget] = list(children or [])

    def children(self) -> List[MemoryWidget]:
        return list(self._children)

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props['children'] = len(self._children)
        return props


class _ItemsMixin:
    """Shared item storage for the selection widgets"""

    items: List[MemoryItem]

    def _init_items(self, items: Optional[List[MemoryItem]]) -> None:
        self.items = list(items or [])

    def selected_items(self) -> List[MemoryItem]:
        return [item for root in self.items for item in root.walk() if item.is_selected()]

    def _items_props(self, props: Dict[str, Any]) -> Dict[str, Any]:
        props['items'] = [item.to_dict() for item in self.items]
        return props


class MemoryPushButton(MemoryWidget, PushButton):
    WIDGET_CLASS = 'PushButton'
    KINDS = ('button', 'pushbutton')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self.activations = 0

    def activate(self) -> None:
        self._record('activate')
        self.activations += 1


class MemoryRichText(MemoryWidget, RichText):
    WIDGET_CLASS = 'RichText'
    KINDS = ('richtext',)

    def __init__(self, label: str = '', widget_id: Optional[str] = None, text: str = '', **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self.text = text
        self.activated_links: List[str] = []

    def activate_link(self, link: str) -> None:
        self._record('activate_link', link)
        self.activated_links.append(link)

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props['text'] = self.text
        return props


class MemoryMenuButton(_ItemsMixin, MemoryWidget, MenuButton):
    WIDGET_CLASS = 'MenuButton'
    KINDS = ('menubutton', 'menu')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)
        self.activated_items: List[MemoryItem] = []

    def find_item(self, path: Sequence[str]) -> Optional[Item]:
        return find_item_by_path(self.items, path)

    def activate_item(self, item: Item) -> None:
        self._record('activate_item', item.label())
        self.activated_items.append(item)

    def properties(self) -> Dict[str, Any]:
        return self._items_props(super().properties())


class MemoryCheckBox(MemoryWidget, CheckBox):
    WIDGET_CLASS = 'CheckBox'
    KINDS = ('checkbox',)

    def __init__(self, label: str = '', widget_id: Optional[str] = None, checked: bool = False, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._checked = bool(checked)

    def is_checked(self) -> bool:
        return self._checked

    def set_checked(self, checked: bool = True) -> None:
        self._record('set_checked', bool(checked))
        self._checked = bool(checked)

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props['value'] = self._checked
        return props


class MemoryItemSelector(_ItemsMixin, MemoryWidget, ItemSelector):
    WIDGET_CLASS = 'ItemSelector'
    KINDS = ('itemselector',)

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)

    def find_item(self, label: str) -> Optional[Item]:
        return find_item_by_label(self.items, label)

    def select_item(self, item: Item, selected: bool = True) -> None:
        self._record('select_item', item.label(), bool(selected))
        item.set_selected(selected)

    def activate_item(self, item: Item) -> None:
        self._record('activate_item', item.label())

    def properties(self) -> Dict[str, Any]:
        return self._items_props(super().properties())


class _ValueWidget(MemoryWidget):

    def __init__(self, label: str = '', widget_id: Optional[str] = None, value: Any = '', **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self.value = value

    def set_value(self, value) -> None:
        self._record('set_value', value)
        self.value = value

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props['value'] = self.value
        return props


class MemoryInputField(_ValueWidget, InputField):
    WIDGET_CLASS = 'InputField'
    KINDS = ('input', 'inputfield', 'textentry')


class MemoryIntField(_ValueWidget, IntField):
    WIDGET_CLASS = 'IntField'
    KINDS = ('intfield', 'numeric')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, value: int = 0,
                 minimum: Optional[int] = None, maximum: Optional[int] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, value=int(value), **kw)
        self.minimum = minimum
        self.maximum = maximum

    def set_value(self, value: int) -> None:
        # Clamp like a spin box would
        value = int(value)
        if self.minimum is not None:
            value = max(self.minimum, value)
        if self.maximum is not None:
            value = min(self.maximum, value)
        super().set_value(value)


class MemoryMultiLineEdit(_ValueWidget, MultiLineEdit):
    WIDGET_CLASS = 'MultiLineEdit'
    KINDS = ('multilineedit', 'textarea')


class MemoryComboBox(_ItemsMixin, MemoryWidget, ComboBox):
    WIDGET_CLASS = 'ComboBox'
    KINDS = ('combobox', 'combo')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)
        self.activations = 0

    def find_item(self, label: str) -> Optional[Item]:
        return find_item_by_label(self.items, label)

    def select_item(self, item: Item, selected: bool = True) -> None:
        # Single selection
        self._record('select_item', item.label())
        for other in self.items:
            other.set_selected(False)
        item.set_selected(selected)

    def activate(self) -> None:
        self._record('activate')
        self.activations += 1

    def properties(self) -> Dict[str, Any]:
        props = self._items_props(super().properties())
        selected = self.selected_items()
        props['value'] = selected[0].label() if selected else ''
        return props


class MemoryTable(_ItemsMixin, MemoryWidget, Table):
    WIDGET_CLASS = 'Table'
    KINDS = ('table',)

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None,
                 header: Optional[List[str]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)
        self.header = list(header or [])

    def find_item(self, text: str, column: int = 0) -> Optional[Item]:
        for item in self.items:
            if 0 <= column < len(item.cells) and item.cells[column] == text:
                return item
        return None

    def select_item(self, item: Item, selected: bool = True) -> None:
        self._record('select_item', item.label())
        for other in self.items:
            other.set_selected(False)
        item.set_selected(selected)

    def properties(self) -> Dict[str, Any]:
        props = self._items_props(super().properties())
        props['header'] = list(self.header)
        return props


class MemoryTree(_ItemsMixin, MemoryWidget, Tree):
    WIDGET_CLASS = 'Tree'
    KINDS = ('tree',)

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)
        self.activations = 0

    def find_item(self, path: Sequence[str]) -> Optional[Item]:
        return find_item_by_path(self.items, path)

    def select_item(self, item: Item, selected: bool = True) -> None:
        self._record('select_item', item.label())
        for root in self.items:
            for other in root.walk():
                other.set_selected(False)
        item.set_selected(selected)

    def activate(self) -> None:
        self._record('activate')
        self.activations += 1

    def properties(self) -> Dict[str, Any]:
        return self._items_props(super().properties())


class MemoryDumbTab(_ItemsMixin, MemoryWidget, DumbTab):
    WIDGET_CLASS = 'DumbTab'
    KINDS = ('tab', 'dumbtab')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)
        self.activations = 0

    def find_item(self, label: str) -> Optional[Item]:
        return find_item_by_label(self.items, label)

    def select_item(self, item: Item, selected: bool = True) -> None:
        self._record('select_item', item.label())
        for other in self.items:
            other.set_selected(False)
        item.set_selected(selected)

    def activate(self) -> None:
        self._record('activate')
        self.activations += 1

    def properties(self) -> Dict[str, Any]:
        return self._items_props(super().properties())


class MemoryRadioButton(MemoryWidget, RadioButton):
    WIDGET_CLASS = 'RadioButton'
    KINDS = ('radiobutton', 'radio')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, value: bool = False, group: Optional[str] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self.value = bool(value)
        self.group = group

    def set_value(self, value: bool) -> None:
        self._record('set_value', bool(value))
        # Radio buttons of the same group are mutually exclusive
        if value and self.group and self.dialog is not None:
            for widget in self.dialog.widgets():
                if isinstance(widget, MemoryRadioButton) and widget is not self and widget.group == self.group:
                    widget.value = False
        self.value = bool(value)

    def properties(self) -> Dict[str, Any]:
        props = super().properties()
        props['value'] = self.value
        return props


class MemorySelectionBox(_ItemsMixin, MemoryWidget, SelectionBox):
    WIDGET_CLASS = 'SelectionBox'
    KINDS = ('selectionbox', 'list')

    def __init__(self, label: str = '', widget_id: Optional[str] = None, items: Optional[List[MemoryItem]] = None, **kw: Any) -> None:
        super().__init__(label, widget_id, **kw)
        self._init_items(items)

    def find_item(self, label: str) -> Optional[Item]:
        return find_item_by_label(self.items, label)

    def select_item(self, item: Item, selected: bool = True) -> None:
        self._record('select_item', item.label())
        for other in self.items:
            other.set_selected(False)
        item.set_selected(selected)

    def properties(self) -> Dict[str, Any]:
        return self._items_props(super().properties())


class MemoryDialog:

    def __init__(self, title: str = '', widgets: Optional[List[MemoryWidget]] = None) -> None:
        self.title = title
        self._widgets: List[MemoryWidget] = list(widgets or [])
        self.focused: Optional[MemoryWidget] = None
        for widget in self.widgets():
            widget.dialog = self

    def widgets(self) -> List[MemoryWidget]:
        """All widgets, depth first, containers included"""
        found: List[MemoryWidget] = []

        def _walk(widgets: Sequence[MemoryWidget]) -> None:
            for widget in widgets:
                found.append(widget)
                _walk(widget.children())

        _walk(self._widgets)
        return found

    def __repr__(self) -> str:
        return f"MemoryDialog({self.title!r}, widgets={len(self._widgets)})"


class MemoryToolkit(WidgetFinder):
    """Dialog stack plus the Widget Locator over the topmost dialog"""

    def __init__(self, dialogs: Optional[List[MemoryDialog]] = None) -> None:
        self._dialogs: List[MemoryDialog] = list(dialogs or [])
        self.redraw_count = 0

    def open_dialog(self, dialog: MemoryDialog) -> MemoryDialog:
        self._dialogs.append(dialog)
        return dialog

    def close_dialog(self) -> Optional[MemoryDialog]:
        return self._dialogs.pop() if self._dialogs else None

    def topmost_dialog(self) -> Optional[MemoryDialog]:
        return self._dialogs[-1] if self._dialogs else None

    def all(self) -> List[Widget]:
        dialog = self.topmost_dialog()
        return list(dialog.widgets()) if dialog else []

    def find(self, label: Optional[str], widget_id: Optional[str], widget_type: Optional[str]) -> List[Widget]:
        found = []
        for widget in self.all():
            if label is not None and label not in (widget.label(), clean_shortcut(widget.label())):
                continue
            if widget_id is not None and widget.widget_id() != widget_id:
                continue
            if widget_type is not None and not widget.matches_type(widget_type):
                continue
            found.append(widget)
        return found

    def redraw(self) -> None:
        self.redraw_count += 1

"""
Abstract base classes for the widget toolkit that uiremote drives.

The dispatcher never talks to a concrete UI library. A toolkit backend
implements these interfaces: one abstract class per capability, an Item
interface for selectable sub-entities and a WidgetFinder that resolves
selection criteria to widgets on the topmost dialog.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class ActionError(Exception):
    def __init__(self, user_message: str, *, debug_info: Optional[Dict[str, Any]] = None):
        super().__init__(user_message)
        self.user_message = user_message
        self.debug_info = debug_info or {}


class ItemNotFound(ActionError):
    """Raised by an action behavior when a nested item lookup fails"""

    def __init__(self, value: str, widget_kind: str, user_message: Optional[str] = None):
        message = user_message or f'"{value}" item cannot be found in the {widget_kind}'
        super().__init__(message, debug_info={'value': value, 'widget_kind': widget_kind})
        self.value = value
        self.widget_kind = widget_kind


class Item(ABC):
    """
    A selectable sub-entity owned by a widget (row, tree node, menu entry)
    """

    @abstractmethod
    def label(self) -> str:
        pass

    @abstractmethod
    def is_selected(self) -> bool:
        pass

    @abstractmethod
    def set_selected(self, selected: bool = True) -> None:
        pass


class Widget(ABC):
    """
    A single interactive UI element exposed by the host runtime
    """

    @abstractmethod
    def widget_class(self) -> str:
        """Runtime type name, used in diagnostics and type filtering"""
        pass

    @abstractmethod
    def label(self) -> str:
        pass

    @abstractmethod
    def widget_id(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_keyboard_focus(self) -> bool:
        pass

    def properties(self) -> Dict[str, Any]:
        """Serializable description used by the widget listing endpoint"""
        props: Dict[str, Any] = {'class': self.widget_class()}
        if self.widget_id() is not None:
            props['id'] = self.widget_id()
        if self.label():
            props['label'] = self.label()
        return props


# --- Capabilities ---------------------------------------------------------


class PushButton(Widget):

    @abstractmethod
    def activate(self) -> None:
        pass


class RichText(Widget):

    @abstractmethod
    def activate_link(self, link: str) -> None:
        pass


class MenuButton(Widget):

    @abstractmethod
    def find_item(self, path: Sequence[str]) -> Optional[Item]:
        pass

    @abstractmethod
    def activate_item(self, item: Item) -> None:
        pass


class CheckBox(Widget):

    @abstractmethod
    def is_checked(self) -> bool:
        pass

    @abstractmethod
    def set_checked(self, checked: bool = True) -> None:
        pass


class ItemSelector(Widget):
    """
    Selector whose items carry their own selected flag and may be activated.
    The widget tracks selection separately, so both must be updated.
    """

    @abstractmethod
    def find_item(self, label: str) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass

    @abstractmethod
    def activate_item(self, item: Item) -> None:
        pass


class InputField(Widget):

    @abstractmethod
    def set_value(self, text: str) -> None:
        pass


class IntField(Widget):

    @abstractmethod
    def set_value(self, value: int) -> None:
        pass


class MultiLineEdit(Widget):

    @abstractmethod
    def set_value(self, text: str) -> None:
        pass


class ComboBox(Widget):

    @abstractmethod
    def find_item(self, label: str) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass

    @abstractmethod
    def activate(self) -> None:
        pass


class Table(Widget):

    @abstractmethod
    def find_item(self, text: str, column: int = 0) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass


class Tree(Widget):

    @abstractmethod
    def find_item(self, path: Sequence[str]) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass

    @abstractmethod
    def activate(self) -> None:
        pass


class DumbTab(Widget):
    """Tab strip whose tabs are plain items"""

    @abstractmethod
    def find_item(self, label: str) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass

    @abstractmethod
    def activate(self) -> None:
        pass


class RadioButton(Widget):

    @abstractmethod
    def set_value(self, value: bool) -> None:
        pass


class SelectionBox(Widget):

    @abstractmethod
    def find_item(self, label: str) -> Optional[Item]:
        pass

    @abstractmethod
    def select_item(self, item: Item, selected: bool = True) -> None:
        pass


CAPABILITIES = (
    PushButton,
    RichText,
    MenuButton,
    CheckBox,
    ItemSelector,
    InputField,
    IntField,
    MultiLineEdit,
    ComboBox,
    Table,
    Tree,
    DumbTab,
    RadioButton,
    SelectionBox,
)


# --- Locator ----------------------------------------------------------------


class WidgetFinder(ABC):
    """
    Widget Locator contract. Lookups always run against the topmost dialog.
    """

    @abstractmethod
    def topmost_dialog(self) -> Optional[Any]:
        """Return the active dialog handle or None when no dialog is open"""
        pass

    @abstractmethod
    def find(self, label: Optional[str], widget_id: Optional[str], widget_type: Optional[str]) -> List[Widget]:
        pass

    @abstractmethod
    def all(self) -> List[Widget]:
        pass

    def redraw(self) -> None:
        """Called after a successful mutation; backends may re-render"""
        pass

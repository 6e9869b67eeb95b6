from __future__ import annotations

from enum import IntEnum
from http import HTTPStatus

from base_classes import ItemNotFound, ItemSelector
from core.executor import with_widget_as


class SelectorState(IntEnum):
    """Requested item state; TOGGLE flips whatever the item currently has"""

    TOGGLE = -1
    DESELECT = 0
    SELECT = 1


def set_item_selector_state(widget, value: str, state: SelectorState = SelectorState.TOGGLE, logger=None) -> HTTPStatus:
    """Select, deselect or toggle the item labelled `value`.

    Raises ItemNotFound when the widget has no such item. The item flag and the
    widget's own selection are both updated, then the item is activated.
    """

    def apply(selector: ItemSelector) -> None:
        item = selector.find_item(value)
        if item is None:
            raise ItemNotFound(value, 'item selector')
        if logger is not None:
            logger.action_event('item_selector', {
                'message': 'Activating item selector item',
                'label': selector.label(),
                'value': value,
                'state': SelectorState(state).name.lower(),
            }, component='core.item_selector')
        selector.set_keyboard_focus()
        # Read the current flag exactly once
        if state == SelectorState.TOGGLE:
            selected = not item.is_selected()
        else:
            selected = state == SelectorState.SELECT
        item.set_selected(selected)
        selector.select_item(item, selected)
        selector.activate_item(item)

    return with_widget_as(widget, ItemSelector, apply)

from base_classes import (
    ComboBox,
    DumbTab,
    ItemNotFound,
    ItemSelector,
    RadioButton,
    SelectionBox,
    Table,
    Tree,
)
from core.executor import WidgetAction
from core.item_selector import SelectorState, set_item_selector_state


class SelectAction(WidgetAction):
    """
    Select an entry in a selection widget.

    Focus ordering differs per widget kind: the combo box is focused before
    the lookup, the others only once the item is found.
    """

    name = 'select'

    def cascade(self):
        return (
            (ComboBox, self._select_combo_item),
            (Table, self._select_table_row),
            (Tree, self._select_tree_item),
            (DumbTab, self._select_tab),
            (RadioButton, self._select_radio_button),
            (SelectionBox, self._select_list_item),
            (ItemSelector, self._select_selector_item),
        )

    def _select_combo_item(self, combo: ComboBox, request):
        self.milestone('Activating ComboBox', combo, value=request.value)
        combo.set_keyboard_focus()
        item = combo.find_item(request.value)
        if item is None:
            raise ItemNotFound(request.value, 'combo box')
        combo.select_item(item)
        combo.activate()

    def _select_table_row(self, table: Table, request):
        item = table.find_item(request.value, request.column)
        if item is None:
            raise ItemNotFound(request.value, 'table')
        self.milestone('Activating Table', table, value=request.value, column=request.column)
        table.set_keyboard_focus()
        table.select_item(item)

    def _select_tree_item(self, tree: Tree, request):
        item = tree.find_item(self.item_path(request.value))
        if item is None:
            raise ItemNotFound(request.value, 'tree')
        self.milestone('Activating Tree item', tree, item=item.label())
        tree.set_keyboard_focus()
        tree.select_item(item)
        tree.activate()

    def _select_tab(self, tab: DumbTab, request):
        item = tab.find_item(request.value)
        if item is None:
            raise ItemNotFound(request.value, 'tab')
        self.milestone('Activating tab', tab, item=item.label())
        tab.set_keyboard_focus()
        tab.select_item(item)
        tab.activate()

    def _select_radio_button(self, radio: RadioButton, request):
        self.milestone('Activating RadioButton', radio)
        radio.set_keyboard_focus()
        radio.set_value(True)

    def _select_list_item(self, box: SelectionBox, request):
        item = box.find_item(request.value)
        if item is None:
            raise ItemNotFound(request.value, 'selection box')
        self.milestone('Activating selection box', box, value=request.value)
        box.set_keyboard_focus()
        box.select_item(item)

    def _select_selector_item(self, selector: ItemSelector, request):
        set_item_selector_state(selector, request.value, SelectorState.SELECT, logger=self.logger)

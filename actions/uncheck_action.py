from base_classes import CheckBox, ItemSelector
from core.executor import WidgetAction
from core.item_selector import SelectorState, set_item_selector_state


class UncheckAction(WidgetAction):

    name = 'uncheck'

    def cascade(self):
        return (
            (CheckBox, self._uncheck),
            (ItemSelector, self._deselect_item),
        )

    def _uncheck(self, checkbox: CheckBox, request):
        if not checkbox.is_checked():
            return
        self.milestone('Unchecking', checkbox)
        checkbox.set_keyboard_focus()
        checkbox.set_checked(False)

    def _deselect_item(self, selector: ItemSelector, request):
        set_item_selector_state(selector, request.value, SelectorState.DESELECT, logger=self.logger)

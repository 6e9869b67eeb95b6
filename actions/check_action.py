from base_classes import CheckBox, ItemSelector
from core.executor import WidgetAction
from core.item_selector import SelectorState, set_item_selector_state


class CheckAction(WidgetAction):

    name = 'check'

    def cascade(self):
        return (
            (CheckBox, self._check),
            (ItemSelector, self._select_item),
        )

    def _check(self, checkbox: CheckBox, request):
        if checkbox.is_checked():
            return
        self.milestone('Checking', checkbox)
        checkbox.set_keyboard_focus()
        checkbox.set_checked(True)

    def _select_item(self, selector: ItemSelector, request):
        set_item_selector_state(selector, request.value, SelectorState.SELECT, logger=self.logger)

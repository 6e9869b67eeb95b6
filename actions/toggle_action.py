from base_classes import CheckBox, ItemSelector
from core.executor import WidgetAction
from core.item_selector import set_item_selector_state


class ToggleAction(WidgetAction):
    """Reverse the state of a checkbox or of one item selector entry"""

    name = 'toggle'

    def cascade(self):
        return (
            (CheckBox, self._toggle),
            (ItemSelector, self._toggle_item),
        )

    def _toggle(self, checkbox: CheckBox, request):
        self.milestone('Toggling', checkbox)
        checkbox.set_keyboard_focus()
        checkbox.set_checked(not checkbox.is_checked())

    def _toggle_item(self, selector: ItemSelector, request):
        set_item_selector_state(selector, request.value, logger=self.logger)

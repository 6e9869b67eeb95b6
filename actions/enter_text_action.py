from base_classes import InputField, IntField, MultiLineEdit
from core.executor import WidgetAction
from core.request import to_int


class EnterTextAction(WidgetAction):

    name = 'enter_text'

    def cascade(self):
        return (
            (InputField, self._set_text),
            (IntField, self._set_number),
            (MultiLineEdit, self._set_text),
        )

    def _set_text(self, field, request):
        self.milestone(f'Setting value for {field.widget_class()}', field)
        field.set_keyboard_focus()
        field.set_value(request.value)

    def _set_number(self, field: IntField, request):
        # Non-numeric input becomes 0, same as the toolkit's own coercion
        self.milestone(f'Setting value for {field.widget_class()}', field)
        field.set_keyboard_focus()
        field.set_value(to_int(request.value))

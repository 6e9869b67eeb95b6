from base_classes import ItemNotFound, MenuButton, PushButton, RichText
from core.executor import WidgetAction


class PressAction(WidgetAction):
    """Press a button, follow a rich text link or activate a menu entry"""

    name = 'press'

    def cascade(self):
        return (
            (PushButton, self._press_button),
            (RichText, self._activate_link),
            (MenuButton, self._activate_menu_item),
        )

    def _press_button(self, button: PushButton, request):
        self.milestone('Pressing button', button)
        button.set_keyboard_focus()
        button.activate()

    def _activate_link(self, rich_text: RichText, request):
        self.milestone('Activating hyperlink on richtext', rich_text, link=request.value)
        rich_text.set_keyboard_focus()
        rich_text.activate_link(request.value)

    def _activate_menu_item(self, menu: MenuButton, request):
        item = menu.find_item(self.item_path(request.value))
        if item is None:
            raise ItemNotFound(
                request.value,
                'MenuButton widget',
                f'Item with path: "{request.value}" cannot be found in the MenuButton widget',
            )
        self.milestone('Activating item by path', menu, path=request.value)
        menu.set_keyboard_focus()
        menu.activate_item(item)

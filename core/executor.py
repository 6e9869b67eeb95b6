from __future__ import annotations

from abc import ABC, abstractmethod
from http import HTTPStatus
from typing import Any, Callable, List, Optional, Sequence, Tuple

from core.item_path import PATH_DELIMITER, split_path
from core.request import ActionRequest
from core.results import ActionResult


Behavior = Callable[[Any, ActionRequest], None]


def with_widget_as(widget, capability: type, operation: Callable[[Any], None]) -> HTTPStatus:
    """View `widget` as `capability` and run `operation` on it.

    A failed view returns NOT_FOUND and leaves the body to the caller.
    Exceptions raised by `operation` propagate to the dispatcher.
    """
    if not isinstance(widget, capability):
        return HTTPStatus.NOT_FOUND
    operation(widget)
    return HTTPStatus.OK


class WidgetAction(ABC):
    """
    Base class for the vocabulary actions in actions/.

    Subclasses declare an ordered capability cascade; the first capability the
    widget implements selects the behavior. A widget matching none of them is
    reported as unsupported.
    """

    name: str = ''

    def __init__(self, session=None):
        self.session = session

    @abstractmethod
    def cascade(self) -> Sequence[Tuple[type, Behavior]]:
        pass

    def capabilities(self) -> List[type]:
        return [capability for capability, _ in self.cascade()]

    def run(self, widget, request: ActionRequest) -> ActionResult:
        for capability, behavior in self.cascade():
            if isinstance(widget, capability):
                status = with_widget_as(widget, capability, lambda view: behavior(view, request))
                return ActionResult.from_status(status, widget)
        return ActionResult.unsupported(widget)

    # --- Helpers for behaviors -------------------------------------------

    @property
    def logger(self):
        return getattr(self.session, 'logger', None)

    def milestone(self, message: str, widget=None, **details: Any) -> None:
        logger = self.logger
        if logger is None:
            return
        data = {'message': message, **details}
        if widget is not None:
            data['widget'] = widget.widget_class()
            data['label'] = widget.label()
        logger.action_event(self.name, data, component=f'actions.{self.name}')

    def item_path(self, value: str) -> List[str]:
        delimiter: Optional[str] = getattr(self.session, 'path_delimiter', None)
        return split_path(value, delimiter or PATH_DELIMITER)

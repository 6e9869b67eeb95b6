from __future__ import annotations

from typing import Optional

from base_classes import ItemNotFound
from core.request import ActionRequest
from core.results import ActionResult, ErrorKind


class ActionDispatcher:
    """Resolve (action name, widget capability) to a behavior and run it.

    The caller hands over exactly one widget. Unknown names, capability
    mismatches and failed item lookups all come back as NOT_FOUND results;
    nothing raised by a behavior's item lookup escapes this class.
    """

    def __init__(self, session) -> None:
        self.session = session

    @property
    def logger(self):
        return getattr(self.session, 'logger', None)

    def dispatch(self, widget, action_name: Optional[str], request: Optional[ActionRequest] = None) -> ActionResult:
        request = request or ActionRequest(action=action_name)
        logger = self.logger
        if logger is not None:
            logger.action_detail('dispatch_start', {
                'action': action_name,
                'widget': widget.widget_class(),
                'label': widget.label(),
            }, component='core.dispatcher')

        action = self.session.get_action(action_name) if action_name else None
        if action is None:
            return ActionResult.failure(ErrorKind.UNKNOWN_ACTION)

        try:
            result = action.run(widget, request)
        except ItemNotFound as e:
            if logger is not None:
                logger.action_event('item_not_found', {
                    'action': action_name,
                    'widget': widget.widget_class(),
                    'value': e.value,
                }, component='core.dispatcher')
            return ActionResult.failure(ErrorKind.ITEM_NOT_FOUND, e.user_message)

        if logger is not None and not result.ok:
            logger.action_event('action_rejected', {
                'action': action_name,
                'widget': widget.widget_class(),
                'error': result.error.value if result.error else None,
            }, component='core.dispatcher')
        return result

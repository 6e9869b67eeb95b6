from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, List, Mapping, Optional, Tuple

from core.request import ActionRequest, SelectionCriteria
from core.results import ActionResult, ErrorKind, HandlerResponse


class WidgetsActionHandler:
    """Request-level flow: dialog check, widget lookup, single-target dispatch.

    The handler borrows widget handles only for the duration of one call and
    provides no isolation against concurrent changes made by the host UI.
    """

    def __init__(self, finder, dispatcher, logger=None) -> None:
        self.finder = finder
        self.dispatcher = dispatcher
        self.logger = logger

    def _lookup(self, params: Mapping[str, Any]) -> Tuple[Optional[List], Optional[ActionResult]]:
        if not self.finder.topmost_dialog():
            return None, ActionResult.failure(ErrorKind.NO_DIALOG_OPEN)

        criteria = SelectionCriteria.from_params(params)
        if criteria.filtered:
            widgets = list(self.finder.find(criteria.label, criteria.widget_id, criteria.widget_type))
        else:
            widgets = list(self.finder.all())

        if not widgets:
            return None, ActionResult.failure(ErrorKind.WIDGET_NOT_FOUND)
        return widgets, None

    def handle(self, params: Mapping[str, Any]) -> HandlerResponse:
        """Run the action named in `params` against the single matching widget"""
        widgets, failure = self._lookup(params)
        if failure is not None:
            return self._respond(failure, params)

        request = ActionRequest.from_params(params)
        if request.action is None:
            return self._respond(ActionResult.failure(ErrorKind.MISSING_ACTION), params)

        if len(widgets) != 1:
            return self._respond(ActionResult.failure(ErrorKind.AMBIGUOUS_SELECTION), params, matches=len(widgets))

        result = self.dispatcher.dispatch(widgets[0], request.action, request)
        # The action possibly changed something in the UI, signal a redraw
        return self._respond(result, params, redraw=result.ok)

    def describe(self, params: Mapping[str, Any]) -> HandlerResponse:
        """JSON description of the widgets matching the selection criteria"""
        widgets, failure = self._lookup(params)
        if failure is not None:
            return HandlerResponse.from_result(failure)
        body = json.dumps([widget.properties() for widget in widgets], ensure_ascii=False)
        return HandlerResponse(HTTPStatus.OK, body + '\n')

    def _respond(self, result: ActionResult, params: Mapping[str, Any], *, redraw: bool = False, matches: Optional[int] = None) -> HandlerResponse:
        if self.logger is not None:
            data = {
                'action': params.get('action'),
                'label': params.get('label'),
                'id': params.get('id'),
                'type': params.get('type'),
                'status': int(result.status),
                'error': result.error.value if result.error else None,
            }
            if matches is not None:
                data['matches'] = matches
            self.logger.action_event('request_done', data, component='core.handler')
        return HandlerResponse.from_result(result, redraw=redraw)

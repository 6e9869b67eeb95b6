"""Result and error model for widget actions.

Every failure degrades to a NOT_FOUND result with an explanatory body. The
request-level errors use a one-line JSON-ish body, action-specific failures
use a plain diagnostic line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Optional


CONTENT_TYPE = 'application/json'


class ErrorKind(str, Enum):
    NO_DIALOG_OPEN = 'no_dialog_open'
    WIDGET_NOT_FOUND = 'widget_not_found'
    AMBIGUOUS_SELECTION = 'ambiguous_selection'
    MISSING_ACTION = 'missing_action'
    UNKNOWN_ACTION = 'unknown_action'
    UNSUPPORTED_ACTION = 'unsupported_action'
    ITEM_NOT_FOUND = 'item_not_found'


_ERROR_MESSAGES = {
    ErrorKind.NO_DIALOG_OPEN: 'No dialog is open',
    ErrorKind.WIDGET_NOT_FOUND: 'Widget not found',
    ErrorKind.AMBIGUOUS_SELECTION: 'Multiple widgets found to act on, try using multicriteria search (label+id+type)',
    ErrorKind.MISSING_ACTION: 'Missing action parameter',
    ErrorKind.UNKNOWN_ACTION: 'Unknown action',
}


def error_body(kind: ErrorKind) -> str:
    """Top-level error line, e.g. '{ "error" : "Widget not found" }'"""
    return '{ "error" : "' + _ERROR_MESSAGES[kind] + '" }\n'


@dataclass(frozen=True)
class ActionResult:
    status: HTTPStatus
    body: str = ''
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK

    @classmethod
    def success(cls, body: str = '') -> 'ActionResult':
        return cls(HTTPStatus.OK, body)

    @classmethod
    def failure(cls, kind: ErrorKind, body: Optional[str] = None) -> 'ActionResult':
        if not body:
            body = error_body(kind)
        elif not body.endswith('\n'):
            body += '\n'
        return cls(HTTPStatus.NOT_FOUND, body, kind)

    @classmethod
    def unsupported(cls, widget) -> 'ActionResult':
        return cls.failure(
            ErrorKind.UNSUPPORTED_ACTION,
            f'Action is not supported for the selected widget: {widget.widget_class()}',
        )

    @classmethod
    def from_status(cls, status: HTTPStatus, widget=None) -> 'ActionResult':
        # The executor reports a failed capability view without a body
        if status == HTTPStatus.OK:
            return cls.success()
        if widget is not None:
            return cls.unsupported(widget)
        return cls.failure(ErrorKind.UNSUPPORTED_ACTION, 'Action is not supported for the selected widget')


@dataclass(frozen=True)
class HandlerResponse:
    """What the transport sends back: status, body, media type and redraw hint"""

    status: HTTPStatus
    body: str
    redraw: bool = False
    error: Optional[ErrorKind] = None
    content_type: str = CONTENT_TYPE

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK

    @classmethod
    def from_result(cls, result: ActionResult, *, redraw: bool = False) -> 'HandlerResponse':
        return cls(result.status, result.body, redraw=redraw, error=result.error)

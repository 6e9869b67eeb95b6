from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional


_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def to_int(value: Any, fallback: int = 0) -> int:
    """Coerce like C atoi: leading sign and digits, anything else yields fallback."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return fallback
    return int(match.group(1))


def _param(params: Mapping[str, Any], key: str) -> Optional[str]:
    value = params.get(key)
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class SelectionCriteria:
    label: Optional[str] = None
    widget_id: Optional[str] = None
    widget_type: Optional[str] = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'SelectionCriteria':
        return cls(
            label=_param(params, 'label'),
            widget_id=_param(params, 'id'),
            widget_type=_param(params, 'type'),
        )

    @property
    def filtered(self) -> bool:
        # Presence counts, an empty string is still a filter
        return self.label is not None or self.widget_id is not None or self.widget_type is not None


@dataclass(frozen=True)
class ActionRequest:
    action: Optional[str] = None
    value: str = ''
    column: int = 0

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'ActionRequest':
        return cls(
            action=_param(params, 'action'),
            value=_param(params, 'value') or '',
            column=to_int(params.get('column'), 0),
        )

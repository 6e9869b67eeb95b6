"""Item path parsing for hierarchical widgets (trees, menu buttons)."""

from typing import List


PATH_DELIMITER = '::'


def split_path(raw: str, delimiter: str = PATH_DELIMITER) -> List[str]:
    """Split on every delimiter occurrence, keeping empty segments.

    'a::::b' -> ['a', '', 'b']; '' -> [''].
    """
    if not delimiter:
        raise ValueError('path delimiter must not be empty')
    return (raw or '').split(delimiter)

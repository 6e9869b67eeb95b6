from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Dict, Optional, TextIO

from rich.console import Console
from rich.markup import escape


class OutputLevel(Enum):
    """
    Message output levels, in ascending order of importance.
    """
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


class OutputHandler:
    """
    Console writer for the CLI and the log mirror.

    Config usage:
      - config.get_option('DEFAULT', 'colors', fallback=True) => bool
      - config.get_option('DEFAULT', 'output_level', fallback='INFO') => str
      - config.get_option('DEFAULT', 'output_styles', fallback=None) => dict of level -> rich style
    """

    def __init__(self, config: Any, stream: Optional[TextIO] = None) -> None:
        self.config = config
        self._color_enabled = bool(config.get_option('DEFAULT', 'colors', fallback=True)) and not os.environ.get('NO_COLOR')

        level_str = str(config.get_option('DEFAULT', 'output_level', fallback='INFO') or 'INFO')
        try:
            self.level = OutputLevel[level_str.upper()]
        except KeyError:
            self.level = OutputLevel.INFO

        self.level_styles: Dict[OutputLevel, str] = {
            OutputLevel.DEBUG: 'dim',
            OutputLevel.INFO: '',
            OutputLevel.WARNING: 'yellow',
            OutputLevel.ERROR: 'bold red',
            OutputLevel.CRITICAL: 'bold underline red',
        }
        styles = config.get_option('DEFAULT', 'output_styles', fallback=None)
        if isinstance(styles, dict):
            for level_name, style in styles.items():
                try:
                    self.level_styles[OutputLevel[str(level_name).upper()]] = str(style)
                except KeyError:
                    pass

        self.set_stream(stream or sys.stdout)
        if level_str.upper() not in OutputLevel.__members__:
            self.error(f"Invalid output level '{level_str}', using INFO")

    def set_stream(self, stream: TextIO) -> None:
        """Switch output to a different stream (useful in testing)."""
        self._stream = stream
        self.console = Console(
            file=stream,
            no_color=not self._color_enabled,
            highlight=False,
            soft_wrap=True,
        )

    def _should_output(self, level: OutputLevel) -> bool:
        return level.value >= self.level.value

    def write(self, message: Any = '', level: OutputLevel = OutputLevel.INFO, style: Optional[str] = None,
              prefix: Optional[str] = None, end: str = '\n') -> None:
        if not self._should_output(level):
            return
        text = str(message)
        if prefix:
            text = f"{prefix}: {text}"
        self.console.print(escape(text), style=style or self.level_styles.get(level) or None, end=end)

    def debug(self, message: Any, **kwargs) -> None:
        self.write(message, level=OutputLevel.DEBUG, **kwargs)

    def info(self, message: Any, **kwargs) -> None:
        self.write(message, level=OutputLevel.INFO, **kwargs)

    def warning(self, message: Any, **kwargs) -> None:
        self.write(message, level=OutputLevel.WARNING, **kwargs)

    def error(self, message: Any, **kwargs) -> None:
        self.write(message, level=OutputLevel.ERROR, **kwargs)

    def critical(self, message: Any, **kwargs) -> None:
        self.write(message, level=OutputLevel.CRITICAL, **kwargs)

    def success(self, message: Any, **kwargs) -> None:
        self.write(message, style='bold green', **kwargs)

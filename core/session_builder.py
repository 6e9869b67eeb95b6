from __future__ import annotations

import os
from typing import Optional

from component_registry import ComponentRegistry
from config_manager import APP_ROOT, ConfigManager, SessionConfig


class SessionBuilder:
    """
    Builds fully configured sessions.
    The toolkit is either passed in or loaded from a JSON dialog file
    ([TOOLKIT].dialog_file or the `dialog_file` option).
    """

    def __init__(self, config_manager: ConfigManager):
        self.config_manager = config_manager

    def build(self, toolkit=None, dialog_file: Optional[str] = None, **options):
        # Late import to avoid circular dependency at module load time
        from session import Session
        from toolkit.loader import load_toolkit
        from toolkit.memory import MemoryToolkit

        session_config: SessionConfig = self.config_manager.create_session_config(options)
        registry = ComponentRegistry(session_config)
        session = Session(session_config, registry)

        # Initialize logging early and warn if enabled but not writable
        if bool(session.get_option('LOG', 'active', fallback=False)) and not session.logger.active():
            session.output.warning("Logging is enabled but the log file could not be opened; check [LOG].dir or permissions.")

        if toolkit is None:
            path = self.resolve_dialog_file(dialog_file or session.get_option('TOOLKIT', 'dialog_file', fallback=None))
            if dialog_file and path is None:
                raise FileNotFoundError(f'Could not find the dialog file at {dialog_file}')
            toolkit = load_toolkit(path) if path else MemoryToolkit()
        session.toolkit = toolkit

        session.logger.settings(session.config.effective_settings())
        return session

    @staticmethod
    def resolve_dialog_file(name: Optional[str]) -> Optional[str]:
        """Look in the working directory first, then relative to the app root"""
        if not name:
            return None
        name = str(name)
        path = ConfigManager.resolve_file_path(name)
        if path is None and not os.path.isabs(name):
            path = ConfigManager.resolve_file_path(name, APP_ROOT)
        return path

from __future__ import annotations
import threading
from typing import Any, Dict, Mapping
from config_manager import SessionConfig
from component_registry import ComponentRegistry
from core.dispatcher import ActionDispatcher
from core.handler import WidgetsActionHandler
from core.item_path import PATH_DELIMITER
from core.results import HandlerResponse


class Session:
    """
    Central session object that holds state and provides access to all services.
    This is what gets passed to actions and other components.
    """

    def __init__(self, config: SessionConfig, registry: ComponentRegistry, toolkit=None):
        self.config = config
        self.toolkit = toolkit
        self._registry = registry
        self._output = None
        self._logger = None
        # One request at a time touches the widget tree
        self._lock = threading.Lock()
        self.dispatcher = ActionDispatcher(self)

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    @property
    def output(self):
        if self._output is None:
            from utils.output_utils import OutputHandler
            self._output = OutputHandler(self.config)
            if self._registry.output is None:
                self._registry.output = self._output
        return self._output

    @property
    def logger(self):
        if self._logger is None:
            from utils.logging_utils import LoggingHandler
            self._logger = LoggingHandler(self.config, output_handler=self.output)
        return self._logger

    @property
    def path_delimiter(self) -> str:
        delimiter = self.get_option('ACTIONS', 'path_delimiter', fallback=PATH_DELIMITER)
        return str(delimiter) if delimiter else PATH_DELIMITER

    def get_option(self, section: str, option: str, fallback: Any = None):
        return self.config.get_option(section, option, fallback)

    def set_option(self, key: str, value: Any) -> None:
        self.config.set_option(key, value)

    # Convenience methods that delegate to registry
    def get_action(self, name: str):
        """Return an action instance for the given name, None for unknown names."""
        action_class = self._registry.get_action_class(name)
        if action_class:
            try:
                return action_class(self)
            except Exception as e:
                self.output.warning(f"Could not instantiate action '{name}': {e}")
                return None
        return None

    def list_actions(self) -> Dict[str, list]:
        """Vocabulary actions mapped to their capability cascade"""
        actions = {}
        for name in self._registry.list_available_actions():
            action = self.get_action(name)
            if action is not None:
                actions[name] = [cap.__name__ for cap in action.capabilities()]
        return actions

    # --- Widget requests ------------------------------------------------
    def dialog_open(self) -> bool:
        return bool(self.toolkit is not None and self.toolkit.topmost_dialog())

    def _handler(self) -> WidgetsActionHandler:
        return WidgetsActionHandler(self.toolkit, self.dispatcher, self.logger)

    def handle_request(self, params: Mapping[str, Any]) -> HandlerResponse:
        """Run one action request; requests a redraw when the action succeeded"""
        with self._lock:
            response = self._handler().handle(params)
            if response.redraw:
                self.toolkit.redraw()
        return response

    def describe_widgets(self, params: Mapping[str, Any]) -> HandlerResponse:
        with self._lock:
            return self._handler().describe(params)

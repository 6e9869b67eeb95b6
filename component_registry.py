import os
import importlib.util
from typing import Dict, List, Optional
from config_manager import SessionConfig, ConfigManager


# The action vocabulary is closed: names outside it are never loaded
ACTION_NAMES = ('press', 'check', 'uncheck', 'toggle', 'enter_text', 'select')


class ComponentRegistry:
    """
    Central registry for widget actions.
    - Returns action classes (not instances); Session instantiates them.
    - A user actions directory may override a vocabulary action, never add one.
    """

    def __init__(self, config: SessionConfig, output=None):
        self.config = config
        self.output = output
        self._action_cache: Dict[str, Optional[type]] = {}

    def is_known_action(self, name: str) -> bool:
        return name in ACTION_NAMES

    def get_action_class(self, name: str) -> Optional[type]:
        """Return the action class for the given name."""
        if not self.is_known_action(name):
            return None
        if name not in self._action_cache:
            self._action_cache[name] = self._load_action(name)
        return self._action_cache[name]

    def _warn(self, message: str) -> None:
        try:
            self.output.warning(message)
        except Exception:
            print(f"Warning: {message}")

    def _load_action(self, name: str):
        # Check user actions directory first
        user_actions_dir = self.config.get_option('DEFAULT', 'user_actions', fallback=None)
        if user_actions_dir:
            user_dir = ConfigManager.resolve_directory_path(str(user_actions_dir))
            if user_dir:
                action = self._try_load_from_directory(name, user_dir)
                if action:
                    return action

        # Fall back to project actions
        actions_dir = os.path.join(os.path.dirname(__file__), 'actions')
        action = self._try_load_from_directory(name, actions_dir)
        if action:
            return action

        self._warn(f"Action '{name}' not found")
        return None

    def _try_load_from_directory(self, name: str, directory: str):
        """Try to load an action from a specific directory"""
        try:
            # Convert action name to filename (e.g., 'enter_text' -> 'enter_text_action.py')
            file_path = os.path.join(directory, f"{name}_action.py")
            if not os.path.isfile(file_path):
                return None

            spec = importlib.util.spec_from_file_location(f"{name}_action", file_path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            # Prefer the PascalCase class name: 'enter_text' -> 'EnterTextAction'
            expected_class = ''.join(part.capitalize() for part in name.split('_')) + 'Action'
            cls = getattr(module, expected_class, None)
            if isinstance(cls, type):
                return cls

            # Fallback: first 'Action' class defined in THIS module
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and attr_name.endswith('Action')
                    and getattr(attr, '__module__', None) == module.__name__
                ):
                    return attr
            return None

        except Exception as e:
            self._warn(f"Could not load action {name} from {directory}: {e}")
            return None

    def list_available_actions(self) -> List[str]:
        """Vocabulary actions that resolve to a loadable class"""
        return [name for name in ACTION_NAMES if self.get_action_class(name) is not None]

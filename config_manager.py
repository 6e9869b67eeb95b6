import os
import re
from configparser import ConfigParser, NoOptionError, NoSectionError
from typing import Dict, Any, Optional


APP_ROOT = os.path.dirname(os.path.abspath(__file__))


class ConfigManager:
    """
    Immutable configuration manager - reads config files once and provides
    session-specific configuration objects
    """

    def __init__(self, config_file: Optional[str] = None):
        self.base_config = self._load_configs(config_file)

    def _load_configs(self, config_file: Optional[str] = None) -> ConfigParser:
        """
        Load and merge configuration files
        :param config_file: optional path to a custom config file
        :return: ConfigParser object
        """
        default_config_file = os.path.join(APP_ROOT, 'config.ini')
        if not os.path.exists(default_config_file):
            raise FileNotFoundError(f'Could not find the default config file at {default_config_file}')

        config = ConfigParser()
        config.read(default_config_file)

        # The default config may point at a per-user override file
        if 'user_config' in config['DEFAULT']:
            user_config = self.resolve_file_path(config['DEFAULT']['user_config'])
            if user_config is not None:
                config.read(user_config)

        if config_file is not None:
            file = self.resolve_file_path(config_file)
            if file is None:
                raise FileNotFoundError(f'Could not find the custom config file at {config_file}')
            config.read(file)

        return config

    def create_session_config(self, overrides: Optional[Dict[str, Any]] = None) -> 'SessionConfig':
        """Create a mutable session-specific config"""
        return SessionConfig(self.base_config, dict(overrides or {}))

    @staticmethod
    def fix_values(value: Any) -> Any:
        """Fix some values due to how they are stored and retrieved with ConfigParser"""
        if not isinstance(value, str):
            return value
        value = value.strip()

        if value.startswith(('~', './', '/', '\\')):
            value = os.path.expanduser(value)

        # Handle dict-like strings
        if value.startswith('{') and value.endswith('}'):
            pairs = re.findall(r'(\w+)\s*:\s*(\[.*?]|[^,]+)(?=\s*(?:,|$))', value[1:-1])
            return {k.strip(): ConfigManager.fix_values(v.strip()) for k, v in pairs}

        # Handle list-like strings
        if value.startswith('[') and value.endswith(']'):
            return [ConfigManager.fix_values(item.strip()) for item in re.findall(r'<[^>]+>|[^,\s]+', value[1:-1])]

        if value.isdigit():
            return int(value)

        lower_value = value.lower()
        if lower_value in ('true', 'yes', 'on'):
            return True
        if lower_value in ('false', 'no', 'off'):
            return False

        # Remove quotes if present
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            return value[1:-1]

        return value

    @staticmethod
    def resolve_file_path(file_name: Optional[str], base_dir: Optional[str] = None) -> Optional[str]:
        """
        Works out the path to a file based on the filename and optional base directory
        :param file_name: name of the file to resolve the path to
        :param base_dir: optional base directory; relative values are taken from the app root
        :return: absolute path to the file or None
        """
        if not file_name:
            return None

        if base_dir is None:
            base_dir = os.getcwd()
        elif not os.path.isabs(base_dir):
            base_dir = os.path.abspath(os.path.join(APP_ROOT, base_dir))
        base_dir = os.path.expanduser(base_dir)
        if not os.path.isdir(base_dir):
            return None

        file_name = os.path.expanduser(file_name)
        if os.path.isabs(file_name):
            return file_name if os.path.isfile(file_name) else None

        full_path = os.path.join(base_dir, file_name)
        if os.path.isfile(full_path):
            return os.path.abspath(full_path)
        return None

    @staticmethod
    def resolve_directory_path(dir_name: str) -> Optional[str]:
        """
        Works out the path to a directory, relative names are taken from the app root
        :param dir_name: name of the directory to resolve the path to
        :return: absolute path to the directory or None
        """
        dir_name = os.path.expanduser(dir_name)
        if not os.path.isabs(dir_name):
            dir_name = os.path.join(APP_ROOT, dir_name)
        return dir_name if os.path.isdir(dir_name) else None


class SessionConfig:
    """
    Mutable configuration for a specific session.
    Runtime overrides win over the values read from the config files.
    """

    def __init__(self, base_config: ConfigParser, overrides: Optional[Dict[str, Any]] = None):
        self.base_config = base_config
        self.overrides = overrides or {}

    def set_option(self, key: str, value: Any) -> None:
        """Set a runtime override"""
        self.overrides[key] = value

    def get_option(self, section: str, option: str, fallback: Any = None) -> Any:
        """
        Get a setting from the configuration

        :param section: the section to get the setting from
        :param option: the option to get
        :param fallback: the value to return if the option is not found
        :return: the setting value
        """
        # Overrides are keyed by option name only
        if option in self.overrides:
            return self.overrides[option]
        try:
            return ConfigManager.fix_values(self.base_config.get(section, option))
        except (NoSectionError, NoOptionError):
            return fallback

    def get_section(self, section: str) -> Dict[str, Any]:
        """All options of a section, with overrides applied"""
        if section == 'DEFAULT':
            options = dict(self.base_config['DEFAULT'])
        elif self.base_config.has_section(section):
            options = {option: self.base_config.get(section, option) for option in self.base_config.options(section)}
        else:
            options = {}
        values = {key: ConfigManager.fix_values(value) for key, value in options.items()}
        for key in values:
            if key in self.overrides:
                values[key] = self.overrides[key]
        return values

    def effective_settings(self) -> Dict[str, Any]:
        """Snapshot of the settings sections, used for the startup log entry"""
        return {
            section: self.get_section(section)
            for section in ('WEB', 'TOOLKIT', 'ACTIONS')
        }

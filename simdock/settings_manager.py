"""
Settings Manager for simdock
Manages client settings stored in JSON file
"""

import json
import os
import platform
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    # Empty means auto-detect, see default_socket_path()
    'docker_socket_path': '',
    'log_level': 'INFO',
}

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def default_socket_path() -> str:
    """
    Detect the Docker socket path

    DOCKER_HOST wins when it points to a unix socket. The path is not
    checked for existence on Linux.

    Returns:
        Filesystem path of the Docker socket
    """
    docker_host = os.environ.get('DOCKER_HOST', '')
    if docker_host.startswith('unix://'):
        return docker_host[len('unix://'):]

    if platform.system() == 'Darwin':  # macOS
        socket_path = os.path.expanduser('~/.docker/run/docker.sock')
        if os.path.exists(socket_path):
            return socket_path

    return '/var/run/docker.sock'


def configure_logging(level_name: str = 'INFO'):
    """
    Configure root logging

    Args:
        level_name: Level name such as DEBUG or INFO

    Raises:
        ValueError: If level_name is not a logging level
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


class SettingsManager:
    """Manager for client settings"""

    # User settings file location
    @staticmethod
    def get_user_settings_path() -> str:
        """Get path to user settings file"""
        if os.name == 'nt':  # Windows
            base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
            data_dir = os.path.join(base_dir, 'simdock')
        else:  # macOS, Linux
            data_dir = os.path.join(
                os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share')),
                'simdock'
            )

        return os.path.join(data_dir, 'settings.json')

    def __init__(self, settings_file: Optional[str] = None):
        """
        Initialize settings manager

        Args:
            settings_file: Settings file path (default: per-user data dir)
        """
        self.settings_file = settings_file or self.get_user_settings_path()
        self.settings: Dict[str, Any] = {}

        self.load()

    def load(self):
        """Load settings from user file, user values override defaults"""
        self.settings = DEFAULT_SETTINGS.copy()

        if not os.path.exists(self.settings_file):
            logger.debug(f"No settings file at {self.settings_file}, using defaults")
            return

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                loaded_settings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading settings: {e}")
            return

        if not isinstance(loaded_settings, dict):
            logger.error(f"Ignoring settings file {self.settings_file}: not a JSON object")
            return

        self.settings.update(loaded_settings)
        logger.info(f"Settings loaded from {self.settings_file}")

    def save(self) -> bool:
        """Save settings to file"""
        try:
            os.makedirs(os.path.dirname(self.settings_file) or '.', exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error saving settings: {e}")
            return False

        logger.info(f"Settings saved to {self.settings_file}")
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any, save: bool = True):
        """
        Change one setting

        Args:
            key: Setting name, e.g. docker_socket_path
            value: New value, must be JSON serializable
            save: Write the settings file right away
        """
        self.update({key: value}, save=save)

    def update(self, settings_dict: Dict[str, Any], save: bool = True):
        """
        Change several settings at once

        Args:
            settings_dict: Setting names mapped to their new values
            save: Write the settings file right away
        """
        self.settings.update(settings_dict)
        if save:
            self.save()

    def reset_to_defaults(self, save: bool = True):
        """Drop every user value; save=False keeps the file untouched"""
        self.settings = DEFAULT_SETTINGS.copy()
        if save:
            self.save()

    def get_all(self) -> Dict[str, Any]:
        """Copy of all settings"""
        return dict(self.settings)

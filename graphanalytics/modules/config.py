# graphanalytics/modules/config.py

import configparser
import os

from graphanalytics.modules.graph import GraphAnalyticsError

CONFIG_ENV = "GRAPHANALYTICS_CONFIG"

DEFAULT_LOCATIONS = [
    "/etc/graphanalytics/graphanalytics.conf",
    os.path.expanduser("~/.config/graphanalytics/graphanalytics.conf"),
]

DEFAULTS = {
    "analytics": {
        "max_results": "10",
        "workers": "4",
    },
    "logging": {
        "level": "info",
        "log_file": "",
        "log_format": "text",
        "color_output": "true",
        "log_to_console": "true",
        "timestamp_utc": "false",
    },
}


class ConfigError(GraphAnalyticsError):
    pass


def default_locations():
    """Search path for the config file; the environment variable wins."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return [env_path] + DEFAULT_LOCATIONS
    return list(DEFAULT_LOCATIONS)


class AnalyticsConfig:
    def __init__(self, locations=None, path=None):
        """
        locations: candidate files, the first existing one is read
        path: explicit file; it must exist
        """
        self.locations = locations if locations is not None else default_locations()
        self.path = path
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        self.reload()

    def reload(self):
        """(Re)load built-in defaults, then the first available file on top."""
        self.config = configparser.ConfigParser()
        self.config.read_dict(DEFAULTS)
        self.loaded_from = None

        if self.path:
            if not os.path.isfile(self.path):
                raise ConfigError(f"Config file not found: {self.path}")
            self._read(self.path)
            return

        for path in self.locations:
            if os.path.isfile(path):
                self._read(path)
                return

    def _read(self, path):
        try:
            self.config.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        self.loaded_from = path

    def get(self, section, option, fallback=None):
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def getboolean(self, section, option, fallback=False):
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"[{section}] {option}: expected a boolean ({e})") from e

    def getint(self, section, option, fallback=0):
        try:
            return self.config.getint(section, option, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"[{section}] {option}: expected an integer ({e})") from e

    # shortcuts used by the CLI
    @property
    def max_results(self):
        return self.getint("analytics", "max_results", fallback=10)

    @property
    def workers(self):
        return self.getint("analytics", "workers", fallback=4)

    def __getitem__(self, section):
        if section in self.config:
            return dict(self.config[section])
        raise KeyError(f"Section '{section}' not found.")

    def __contains__(self, section):
        return section in self.config

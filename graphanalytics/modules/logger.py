import datetime
import json
import os
import sys
import threading

from rich.console import Console


class Logger:
    LEVELS = {
        "debug": 10,
        "info": 20,
        "warning": 30,
        "error": 40,
    }

    LOG_STYLES = {
        "DEBUG": "bright_black",
        "INFO": "blue",
        "WARNING": "yellow",
        "ERROR": "bold red",
    }

    def __init__(self, name="graphanalytics", level="info", log_file=None, log_format="text",
                 color_output=True, log_to_console=True, use_utc=False, console=None):
        self.name = name
        self.log_file = log_file or None
        self.log_format = (log_format or "text").lower()
        self.color_output = color_output
        self.log_to_console = log_to_console
        self.use_utc = use_utc
        self.set_level(level)

        if console is None:
            if color_output:
                console = Console(highlight=False)
            else:
                console = Console(color_system=None, highlight=False, markup=False)
        self.console = console

        if self.log_file:
            self._ensure_dir(self.log_file)

        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg, name="graphanalytics", **overrides):
        """Build a logger from the [logging] section; keyword overrides win."""
        settings = {
            "level": cfg.get("logging", "level", fallback="info"),
            "log_file": cfg.get("logging", "log_file", fallback=""),
            "log_format": cfg.get("logging", "log_format", fallback="text"),
            "color_output": cfg.getboolean("logging", "color_output", fallback=True),
            "log_to_console": cfg.getboolean("logging", "log_to_console", fallback=True),
            "use_utc": cfg.getboolean("logging", "timestamp_utc", fallback=False),
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(name=name, **settings)

    def set_level(self, level):
        level_str = (level or "info").lower()
        if level_str not in self.LEVELS:
            raise ValueError(f"Unknown log level '{level}'")
        self.min_level = self.LEVELS[level_str]

    def _ensure_dir(self, filepath):
        dirpath = os.path.dirname(filepath)
        if not dirpath:
            return
        try:
            os.makedirs(dirpath, exist_ok=True)
        except OSError as e:
            self._disable_file_sink(f"unable to create log directory {dirpath}: {e}")

    def _disable_file_sink(self, reason):
        print(f"Logger: {reason}; file logging disabled", file=sys.stderr)
        self.log_file = None

    def _get_timestamp(self):
        if self.use_utc:
            now = datetime.datetime.now(datetime.timezone.utc)
        else:
            now = datetime.datetime.now()
        return now.strftime("%Y-%m-%d %H:%M:%S")

    def _write_file(self, message):
        if not self.log_file:
            return
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            self._disable_file_sink(f"unable to write log file {self.log_file}: {e}")

    def _format_text(self, level, message):
        timestamp = self._get_timestamp()
        return f"[{timestamp}] [{self.name}] [{level}] {message}"

    def _format_json(self, level, message):
        return json.dumps({
            "timestamp": self._get_timestamp(),
            "logger": self.name,
            "level": level,
            "message": message
        })

    def _format_message(self, level, message):
        if self.log_format == "json":
            return self._format_json(level, message)
        return self._format_text(level, message)

    def _log_to_console(self, formatted, level):
        if not self.log_to_console:
            return
        style = None
        if self.color_output and self.log_format == "text":
            style = self.LOG_STYLES.get(level)
        self.console.print(formatted, style=style, markup=False, highlight=False, soft_wrap=True)

    def is_enabled_for(self, level):
        return self.LEVELS.get(level.lower(), 0) >= self.min_level

    def log(self, level, message):
        level = level.upper()
        if not self.is_enabled_for(level):
            return

        formatted = self._format_message(level, message)
        with self._lock:
            self._log_to_console(formatted, level)
            self._write_file(formatted)

    def debug(self, message):
        self.log("DEBUG", message)

    def info(self, message):
        self.log("INFO", message)

    def warning(self, message):
        self.log("WARNING", message)

    def error(self, message):
        self.log("ERROR", message)


# process-wide instance, set up once by the CLI
_log = None
_log_lock = threading.Lock()


def init_best_effort(**settings):
    """
    Create the process logger if it doesn't exist yet and return it.
    Sink failures only disable the file sink, they never raise.
    """
    global _log
    with _log_lock:
        if _log is None:
            cfg = settings.pop("config", None)
            if cfg is not None:
                _log = Logger.from_config(cfg, **settings)
            else:
                _log = Logger(**settings)
        return _log


def get_logger():
    """Return the process logger, creating a default one on first use."""
    if _log is None:
        return init_best_effort()
    return _log


def reset():
    """Forget the process logger (tests, repeated CLI runs in one process)."""
    global _log
    with _log_lock:
        _log = None

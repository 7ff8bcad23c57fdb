import logging
import os
import sys

from wpa_supplicant_dbus.constants import IS_DEV


def supports_color():
    """
    Returns True if the running system's terminal supports color, and False otherwise.
    """
    # Check for explicit override
    if os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes"):
        return True
    if os.environ.get("NO_COLOR", "").lower() in ("1", "true", "yes"):
        return False

    is_a_tty = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    # PyCharm and other IDEs often support color even when not a TTY
    ide_support = any(
        env in os.environ for env in ["PYCHARM_HOSTED", "VSCODE_PID", "TERM_PROGRAM"]
    )

    return sys.platform != "win32" and (is_a_tty or ide_support)


USE_COLOR = supports_color()


# https://talyian.github.io/ansicolors/
class CustomFormatter(logging.Formatter):
    """Colored logging formatter, one color per level"""

    red = "\x1b[31;20m"
    white = "\x1b[38;5;255m"
    dark_grey = "\x1b[38;5;244m"
    orange = "\x1b[38;5;208m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    fmt = (
        "%(asctime)s | %(levelname)8s | %(name)s: %(message)s (%(filename)s:%(lineno)d)"
    )

    USE_COLOR = USE_COLOR

    FORMATS = {
        logging.DEBUG: dark_grey + fmt + reset,
        logging.INFO: white + fmt + reset,
        logging.WARNING: orange + fmt + reset,
        logging.ERROR: red + fmt + reset,
        logging.CRITICAL: bold_red + fmt + reset,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno) if self.USE_COLOR else self.fmt
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def create_console_handler(level=logging.DEBUG):
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(CustomFormatter())
    return handler


def _env_level(name: str, default: int) -> int:
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARN,
        "warning": logging.WARN,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    value = os.environ.get(name)
    if value is None:
        return default
    return levels.get(value.strip().lower(), default)


def setup_logging(level=logging.INFO, handlers=None):
    """Setup logging with custom formatter"""

    if IS_DEV:
        # Default to DEBUG for dev mode.
        level = logging.DEBUG

    # Allow env override for global app log level
    level = _env_level("WPA_DBUS_LOG_LEVEL", level)

    if handlers is None:
        handlers = [create_console_handler(level)]

    logging.basicConfig(encoding="utf-8", level=level, handlers=handlers, force=True)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # The signal bridge is chatty at DEBUG; only let it through when asked to.
    bridge_level = _env_level("WPA_DBUS_BRIDGE_LOG_LEVEL", level)
    logging.getLogger(
        "wpa_supplicant_dbus.lib.wifi_control.wpa_supplicant_dbus"
    ).setLevel(bridge_level)
    logging.getLogger("wpa_supplicant_dbus.lib.eap.registry").setLevel(
        logging.DEBUG if IS_DEV else max(level, logging.INFO)
    )

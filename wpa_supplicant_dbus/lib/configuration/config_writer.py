import logging
import os
from os import PathLike
from typing import Union

from wpa_supplicant_dbus.lib.wpa_config.domain import Driver
from wpa_supplicant_dbus.models.errors import ConfigWriteError

logger = logging.getLogger(__name__)

# The rendered config may hold passwords and key passphrases
CONFIG_FILE_MODE = 0o600


def config_file_name(interface_name: str, driver: Driver) -> str:
    """Matches the names the wpa_supplicant systemd units look for."""
    if driver == Driver.WIRED:
        return f"wpa_supplicant-wired-{interface_name}.conf"
    return f"wpa_supplicant-{interface_name}.conf"


def write_config(path: Union[str, PathLike], text: str) -> str:
    """
    Atomically writes rendered config text, readable by the owner only.
    @param path: Destination file
    @param text: The rendered configuration
    @return: The path written, as a string
    """
    path = os.fspath(path)
    tmp_path = f"{path}.tmp"
    logger.debug(f"Writing wpa_supplicant config to {path}")
    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, CONFIG_FILE_MODE)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Failed to write config to {path}: {e}")
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as cleanup_error:
            logger.warning(f"Unable to remove {tmp_path}: {cleanup_error}")
        raise ConfigWriteError(path, str(e)) from e
    return path


def write_interface_config(
    storage_dir: Union[str, PathLike], interface_name: str, driver: Driver, text: str
) -> str:
    return write_config(
        os.path.join(os.fspath(storage_dir), config_file_name(interface_name, driver)),
        text,
    )

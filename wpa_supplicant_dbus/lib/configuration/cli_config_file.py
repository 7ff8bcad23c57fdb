import os
from typing import Optional

from pydantic import ValidationError

from wpa_supplicant_dbus.lib.configuration.config_file import ConfigFile
from wpa_supplicant_dbus.lib.configuration.schemas import CliConfig

CLI_CONFIG_DIR = "/etc/wpa-supplicant-dbus"


class CliConfigFile(ConfigFile):
    def __init__(self, config_file: Optional[str] = None):
        super().__init__(
            config_file or os.path.join(CLI_CONFIG_DIR, "config.toml"),
            defaults=CliConfig().model_dump(mode="json"),
        )

    def load_or_create_defaults(self, allow_empty: bool = False):  # type: ignore[override]
        first_run = not os.path.exists(self.config_file)
        super().load_or_create_defaults(allow_empty=allow_empty)
        # Validate and normalize with schema; fall back to defaults on error
        try:
            self.data = CliConfig(**self.data).model_dump(mode="json")
        except ValidationError as e:
            self.logger.warning(f"Invalid config in {self.config_file}, using defaults: {e}")
            self.create_defaults()

        if first_run:
            self.save_defaults()

    def save_defaults(self):
        """Writes the current settings out so there is a file to edit next time."""
        try:
            os.makedirs(os.path.dirname(self.config_file) or ".", exist_ok=True)
            self.save()
        except OSError as e:
            self.logger.warning(f"Unable to write default config to {self.config_file}: {e}")
            return
        self.logger.info(f"Wrote default config to {self.config_file}")

    @property
    def config(self) -> CliConfig:
        return CliConfig(**self.data)

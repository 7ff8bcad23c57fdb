from .cli_config_file import CliConfigFile
from .config_file import ConfigFile
from .config_writer import config_file_name, write_config, write_interface_config
from .schemas import CliConfig, CliGeneral, CliTLS

__all__ = [
    "CliConfig",
    "CliConfigFile",
    "CliGeneral",
    "CliTLS",
    "ConfigFile",
    "config_file_name",
    "write_config",
    "write_interface_config",
]

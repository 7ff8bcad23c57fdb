import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from wpa_supplicant_dbus.__version__ import __description__, __version__
from wpa_supplicant_dbus.constants import CONFIG_FILE
from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile
from wpa_supplicant_dbus.lib.eap.tls import TlsBuilder
from wpa_supplicant_dbus.lib.logging_utils import setup_logging
from wpa_supplicant_dbus.lib.wifi_control.wpa_supplicant_dbus import WpaSupplicantDbus
from wpa_supplicant_dbus.lib.wpa_config.domain import (
    ApScan,
    Driver,
    EapolFlag,
    KeyManagement,
)
from wpa_supplicant_dbus.lib.wpa_config.interface import WpaInterface, WpaInterfaceBuilder
from wpa_supplicant_dbus.lib.wpa_config.network import NetworkBuilder
from wpa_supplicant_dbus.models.errors import WpaSupplicantDbusError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    # Parse just the config argument first to know which config file to load
    parser_config = argparse.ArgumentParser(add_help=False)
    parser_config.add_argument("--config", default=CONFIG_FILE, help="Path to configuration file")
    config_args, _ = parser_config.parse_known_args(argv)

    config_file = CliConfigFile(config_args.config)
    config_file.load_or_create_defaults()
    file_config = config_file.config

    parser = argparse.ArgumentParser(
        prog="wpa-supplicant-dbus-tls", description=__description__
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=config_args.config, help="Path to configuration file")
    parser.add_argument("--identity", default=file_config.TLS.identity, help="EAP identity")
    parser.add_argument("--ca-cert-path", default=file_config.TLS.ca_cert, help="CA certificate file")
    parser.add_argument(
        "--client-cert-path", default=file_config.TLS.client_cert, help="Client certificate file"
    )
    parser.add_argument(
        "--private-key-path", default=file_config.TLS.private_key, help="Client private key file"
    )
    parser.add_argument(
        "--private-key-password",
        default=file_config.TLS.private_key_passwd,
        help="Passphrase for the private key",
    )
    parser.add_argument(
        "--interface-name", default=file_config.General.interface_name, help="Interface to authenticate"
    )
    parser.add_argument(
        "--bridge-name", default=file_config.General.bridge_name, help="Bridge the interface belongs to"
    )
    parser.add_argument(
        "--wpa-ctrl-interface",
        default=file_config.General.ctrl_interface,
        help="wpa_supplicant control interface directory",
    )
    parser.add_argument(
        "--storage-path",
        default=file_config.General.config_storage_dir,
        help="Directory the generated config file is written to",
    )
    parser.add_argument(
        "--driver",
        default=file_config.General.driver.value,
        choices=[driver.value for driver in Driver],
        help="wpa_supplicant driver backend",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> WpaInterface:
    """802.1X on a wired port: one TLS network, no scanning."""
    tls = (
        TlsBuilder()
        .with_identity(args.identity)
        .with_ca_cert_path(args.ca_cert_path)
        .with_client_cert_path(args.client_cert_path)
        .with_private_key_path(args.private_key_path)
        .with_private_key_password(args.private_key_password)
        .build()
    )
    network = (
        NetworkBuilder()
        .with_key_management(KeyManagement.IEEE8021X)
        .with_eapol_flag(EapolFlag.OFF)
        .with_eap_methods(tls)
        .build()
    )
    return (
        WpaInterfaceBuilder()
        .with_ctrl_interface(args.wpa_ctrl_interface)
        .with_ap_scan(ApScan.OFF)
        .with_networks(network)
        .build()
    )


async def run(args: argparse.Namespace, config: WpaInterface):
    async with await WpaSupplicantDbus.connect() as wpa:
        failures = await wpa.read_all_properties()
        if not failures and "TLS" not in wpa.properties.supported_eap_methods:
            logger.warning("wpa_supplicant does not advertise EAP-TLS support")

        object_path = await wpa.create_interface(
            args.interface_name,
            args.bridge_name,
            args.driver,
            config,
            args.storage_path,
        )
        print(f"Interface {args.interface_name} created at {object_path}")
        try:
            async for event in wpa.state_changes(object_path):
                print(f"{event.interface}: {event.state}")
        finally:
            logger.info(f"Removing interface {args.interface_name}")
            await wpa.expect_disconnect(object_path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        config = build_config(args)
    except WpaSupplicantDbusError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    logger.debug(f"Generated wpa_supplicant config:\n{config.render()}")

    try:
        asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except WpaSupplicantDbusError as e:
        logger.error(f"wpa_supplicant request failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

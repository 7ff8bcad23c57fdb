import toml

from wpa_supplicant_dbus.lib.configuration.config_file import ConfigFile
from wpa_supplicant_dbus.lib.wpa_config.domain import Driver


def test_atomic_save_and_load(tmp_path):
    cfg_path = tmp_path / "testconfig.toml"
    cf = ConfigFile(str(cfg_path), defaults={"Section": {"key": "value"}})
    cf.create_defaults()
    cf.data["Section"]["key"] = "newval"
    cf.save()

    # Ensure file exists, no leftover temp file, and content matches
    assert cfg_path.exists()
    assert not (tmp_path / "testconfig.toml.tmp").exists()
    loaded = toml.load(cfg_path)
    assert loaded["Section"]["key"] == "newval"


def test_defaults_are_not_shared(tmp_path):
    defaults = {"Section": {"key": "value"}}
    cf = ConfigFile(str(tmp_path / "config.toml"), defaults=defaults)
    cf.create_defaults()
    cf.data["Section"]["key"] = "changed"

    assert defaults["Section"]["key"] == "value"


def test_missing_file_uses_defaults(tmp_path):
    cf = ConfigFile(str(tmp_path / "absent.toml"), defaults={"Section": {"key": "value"}})
    cf.load_or_create_defaults()

    assert cf.data == {"Section": {"key": "value"}}


def test_cli_config_validation_fallback(tmp_path, monkeypatch):
    # Redirect cli config dir to a temp dir
    from wpa_supplicant_dbus.lib.configuration import cli_config_file as ccf_mod

    temp_dir = tmp_path / "cli"
    temp_dir.mkdir()
    monkeypatch.setattr(ccf_mod, "CLI_CONFIG_DIR", str(temp_dir))

    # Write invalid toml (unknown driver, table where string expected)
    cfg_file = temp_dir / "config.toml"
    cfg_file.write_text(
        """
[General]
interface_name = "eth1"
driver = "madwifi"

[TLS]
identity = { name = "nope" }
"""
    )

    ccf = ccf_mod.CliConfigFile()
    ccf.load_or_create_defaults(allow_empty=False)

    # Should fall back to defaults
    assert ccf.data["General"]["interface_name"] == "eth0"
    assert ccf.data["General"]["driver"] == "wired"
    assert ccf.data["TLS"]["identity"] == ""


def test_cli_config_first_run_writes_defaults(tmp_path):
    from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile

    cfg_file = tmp_path / "cli" / "config.toml"

    ccf = CliConfigFile(str(cfg_file))
    ccf.load_or_create_defaults()

    assert cfg_file.exists()
    written = toml.load(cfg_file)
    assert written["General"]["interface_name"] == "eth0"
    assert written["General"]["driver"] == "wired"
    assert written["TLS"]["identity"] == ""

    # Edits made afterwards are picked up and not overwritten
    written["General"]["interface_name"] = "eth3"
    cfg_file.write_text(toml.dumps(written))
    ccf = CliConfigFile(str(cfg_file))
    ccf.load_or_create_defaults()

    assert ccf.config.General.interface_name == "eth3"
    assert toml.load(cfg_file)["General"]["interface_name"] == "eth3"


def test_cli_config_unwritable_location_still_loads_defaults(tmp_path, mocker):
    from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile

    mocker.patch.object(CliConfigFile, "save", side_effect=PermissionError("read-only"))

    ccf = CliConfigFile(str(tmp_path / "config.toml"))
    ccf.load_or_create_defaults()

    assert ccf.config.General.interface_name == "eth0"
    assert not (tmp_path / "config.toml").exists()


def test_cli_config_invalid_file_is_not_overwritten(tmp_path):
    from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile

    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text('[General]\ndriver = "madwifi"\n')

    ccf = CliConfigFile(str(cfg_file))
    ccf.load_or_create_defaults()

    assert ccf.config.General.driver is Driver.WIRED
    assert cfg_file.read_text() == '[General]\ndriver = "madwifi"\n'


def test_cli_config_undecodable_file_falls_back(tmp_path):
    from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile

    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text("[General\ninterface_name = ")

    ccf = CliConfigFile(str(cfg_file))
    ccf.load_or_create_defaults()

    assert ccf.config.General.interface_name == "eth0"


def test_cli_config_partial_file_is_completed(tmp_path):
    from wpa_supplicant_dbus.lib.configuration.cli_config_file import CliConfigFile

    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(
        """
[General]
interface_name = "eth2"
driver = "macsec_linux"

[TLS]
identity = "host/eth2.example.com"
"""
    )

    ccf = CliConfigFile(str(cfg_file))
    ccf.load_or_create_defaults()

    assert ccf.config.General.interface_name == "eth2"
    assert ccf.config.General.driver is Driver.MACSEC_LINUX
    assert ccf.config.General.ctrl_interface == "/run/wpa_supplicant"
    assert ccf.config.TLS.identity == "host/eth2.example.com"
    assert ccf.config.TLS.client_cert == ""

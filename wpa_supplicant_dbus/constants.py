import os

RUNTIME_ENV = os.environ.get("RUNTIME_ENV", "production")
IS_DEV = RUNTIME_ENV == "development"

CONFIG_DIR = "/etc/wpa-supplicant-dbus"
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.toml")

# wpa_supplicant D-Bus API
WPA_SERVICE = "fi.w1.wpa_supplicant1"
WPA_OBJECT_PATH = "/fi/w1/wpa_supplicant1"
WPA_INTERFACE_IFACE = "fi.w1.wpa_supplicant1.Interface"
WPA_ERROR_INTERFACE_EXISTS = "fi.w1.wpa_supplicant1.InterfaceExists"
WPA_ERROR_INTERFACE_UNKNOWN = "fi.w1.wpa_supplicant1.InterfaceUnknown"

DEFAULT_CONFIG_STORAGE_DIR = "/etc/wpa_supplicant"

__title__ = "wpa_supplicant_dbus"
__description__ = (
    "Renders validated wpa_supplicant configurations and manages the resulting "
    "interfaces over the wpa_supplicant D-Bus API."
)
__version__ = "0.3.0"
__status__ = "alpha"
__license__ = "BSD-3-Clause"
__license_url__ = "https://opensource.org/licenses/BSD-3-Clause"

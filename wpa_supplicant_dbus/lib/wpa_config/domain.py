from enum import Enum, IntEnum


class ScanSSID(IntEnum):
    """Scan technique: broadcast (0) or directed (1) Probe Requests"""

    BROADCAST = 0
    DIRECTED = 1


class Mode(IntEnum):
    INFRASTRUCTURE = 0
    IBSS = 1


class Proto(str, Enum):
    WPA = "WPA"
    RSN = "RSN"
    WPA2 = "RSN"


class KeyManagement(str, Enum):
    WPA_EAP = "WPA-EAP"
    WPA_PSK = "WPA-PSK"
    IEEE8021X = "IEEE8021X"
    NONE = "NONE"


class AuthAlg(str, Enum):
    OPEN = "OPEN"
    SHARED = "SHARED"
    LEAP = "LEAP"


class PairwiseCipher(str, Enum):
    CCMP = "CCMP"
    TKIP = "TKIP"
    NONE = "NONE"


class GroupCipher(str, Enum):
    CCMP = "CCMP"
    TKIP = "TKIP"
    WEP104 = "WEP104"
    WEP40 = "WEP40"


class EapolFlag(IntEnum):
    """Dynamic WEP key usage for non-WPA mode (bit field)"""

    OFF = 0
    DYNAMIC_UNICAST = 1
    DYNAMIC_BROADCAST = 2
    DYNAMIC_BOTH = 3


class EapolVersion(IntEnum):
    V1 = 1
    V2 = 2


class ApScan(IntEnum):
    OFF = 0
    ON = 1
    ON_V2 = 2


class FastReauth(IntEnum):
    OFF = 0
    ON = 1


class Driver(str, Enum):
    """
    nl80211 = Linux nl80211/cfg80211
    wext = Linux wireless extensions (generic)
    wired = Wired Ethernet driver
    macsec_linux = MACsec Ethernet driver for Linux
    none = no driver (RADIUS server/WPS ER)
    """

    NL80211 = "nl80211"
    WEXT = "wext"
    WIRED = "wired"
    MACSEC_LINUX = "macsec_linux"
    NONE = "none"


DEFAULT_CTRL_INTERFACE = "/var/run/wpa_supplicant"
DEFAULT_CTRL_INTERFACE_GROUP = ""
DEFAULT_EAPOL_VERSION = EapolVersion.V1
DEFAULT_AP_SCAN = ApScan.ON
DEFAULT_FAST_REAUTH = FastReauth.ON
DEFAULT_PRIORITY = 0

"""
Test package for wpa-supplicant-dbus

The D-Bus tests run against an in-memory stand-in for wpa_supplicant
(see conftest.py), so no system bus or daemon is needed.
"""

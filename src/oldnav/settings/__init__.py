"""User settings management for OldNav.

This package provides persistent settings, such as where the navigation
data lives and how the spatial index is built.
"""

from oldnav.settings.navdata_settings import (
    NavdataSettings,
    get_navdata_settings,
    reset_navdata_settings,
)

__all__ = [
    "NavdataSettings",
    "get_navdata_settings",
    "reset_navdata_settings",
]

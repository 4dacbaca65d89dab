"""Version information for OldNav.

This module provides version information read from the VERSION file
in the project root, with fallback for packaged distributions.
"""

from pathlib import Path

# Version info
__version__ = "0.1.0"  # Fallback version
__license__ = "MIT"


def get_version() -> str:
    """Get the current version string.

    Reads from VERSION file in project root or falls back to __version__.

    Returns:
        Version string (e.g., "0.1.0").
    """
    version_path = Path(__file__).parent.parent.parent / "VERSION"  # src/oldnav -> root

    if version_path.exists():
        try:
            return version_path.read_text(encoding="utf-8").strip() or __version__
        except OSError:
            return __version__

    return __version__

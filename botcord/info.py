"""Library version and build information."""

_VERSION = "1.0.0"


def version() -> str:
    """Return the library version as "major.minor.patch"."""
    return _VERSION


def build_info() -> str:
    """Return a one-line description of this build."""
    return f"botcord v{_VERSION} - Modern Discord API wrapper"
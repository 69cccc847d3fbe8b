"""Version management for the teestat package."""

# Package version
PACKAGE_VERSION = "0.1.0"


def get_package_version() -> str:
    """Get the current package version."""
    return PACKAGE_VERSION

"""Release configuration: build version and install prefix."""

from .install_prefix import InstallPrefixError, resolve_install_prefix
from .version import BuildVersion, VersionError, read_gauge_version

__all__ = [
    "BuildVersion",
    "VersionError",
    "read_gauge_version",
    "InstallPrefixError",
    "resolve_install_prefix",
]

"""Install prefix resolution for `--install`."""

import os
from pathlib import Path
from typing import Mapping, Optional

from ..build.platform_utils import PlatformDetector

DEFAULT_UNIX_PREFIX = Path("/usr/local")


class InstallPrefixError(Exception):
    """Raised when no install prefix can be determined."""

    pass


def resolve_install_prefix(
    prefix: Optional[str] = None,
    host_os: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Determine where gauge gets installed.

    An explicit prefix always wins. Otherwise Windows hosts install into
    %PROGRAMFILES%\\gauge and everything else into /usr/local.

    Args:
        prefix: Value of --prefix
        host_os: Host OS in Go naming (defaults to the detected host)
        environ: Environment to read PROGRAMFILES from (defaults to os.environ)

    Raises:
        InstallPrefixError: On Windows when PROGRAMFILES is not set
    """
    if prefix:
        return Path(prefix)

    host_os = host_os or PlatformDetector.host_os()
    if host_os == "windows":
        environ = os.environ if environ is None else environ
        program_files = environ.get("PROGRAMFILES", "")
        if not program_files:
            raise InstallPrefixError("Failed to find programfiles")
        return Path(program_files) / "gauge"
    return DEFAULT_UNIX_PREFIX

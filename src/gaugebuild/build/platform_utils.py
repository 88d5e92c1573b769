"""Host Platform Detection Utilities.

This module detects the operating system and architecture of the machine the
orchestrator runs on, normalized to the names the Go toolchain uses for
GOOS/GOARCH.

Known Hosts:
    - Windows: windows/386, windows/amd64
    - Linux: linux/386, linux/amd64, linux/arm, linux/arm64
    - macOS: darwin/amd64, darwin/arm64

Other hosts resolve to their lowercased platform.system() name. Whether gauge
can be packaged for a resolved OS is decided by BuildEnvironment.target_os().
"""

import platform
import sys


class PlatformError(Exception):
    """Raised when gauge has no support for a resolved platform."""

    pass


class PlatformDetector:
    """Detects the host platform in Go's naming scheme."""

    @staticmethod
    def host_os() -> str:
        """Detect the host operating system.

        Returns:
            'windows', 'linux', 'darwin', or the lowercased system name
            of any other host (e.g. 'freebsd')
        """
        return platform.system().lower()

    @staticmethod
    def host_arch() -> str:
        """Detect the host architecture.

        Returns:
            '386', 'amd64', 'arm64' or 'arm'
        """
        machine = platform.machine().lower()

        if machine in ("x86_64", "amd64"):
            return "amd64"
        elif machine in ("i386", "i686", "x86"):
            return "386"
        elif machine in ("aarch64", "arm64"):
            return "arm64"
        elif machine.startswith("arm"):
            return "arm"
        else:
            # Default to amd64 if unknown
            return "amd64" if sys.maxsize > 2**32 else "386"


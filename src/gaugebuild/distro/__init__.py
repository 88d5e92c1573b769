"""
Distributable creation for gauge.

One packaging strategy exists per supported OS; create_packager() selects it
by exhaustive dispatch over TargetOS.
"""

from typing import assert_never

from ..build.environment import BuildEnvironment
from ..build.targets import TargetOS
from .archiver import ArchiveError, ZipArchiver
from .darwin_packager import DarwinPackager
from .linux_packager import LinuxPackager
from .packager import IPackager, PackageResult, PackagingContext, PackagingError
from .signer import ExecutableSigner, SigningError
from .staging import (
    InstallFileSet,
    StagingDirectory,
    StagingError,
    build_install_file_set,
    install_files,
)
from .windows_packager import WindowsPackager


def create_packager(target_os: TargetOS, context: PackagingContext) -> IPackager:
    """Select the packaging strategy for an OS."""
    if target_os is TargetOS.WINDOWS:
        return WindowsPackager(context)
    elif target_os is TargetOS.DARWIN:
        return DarwinPackager(context)
    elif target_os is TargetOS.LINUX:
        return LinuxPackager(context)
    else:
        assert_never(target_os)


def create_distro(env: BuildEnvironment, context: PackagingContext) -> PackageResult:
    """Create the distributable for the environment's resolved OS.

    Raises:
        PlatformError: If the resolved OS has no packaging strategy
    """
    return create_packager(env.target_os(), context).package(env)


__all__ = [
    "ArchiveError",
    "ZipArchiver",
    "DarwinPackager",
    "LinuxPackager",
    "WindowsPackager",
    "IPackager",
    "PackageResult",
    "PackagingContext",
    "PackagingError",
    "ExecutableSigner",
    "SigningError",
    "InstallFileSet",
    "StagingDirectory",
    "StagingError",
    "build_install_file_set",
    "install_files",
    "create_packager",
    "create_distro",
]

"""Abstract base class for distributable packagers.

This module defines the interface shared by the per-OS packaging strategies
and the context they run with.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..build.artifacts import ArtifactLayout
from ..build.environment import BuildEnvironment
from ..build.process_runner import ProcessRunner
from ..build.targets import TargetOS
from ..config.version import BuildVersion
from .archiver import ZipArchiver
from .signer import ExecutableSigner


@dataclass
class PackageResult:
    """Result of one packaging run."""

    target_os: TargetOS
    artifacts: List[Path] = field(default_factory=list)
    skipped: bool = False
    signed: bool = False


class PackagingError(Exception):
    """Base exception for packaging errors."""

    pass


@dataclass
class PackagingContext:
    """Everything a packager needs for one run.

    Attributes:
        layout: Artifact layout of the gauge checkout
        version: Version stamped into artifact names and installers
        runner: Process runner for the native packaging tools
        archiver: Zip archiver
        signer: Executable signer for the Windows installer
        skip_windows: Skip the Windows installer entirely
        cert_file: Signing certificate for the Windows installer
        cert_password: Password of the signing certificate
    """

    layout: ArtifactLayout
    version: BuildVersion
    runner: ProcessRunner
    archiver: ZipArchiver
    signer: ExecutableSigner
    skip_windows: bool = False
    cert_file: str = ""
    cert_password: str = ""

    @classmethod
    def create(
        cls,
        layout: ArtifactLayout,
        version: BuildVersion,
        runner: Optional[ProcessRunner] = None,
        **options,
    ) -> "PackagingContext":
        """Build a context whose archiver and signer share one runner."""
        runner = runner or ProcessRunner()
        return cls(
            layout=layout,
            version=version,
            runner=runner,
            archiver=ZipArchiver(layout.project_dir, runner=runner),
            signer=ExecutableSigner(runner=runner),
            **options,
        )


class IPackager(ABC):
    """Interface for per-OS packagers.

    Packagers turn a target's compiled binaries into a distributable:
    1. Stage the install layout into a transient directory
    2. Zip the staged directory
    3. Run the OS-native packaging tool, if any
    4. Remove the staging directory
    """

    def __init__(self, context: PackagingContext):
        self.context = context

    @abstractmethod
    def package(self, env: BuildEnvironment) -> PackageResult:
        """Create the distributable for a target.

        Args:
            env: Target environment

        Returns:
            PackageResult listing the produced artifacts

        Raises:
            PackagingError: If packaging fails
        """
        pass

"""Artifact layout and naming.

Where binaries land (bin/<os>_<arch>/), where packages are staged (deploy/)
and how release artifacts are named (<tool>-<version>-<os>.<archSuffix>).
"""

from pathlib import Path
from typing import Optional

from ..config.version import BuildVersion
from .environment import BuildEnvironment

GAUGE = "gauge"
GAUGE_SCREENSHOT = "gauge_screenshot"
BIN = "bin"
DEPLOY = "deploy"

ARCH_SUFFIX_X86 = "x86"
ARCH_SUFFIX_X86_64 = "x86_64"


def package_name(tool: str, version: str, os: str, arch_suffix: str) -> str:
    """Standard artifact base name, e.g. 'gauge-1.2.3-linux.x86_64'."""
    return f"{tool}-{version}-{os}.{arch_suffix}"


def arch_suffix(env: BuildEnvironment, bin_dir_override: Optional[str] = None) -> str:
    """Architecture suffix used in artifact names.

    A --bin-dir override ending in 386/amd64 takes precedence over the resolved
    architecture, even when the two disagree.
    """
    if bin_dir_override:
        if bin_dir_override.endswith("386"):
            return ARCH_SUFFIX_X86
        if bin_dir_override.endswith("amd64"):
            return ARCH_SUFFIX_X86_64

    if env.resolved_arch() == "386":
        return ARCH_SUFFIX_X86
    return ARCH_SUFFIX_X86_64


def executable_name(name: str, goos: str) -> str:
    """Executable file name for the target OS."""
    if goos == "windows":
        return name + ".exe"
    return name


class ArtifactLayout:
    """Resolves build and deploy paths under a gauge checkout."""

    def __init__(self, project_dir: Path, bin_dir_override: Optional[str] = None):
        """Initialize artifact layout.

        Args:
            project_dir: Root of the gauge checkout (stored as an absolute path)
            bin_dir_override: Value of --bin-dir, used instead of bin/<os>_<arch>
        """
        self.project_dir = project_dir.resolve()
        self.bin_dir_override = bin_dir_override or None

    @property
    def deploy_dir(self) -> Path:
        return self.project_dir / DEPLOY

    def bin_dir(self, env: BuildEnvironment) -> Path:
        """Directory holding the binaries for a target."""
        if self.bin_dir_override:
            return self.project_dir / self.bin_dir_override
        return self.project_dir / BIN / f"{env.resolved_os()}_{env.resolved_arch()}"

    def executable_path(self, name: str, env: BuildEnvironment) -> Path:
        return self.bin_dir(env) / executable_name(name, env.resolved_os())

    def package_name(self, version: BuildVersion, env: BuildEnvironment) -> str:
        """Artifact base name for a target, e.g. 'gauge-1.2.3-linux.x86_64'."""
        return package_name(
            GAUGE,
            str(version),
            env.resolved_os(),
            arch_suffix(env, self.bin_dir_override),
        )

"""
Release orchestration for gauge.

This module coordinates the release pipeline of the gauge CLI:
- Target matrix selection (all platforms, Linux only, or the current environment)
- Compilation with the Go toolchain
- Staging and packaging of per-OS distributables
- Local installation into a prefix
- Running gauge's own test suite

Targets are processed strictly one after another, and the first failure
aborts the run.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config.install_prefix import resolve_install_prefix
from ..config.version import BuildVersion
from ..distro import PackagingContext, create_distro
from ..distro.staging import StagingDirectory, build_install_file_set, install_files
from .artifacts import GAUGE, ArtifactLayout
from .build_utils import mirror_dir
from .compiler import GoCompiler
from .environment import BuildEnvironment
from .process_runner import ProcessRunner
from .targets import PlatformTarget, filtered_targets


@dataclass
class ReleaseResult:
    """Result of a complete orchestrator operation."""

    compiled: List[str] = field(default_factory=list)
    artifacts: List[Path] = field(default_factory=list)
    install_dir: Optional[Path] = None
    build_time: float = 0.0


class OrchestratorError(Exception):
    """Exception raised for release orchestration errors."""

    pass


class ReleaseOrchestrator:
    """
    Orchestrates compiling, packaging and installing gauge.

    Example usage:
        orchestrator = ReleaseOrchestrator(
            project_dir=Path("."),
            version=BuildVersion.create("1.2.3", nightly=True),
        )
        result = orchestrator.create_distributables(all_platforms=True)
        for artifact in result.artifacts:
            print(artifact)
    """

    def __init__(
        self,
        project_dir: Path,
        version: BuildVersion,
        bin_dir: Optional[str] = None,
        skip_windows: bool = False,
        cert_file: str = "",
        cert_password: str = "",
        runner: Optional[ProcessRunner] = None,
    ):
        """
        Initialize release orchestrator.

        Args:
            project_dir: Root of the gauge checkout
            version: Build version for binaries and artifact names
            bin_dir: Prebuilt binary directory (--bin-dir); disables compiling
                before packaging
            skip_windows: Skip the Windows installer
            cert_file: Certificate for signing the Windows installer
            cert_password: Password for the certificate
            runner: Process runner shared by every step
        """
        self.layout = ArtifactLayout(project_dir, bin_dir_override=bin_dir)
        self.project_dir = self.layout.project_dir
        self.version = version
        self.runner = runner or ProcessRunner()
        self.compiler = GoCompiler(self.layout, version, runner=self.runner)
        self.packaging = PackagingContext.create(
            self.layout,
            version,
            runner=self.runner,
            skip_windows=skip_windows,
            cert_file=cert_file,
            cert_password=cert_password,
        )

    def targets(self, restrict_to_linux: bool = False) -> List[BuildEnvironment]:
        """Environments for the (optionally Linux-only) target matrix."""
        selected: List[PlatformTarget] = list(filtered_targets(restrict_to_linux))
        return [BuildEnvironment.from_target(target) for target in selected]

    def compile(self, env: Optional[BuildEnvironment] = None) -> ReleaseResult:
        """Compile gauge for one environment (default: GOOS/GOARCH or the host)."""
        start_time = time.time()
        env = env or BuildEnvironment.from_environ()
        self.compiler.compile(env)
        return ReleaseResult(
            compiled=[f"{env.resolved_os()}_{env.resolved_arch()}"],
            build_time=time.time() - start_time,
        )

    def cross_compile(self, restrict_to_linux: bool = False) -> ReleaseResult:
        """Compile gauge for every target of the matrix."""
        start_time = time.time()
        result = ReleaseResult()
        for env in self.targets(restrict_to_linux):
            logging.info(f"Compiling for platform => {env}")
            self.compiler.compile(env)
            result.compiled.append(f"{env.resolved_os()}_{env.resolved_arch()}")
        result.build_time = time.time() - start_time
        return result

    def create_distributables(
        self,
        all_platforms: bool = False,
        restrict_to_linux: bool = False,
    ) -> ReleaseResult:
        """Compile and package gauge.

        With all_platforms every matrix target is packaged, otherwise only the
        current environment. When a --bin-dir was given the binaries there
        are packaged as-is and nothing is compiled.
        """
        start_time = time.time()
        if all_platforms:
            envs = self.targets(restrict_to_linux)
        else:
            envs = [BuildEnvironment.from_environ()]

        result = ReleaseResult()
        for env in envs:
            logging.info(f"Creating distro for platform => {env}")
            if self.layout.bin_dir_override is None:
                self.compiler.compile(env)
                result.compiled.append(f"{env.resolved_os()}_{env.resolved_arch()}")
            package = create_distro(env, self.packaging)
            result.artifacts.extend(package.artifacts)

        result.build_time = time.time() - start_time
        return result

    def install(self, prefix: Optional[str] = None) -> ReleaseResult:
        """Install the current environment's binaries and support files into a prefix.

        Raises:
            InstallPrefixError: If no prefix can be determined
            OrchestratorError: If the staged files cannot be copied into the prefix
        """
        start_time = time.time()
        install_dir = resolve_install_prefix(prefix)
        env = BuildEnvironment.from_environ()
        staging_dir = self.layout.deploy_dir / GAUGE

        with StagingDirectory(staging_dir):
            install_files(build_install_file_set(self.layout, env, is_distro=False), staging_dir)
            logging.info(f"Installing gauge into {install_dir}")
            try:
                mirror_dir(staging_dir, install_dir)
            except OSError as e:
                raise OrchestratorError(f"Could not install gauge : {e}") from e

        return ReleaseResult(install_dir=install_dir, build_time=time.time() - start_time)

    def run_tests(self, coverage: bool = False) -> ReleaseResult:
        """Run gauge's Go tests."""
        start_time = time.time()
        self.compiler.run_tests(coverage)
        return ReleaseResult(build_time=time.time() - start_time)

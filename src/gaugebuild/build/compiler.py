"""Go toolchain compiler for gauge.

Builds the gauge executable and the auxiliary gauge_screenshot executable for
one target, embedding the build metadata through a link-time substitution.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config.version import BuildVersion
from .artifacts import GAUGE, GAUGE_SCREENSHOT, ArtifactLayout
from .environment import BuildEnvironment
from .process_runner import ProcessError, ProcessRunner

VERSION_PACKAGE = "github.com/getgauge/gauge/version"
GAUGE_SCREENSHOT_LOCATION = "github.com/getgauge/gauge_screenshot"


class CompilerError(Exception):
    """Raised when the Go toolchain fails to build a target."""

    pass


class GoCompiler:
    """Compiles gauge binaries with the Go toolchain.

    This class handles:
    - Building gauge with the version metadata linked in
    - Fetching and building gauge_screenshot
    - Placing both executables in the target's bin directory
    """

    def __init__(
        self,
        layout: ArtifactLayout,
        version: BuildVersion,
        runner: Optional[ProcessRunner] = None,
        go: str = "go",
    ):
        """Initialize compiler.

        Args:
            layout: Artifact layout deciding the output directory
            version: Build version whose metadata is linked into gauge
            runner: Process runner (defaults to a real one)
            go: Go executable
        """
        self.layout = layout
        self.version = version
        self.runner = runner or ProcessRunner()
        self.go = go

    def ldflags(self) -> str:
        return f"-X {VERSION_PACKAGE}.BuildMetadata={self.version.metadata}"

    def compile(self, env: BuildEnvironment) -> Path:
        """Compile gauge and gauge_screenshot for one target.

        Args:
            env: Toolchain overrides for the target

        Returns:
            Directory containing the compiled executables

        Raises:
            CompilerError: If any toolchain invocation fails
        """
        process_env = env.process_env()
        gauge_path = self.layout.executable_path(GAUGE, env)
        screenshot_path = self.layout.executable_path(GAUGE_SCREENSHOT, env)
        cwd = self.layout.project_dir

        try:
            self.runner.run(
                [self.go, "build", "-ldflags", self.ldflags(), "-o", gauge_path],
                cwd=cwd,
                env=process_env,
            )
            self.runner.run(
                [self.go, "get", "-u", "-d", GAUGE_SCREENSHOT_LOCATION],
                cwd=cwd,
                env=process_env,
            )
            self.runner.run(
                [self.go, "build", "-o", screenshot_path, GAUGE_SCREENSHOT_LOCATION],
                cwd=cwd,
                env=process_env,
            )
        except ProcessError as e:
            raise CompilerError(f"Compilation failed for {env}: {e}") from e

        logging.info(f"Compiled {gauge_path.name} and {screenshot_path.name} into {gauge_path.parent}")
        return gauge_path.parent

    def run_tests(self, coverage: bool = False) -> None:
        """Run gauge's Go test suite.

        Args:
            coverage: Collect a coverage profile and open the HTML report

        Raises:
            CompilerError: If the tests fail
        """
        cwd = self.layout.project_dir
        try:
            if coverage:
                self.runner.run([self.go, "test", "-covermode=count", "-coverprofile=count.out"], cwd=cwd)
                self.runner.run([self.go, "tool", "cover", "-html=count.out"], cwd=cwd)
            else:
                self.runner.run([self.go, "test", "./...", "-v"], cwd=cwd)
        except ProcessError as e:
            raise CompilerError(f"Tests failed: {e}") from e

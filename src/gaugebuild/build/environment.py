"""Build environment resolution.

A BuildEnvironment is the explicit record of the GOOS/GOARCH/CC/CGO_ENABLED
overrides a build step runs with. Whatever is not overridden falls back to the
host platform. The record is handed to the compiler and packagers directly, so
the orchestrator never has to mutate (and later reset) its own environment
between targets.
"""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .platform_utils import PlatformDetector, PlatformError
from .targets import CC, CGO_ENABLED, GOARCH, GOOS, PlatformTarget, TargetOS

TOOLCHAIN_VARIABLES = (GOOS, GOARCH, CC, CGO_ENABLED)


@dataclass(frozen=True)
class BuildEnvironment:
    """Explicit toolchain overrides for one build step.

    Attributes:
        goos: Target OS override (None or empty means host OS)
        goarch: Target architecture override (None or empty means host arch)
        cc: C compiler override
        cgo_enabled: cgo override (None leaves the toolchain default)
    """

    goos: Optional[str] = None
    goarch: Optional[str] = None
    cc: Optional[str] = None
    cgo_enabled: Optional[bool] = None

    @classmethod
    def from_target(cls, target: PlatformTarget) -> "BuildEnvironment":
        """Create the environment for a matrix entry."""
        return cls(
            goos=target.os.value,
            goarch=target.arch.value,
            cc=target.cc,
            cgo_enabled=target.cgo_enabled,
        )

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "BuildEnvironment":
        """Read overrides from GOOS/GOARCH/CC/CGO_ENABLED.

        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        environ = os.environ if environ is None else environ
        cgo = environ.get(CGO_ENABLED) or None
        return cls(
            goos=environ.get(GOOS) or None,
            goarch=environ.get(GOARCH) or None,
            cc=environ.get(CC) or None,
            cgo_enabled=None if cgo is None else cgo == "1",
        )

    def resolved_os(self) -> str:
        """Target OS: the override if set, else the host OS."""
        return self.goos or PlatformDetector.host_os()

    def resolved_arch(self) -> str:
        """Target architecture: the override if set, else the host architecture."""
        return self.goarch or PlatformDetector.host_arch()

    def target_os(self) -> TargetOS:
        """Resolved OS as a TargetOS.

        Raises:
            PlatformError: If gauge has no distributable for the resolved OS
        """
        goos = self.resolved_os()
        try:
            return TargetOS(goos)
        except ValueError as e:
            raise PlatformError(f"No distributable defined for OS: {goos}") from e

    def overrides(self) -> Dict[str, str]:
        """Environment variables this record sets for the toolchain."""
        env = {}
        if self.goos:
            env[GOOS] = self.goos
        if self.goarch:
            env[GOARCH] = self.goarch
        if self.cc:
            env[CC] = self.cc
        if self.cgo_enabled is not None:
            env[CGO_ENABLED] = "1" if self.cgo_enabled else "0"
        return env

    def process_env(self, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Environment for a toolchain subprocess.

        Args:
            base: Environment to start from (defaults to os.environ)

        Returns:
            A new dict: base without any GOOS/GOARCH/CC/CGO_ENABLED, overlaid
            with this record's overrides. A variable the record leaves unset
            is absent from the child environment.
        """
        env = dict(os.environ if base is None else base)
        for name in TOOLCHAIN_VARIABLES:
            env.pop(name, None)
        env.update(self.overrides())
        return env

    def __str__(self) -> str:
        return f"OS:{self.resolved_os()} ARCH:{self.resolved_arch()}"


def resolved_os(environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the target OS from GOOS, falling back to the host OS."""
    return BuildEnvironment.from_environ(environ).resolved_os()


def resolved_architecture(environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the target architecture from GOARCH, falling back to the host architecture."""
    return BuildEnvironment.from_environ(environ).resolved_arch()


__all__ = [
    "BuildEnvironment",
    "PlatformError",
    "resolved_os",
    "resolved_architecture",
]

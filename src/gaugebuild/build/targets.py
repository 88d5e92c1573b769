"""Compile target matrix.

Defines every OS/architecture pair gauge is released for, along with the
cross-compilation toolchain overrides each one needs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

GOOS = "GOOS"
GOARCH = "GOARCH"
CC = "CC"
CGO_ENABLED = "CGO_ENABLED"


class TargetOS(str, Enum):
    """Operating systems gauge is packaged for."""

    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


class TargetArch(str, Enum):
    """Architectures gauge is compiled for (Go naming)."""

    X86 = "386"
    X86_64 = "amd64"


@dataclass(frozen=True)
class PlatformTarget:
    """One entry of the compile matrix.

    Attributes:
        os: Target operating system
        arch: Target architecture
        cc: C compiler to use when cross compiling with cgo
        cgo_enabled: Whether cgo is enabled for this target
    """

    os: TargetOS
    arch: TargetArch
    cc: Optional[str] = None
    cgo_enabled: bool = False

    @property
    def name(self) -> str:
        """Directory-style name of the target, e.g. 'linux_amd64'."""
        return f"{self.os.value}_{self.arch.value}"

    def to_env(self) -> Dict[str, str]:
        """Full set of toolchain environment overrides for this target."""
        env = {
            GOOS: self.os.value,
            GOARCH: self.arch.value,
            CGO_ENABLED: "1" if self.cgo_enabled else "0",
        }
        if self.cc:
            env[CC] = self.cc
        return env


# Each target's name is also its binary directory name under bin/
ALL_TARGETS: Tuple[PlatformTarget, ...] = (
    PlatformTarget(TargetOS.DARWIN, TargetArch.X86),
    PlatformTarget(TargetOS.DARWIN, TargetArch.X86_64),
    PlatformTarget(TargetOS.LINUX, TargetArch.X86),
    PlatformTarget(TargetOS.LINUX, TargetArch.X86_64),
    PlatformTarget(TargetOS.WINDOWS, TargetArch.X86, cc="i586-mingw32-gcc", cgo_enabled=True),
    PlatformTarget(TargetOS.WINDOWS, TargetArch.X86_64, cc="x86_64-w64-mingw32-gcc", cgo_enabled=True),
)


def all_targets() -> Tuple[PlatformTarget, ...]:
    """Return every compile target in release order."""
    return ALL_TARGETS


def filtered_targets(
    restrict_to_linux: bool,
    targets: Optional[Iterable[PlatformTarget]] = None,
) -> Tuple[PlatformTarget, ...]:
    """Narrow the target matrix.

    Args:
        restrict_to_linux: Keep only Linux targets when True
        targets: Targets to filter (defaults to the full matrix)

    Returns:
        New tuple of targets in their original relative order. May be empty.
    """
    source = ALL_TARGETS if targets is None else tuple(targets)
    if not restrict_to_linux:
        return source
    return tuple(t for t in source if t.os is TargetOS.LINUX)

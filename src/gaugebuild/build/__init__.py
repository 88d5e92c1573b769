"""
Build components for gaugebuild.

This module provides the compile side of the release pipeline:
- Target matrix and environment resolution
- External process execution
- Go compilation
- Artifact layout and naming

The orchestrator lives in gaugebuild.build.orchestrator; it depends on the
distro package, which in turn builds on the modules exported here.
"""

from .artifacts import ArtifactLayout, arch_suffix, executable_name, package_name
from .compiler import CompilerError, GoCompiler
from .environment import BuildEnvironment, resolved_architecture, resolved_os
from .platform_utils import PlatformDetector, PlatformError
from .process_runner import ProcessError, ProcessRunner
from .targets import (
    ALL_TARGETS,
    PlatformTarget,
    TargetArch,
    TargetOS,
    all_targets,
    filtered_targets,
)

__all__ = [
    "ArtifactLayout",
    "arch_suffix",
    "executable_name",
    "package_name",
    "CompilerError",
    "GoCompiler",
    "BuildEnvironment",
    "resolved_architecture",
    "resolved_os",
    "PlatformDetector",
    "PlatformError",
    "ProcessError",
    "ProcessRunner",
    "ALL_TARGETS",
    "PlatformTarget",
    "TargetArch",
    "TargetOS",
    "all_targets",
    "filtered_targets",
]

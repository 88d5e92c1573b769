"""
Command-line interface for gaugebuild.

This module provides the `gaugebuild` CLI tool for compiling, packaging and
installing gauge.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from gaugebuild import __version__
from gaugebuild.build import CompilerError, PlatformError, ProcessError
from gaugebuild.build.orchestrator import OrchestratorError, ReleaseOrchestrator, ReleaseResult
from gaugebuild.cli_utils import (
    BannerFormatter,
    ErrorFormatter,
    PathValidator,
    setup_logging,
)
from gaugebuild.config import (
    BuildVersion,
    InstallPrefixError,
    VersionError,
    read_gauge_version,
)
from gaugebuild.distro import ArchiveError, PackagingError, SigningError, StagingError


@dataclass
class ReleaseArgs:
    """Arguments for a gaugebuild run."""

    project_dir: Path
    test: bool = False
    coverage: bool = False
    install: bool = False
    nightly: bool = False
    all_platforms: bool = False
    target_linux: bool = False
    distro: bool = False
    skip_windows: bool = False
    prefix: str = ""
    bin_dir: str = ""
    cert_file: str = ""
    cert_file_pwd: str = ""
    gauge_version: Optional[str] = None
    build_metadata: str = ""
    log_file: Optional[Path] = None
    verbose: bool = False


def resolve_version(args: ReleaseArgs) -> BuildVersion:
    """Build version from --gauge-version or the checkout's version.go."""
    version = args.gauge_version or read_gauge_version(args.project_dir)
    return BuildVersion.create(version, nightly=args.nightly, metadata=args.build_metadata)


def release_command(args: ReleaseArgs) -> None:
    """Run the requested release step.

    Examples:
        gaugebuild                                  # Compile for this machine
        gaugebuild --all-platforms                  # Cross compile every target
        gaugebuild --all-platforms --target-linux   # Linux targets only
        gaugebuild --distro --all-platforms         # Package every target
        gaugebuild --install --prefix ~/.local      # Install locally
        gaugebuild --test --coverage                # Run gauge's tests
    """
    try:
        version = resolve_version(args)
        orchestrator = ReleaseOrchestrator(
            project_dir=args.project_dir,
            version=version,
            bin_dir=args.bin_dir or None,
            skip_windows=args.skip_windows,
            cert_file=args.cert_file,
            cert_password=args.cert_file_pwd,
        )

        if args.test:
            result = orchestrator.run_tests(args.coverage)
            summary = "TESTS PASSED"
        elif args.install:
            result = orchestrator.install(args.prefix or None)
            summary = f"INSTALLED INTO {result.install_dir}"
        elif args.distro:
            result = orchestrator.create_distributables(args.all_platforms, args.target_linux)
            summary = "DISTRIBUTABLES CREATED"
        elif args.all_platforms:
            result = orchestrator.cross_compile(args.target_linux)
            summary = "CROSS COMPILATION SUCCESSFUL"
        else:
            result = orchestrator.compile()
            summary = "BUILD SUCCESSFUL"

        print_summary(summary, version, result)
        sys.exit(0)

    except CompilerError as e:
        ErrorFormatter.handle_release_error("Compilation failed!", e)
    except (StagingError, ArchiveError, PackagingError) as e:
        ErrorFormatter.handle_release_error("Packaging failed!", e)
    except SigningError as e:
        ErrorFormatter.handle_release_error("Signing failed!", e)
    except (VersionError, InstallPrefixError, PlatformError) as e:
        ErrorFormatter.handle_release_error("Configuration error", e)
    except (OrchestratorError, ProcessError) as e:
        ErrorFormatter.handle_release_error("Release failed!", e)
    except FileNotFoundError as e:
        ErrorFormatter.handle_file_not_found(e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def print_summary(summary: str, version: BuildVersion, result: ReleaseResult) -> None:
    lines = [summary, f"Version: {version}"]
    if result.compiled:
        lines.append(f"Targets: {', '.join(result.compiled)}")
    for artifact in result.artifacts:
        lines.append(f"Artifact: {artifact}")
    lines.append(f"Time: {result.build_time:.2f}s")
    BannerFormatter.print_banner("\n".join(lines))


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gaugebuild",
        description="Build, package and install gauge",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gaugebuild {__version__}",
    )
    parser.add_argument("--test", action="store_true", help="Run the test cases")
    parser.add_argument("--coverage", action="store_true", help="Run the test cases and show the coverage")
    parser.add_argument("--install", action="store_true", help="Install to the specified prefix")
    parser.add_argument("--nightly", action="store_true", help="Add nightly build information")
    parser.add_argument(
        "--all-platforms",
        action="store_true",
        help="Compiles for all platforms windows, linux, darwin both x86 and x86_64",
    )
    parser.add_argument(
        "--target-linux",
        action="store_true",
        help="Compiles for linux only, both x86 and x86_64",
    )
    parser.add_argument("--distro", action="store_true", help="Create gauge distributable")
    parser.add_argument(
        "--skip-windows",
        action="store_true",
        help="Skips creation of windows distributable on unix machines while cross platform compilation",
    )
    parser.add_argument(
        "--prefix",
        default="",
        help="Specifies the prefix where gauge files will be installed",
    )
    parser.add_argument(
        "--bin-dir",
        default="",
        help="Specifies OS_PLATFORM specific binaries to install when cross compiling",
    )
    parser.add_argument(
        "--certFile",
        dest="cert_file",
        default="",
        help="Should be passed for signing the windows installer along with the password (certFilePwd)",
    )
    parser.add_argument(
        "--certFilePwd",
        dest="cert_file_pwd",
        default="",
        help="Password for certificate that will be used to sign the windows installer",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Root of the gauge checkout (default: current directory)",
    )
    parser.add_argument(
        "--gauge-version",
        default=None,
        help="Version to build (default: read from version/version.go)",
    )
    parser.add_argument(
        "--build-metadata",
        default="",
        help="Build metadata appended to the version (ignored with --nightly)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """gaugebuild - build and release tooling for gauge."""
    parsed_args = create_parser().parse_args(argv)

    PathValidator.validate_project_dir(parsed_args.project_dir)
    setup_logging(parsed_args.verbose, parsed_args.log_file)

    release_args = ReleaseArgs(
        project_dir=parsed_args.project_dir,
        test=parsed_args.test,
        coverage=parsed_args.coverage,
        install=parsed_args.install,
        nightly=parsed_args.nightly,
        all_platforms=parsed_args.all_platforms,
        target_linux=parsed_args.target_linux,
        distro=parsed_args.distro,
        skip_windows=parsed_args.skip_windows,
        prefix=parsed_args.prefix,
        bin_dir=parsed_args.bin_dir,
        cert_file=parsed_args.cert_file,
        cert_file_pwd=parsed_args.cert_file_pwd,
        gauge_version=parsed_args.gauge_version,
        build_metadata=parsed_args.build_metadata,
        log_file=parsed_args.log_file,
        verbose=parsed_args.verbose,
    )
    release_command(release_args)


if __name__ == "__main__":
    main()

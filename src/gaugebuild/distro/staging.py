"""Staging of gauge's install layout.

An InstallFileSet maps build/support files to their destination directory
inside a staging root; install_files() materializes it. StagingDirectory scopes
a transient staging root so it is removed on every exit path.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from ..build.artifacts import BIN, GAUGE, GAUGE_SCREENSHOT, ArtifactLayout
from ..build.build_utils import mirror_dir, mirror_file, safe_rmtree
from ..build.environment import BuildEnvironment

INSTALL_SHELL_SCRIPT = Path("build") / "install" / "install.sh"
WINDOWS_INSTALL_SCRIPTS = (
    Path("build") / "install" / "windows" / "plugin-install.bat",
    Path("build") / "install" / "windows" / "backup_properties_file.bat",
    Path("build") / "install" / "windows" / "set_timestamp.bat",
)

SHARE_GAUGE = Path("share") / GAUGE


class StagingError(Exception):
    """Raised when files cannot be staged."""

    pass


class InstallFileSet:
    """Ordered mapping of source path -> destination directory.

    Destinations are relative to the staging root; an empty destination means
    the root itself. A file lands at dst/<name>, a directory is merged into dst
    itself. A source may only be added once, and two sources may not land on
    the same destination path.
    """

    def __init__(self) -> None:
        self._entries: Dict[Path, Path] = {}
        self._targets: Dict[Path, Path] = {}

    def add(self, src: Path, dst: Path = Path("")) -> None:
        """Add a source with its destination directory.

        Raises:
            StagingError: If src is already mapped elsewhere, or another source
                already targets the same destination path
        """
        existing = self._entries.get(src)
        if existing is not None:
            if existing != dst:
                raise StagingError(f"{src} is already staged to {existing}, cannot stage it to {dst}")
            return

        target = dst if src.is_dir() else dst / src.name
        owner = self._targets.get(target)
        if owner is not None:
            raise StagingError(f"Destination {target} is already taken by {owner}, cannot stage {src}")

        self._entries[src] = dst
        self._targets[target] = src

    def items(self) -> Iterator[Tuple[Path, Path]]:
        return iter(self._entries.items())

    def get(self, src: Path) -> Optional[Path]:
        return self._entries.get(src)

    def __contains__(self, src: object) -> bool:
        return src in self._entries

    def __iter__(self) -> Iterator[Path]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"InstallFileSet({self._entries!r})"


def build_install_file_set(
    layout: ArtifactLayout,
    env: BuildEnvironment,
    is_distro: bool,
) -> InstallFileSet:
    """Files making up a gauge installation for one target.

    Install scripts are only part of distributables: install.sh on Linux and
    macOS, the batch helpers on Windows.

    Args:
        layout: Artifact layout locating the target's binaries
        env: Target environment
        is_distro: Whether a distributable (rather than a local install) is staged
    """
    root = layout.project_dir
    files = InstallFileSet()
    files.add(layout.executable_path(GAUGE, env), Path(BIN))
    files.add(layout.executable_path(GAUGE_SCREENSHOT, env), Path(BIN))
    files.add(root / "skel" / "example.spec", SHARE_GAUGE / "skel")
    files.add(root / "skel" / "default.properties", SHARE_GAUGE / "skel" / "env")
    files.add(root / "skel" / "gauge.properties", SHARE_GAUGE)
    files.add(root / "notice.md", SHARE_GAUGE)

    if is_distro:
        goos = env.resolved_os()
        if goos in ("darwin", "linux"):
            files.add(root / INSTALL_SHELL_SCRIPT)
        elif goos == "windows":
            for script in WINDOWS_INSTALL_SCRIPTS:
                files.add(root / script)
    return files


def install_files(files: InstallFileSet, install_dir: Path) -> None:
    """Copy every entry of the file set under install_dir.

    Directories are mirrored into install_dir/dst; files are copied to
    install_dir/dst/<basename>.

    Raises:
        StagingError: If a source is missing or a copy fails
    """
    for src, dst in files.items():
        install_dst = install_dir / dst
        logging.info(f"Install {src} -> {install_dst}")
        if not src.exists():
            raise StagingError(f"Source not found: {src}")
        try:
            if src.is_dir():
                mirror_dir(src, install_dst)
            else:
                mirror_file(src, install_dst / src.name)
        except OSError as e:
            raise StagingError(f"Failed to install {src} -> {install_dst}: {e}") from e


class StagingDirectory:
    """Scoped staging root.

    Entering clears leftovers from an earlier run and creates the directory;
    leaving removes it whether or not the body raised.

    Usage:
        with StagingDirectory(deploy_dir / name) as staging:
            install_files(files, staging)
    """

    def __init__(self, path: Path):
        self.path = path

    def __enter__(self) -> Path:
        if self.path.exists():
            logging.warning(f"Removing stale staging directory {self.path}")
            safe_rmtree(self.path)
        self.path.mkdir(parents=True)
        return self.path

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            safe_rmtree(self.path)
        except OSError as e:
            if exc is None:
                raise StagingError(f"Failed to remove staging directory {self.path}: {e}") from e
            # The body's exception propagates
            logging.error(f"Failed to remove staging directory {self.path}: {e}")

"""Zip Archiver.

This module creates the .zip distributables from staged directories using the
platform's zip tooling.

Design:
    - Unix-like hosts use the native `zip` utility
    - Windows hosts run build/create_windows_zipfile.ps1 through PowerShell
    - The zip tool gets the source directory as its working directory; the
      orchestrator's own working directory is never changed
"""

import logging
from pathlib import Path
from typing import Optional

from ..build.platform_utils import PlatformDetector
from ..build.process_runner import ProcessError, ProcessRunner

WINDOWS_ZIP_SCRIPT = Path("build") / "create_windows_zipfile.ps1"


class ArchiveError(Exception):
    """Raised when archive creation operations fail."""

    pass


class ZipArchiver:
    """Creates zip archives from staged directories."""

    def __init__(
        self,
        project_dir: Path,
        runner: Optional[ProcessRunner] = None,
        host_os: Optional[str] = None,
    ):
        """Initialize archiver.

        Args:
            project_dir: Root of the gauge checkout (locates the PowerShell script)
            runner: Process runner (defaults to a real one)
            host_os: Host OS in Go naming (defaults to the host detected when
                an archive is created)
        """
        self.project_dir = project_dir
        self.runner = runner or ProcessRunner()
        self.host_os = host_os

    def create_archive(self, parent_dir: Path, dir_to_zip: str, archive_base_name: str) -> Path:
        """Zip parent_dir/dir_to_zip into parent_dir/<archive_base_name>.zip.

        The archive contains the directory's contents, not the directory itself.

        Args:
            parent_dir: Directory holding the staged directory and the archive
            dir_to_zip: Name of the staged directory
            archive_base_name: Archive file name without .zip

        Returns:
            Path to the created archive

        Raises:
            ArchiveError: If the source is missing or the zip tool fails
        """
        parent_dir = parent_dir.resolve()
        source_dir = parent_dir / dir_to_zip
        archive_path = parent_dir / f"{archive_base_name}.zip"

        if not source_dir.is_dir():
            raise ArchiveError(f"Directory to zip not found: {source_dir}")

        # zip -r adds to an existing archive instead of replacing it
        if archive_path.exists():
            logging.info(f"Removing existing archive {archive_path}")
            archive_path.unlink()

        host_os = self.host_os or PlatformDetector.host_os()
        if host_os == "windows":
            cmd = [
                "powershell.exe",
                "-noprofile",
                "-executionpolicy",
                "bypass",
                "-file",
                str(self.project_dir.resolve() / WINDOWS_ZIP_SCRIPT),
                str(source_dir),
                str(archive_path),
            ]
        else:
            cmd = ["zip", "-r", str(archive_path), "."]

        try:
            output = self.runner.output(cmd, cwd=source_dir)
        except ProcessError as e:
            raise ArchiveError(f"Failed to zip {source_dir}: {e}") from e

        if output:
            logging.debug(output)
        logging.info(f"Created {archive_path.name}")
        return archive_path

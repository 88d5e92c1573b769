"""Build version for release artifacts.

The base version comes from gauge's own `version/version.go`; nightly builds
append a `nightly-YYYY-MM-DD` tag as build metadata.
"""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

NIGHTLY_DATE_FORMAT = "%Y-%m-%d"
VERSION_FILE = Path("version") / "version.go"

_VERSION_PATTERN = re.compile(
    r"CurrentGaugeVersion\s*=\s*&Version\{\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\}"
)


class VersionError(Exception):
    """Raised when the gauge version cannot be determined."""

    pass


@dataclass(frozen=True)
class BuildVersion:
    """Semantic version plus optional build metadata.

    Attributes:
        version: Base semantic version, e.g. '1.2.3'
        metadata: Build metadata, e.g. 'nightly-2024-01-01' (empty for releases)
    """

    version: str
    metadata: str = ""

    @classmethod
    def create(
        cls,
        version: str,
        nightly: bool = False,
        metadata: str = "",
        today: Optional[date] = None,
    ) -> "BuildVersion":
        """Create a build version.

        Args:
            version: Base semantic version
            nightly: Tag the build with today's date (takes precedence over metadata)
            metadata: Literal build metadata
            today: Date used for the nightly tag (defaults to today)
        """
        if nightly:
            today = today or date.today()
            metadata = f"nightly-{today.strftime(NIGHTLY_DATE_FORMAT)}"
        return cls(version=version, metadata=metadata)

    def __str__(self) -> str:
        if self.metadata:
            return f"{self.version}-{self.metadata}"
        return self.version


def read_gauge_version(project_dir: Path) -> str:
    """Read CurrentGaugeVersion from the gauge source tree.

    Args:
        project_dir: Root of the gauge checkout

    Returns:
        Version string, e.g. '0.8.0'

    Raises:
        VersionError: If version.go is missing or has no version declaration
    """
    version_file = project_dir / VERSION_FILE
    if not version_file.exists():
        raise VersionError(f"Version file not found: {version_file}")

    match = _VERSION_PATTERN.search(version_file.read_text(encoding="utf-8"))
    if not match:
        raise VersionError(f"No CurrentGaugeVersion declaration in {version_file}")
    return ".".join(match.groups())

"""Shared fixtures: a fake gauge checkout and a recording process runner."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

from gaugebuild.build.process_runner import ProcessError
from gaugebuild.build.targets import ALL_TARGETS, TargetOS


@dataclass
class Call:
    """One recorded command."""

    cmd: List[str]
    cwd: Optional[Path] = None
    env: Optional[Dict[str, str]] = None
    secrets: List[str] = field(default_factory=list)

    @property
    def tool(self) -> str:
        return self.cmd[0]


class FakeRunner:
    """Records commands instead of running them.

    Emulates the side effects the pipeline relies on: `go build -o` creates the
    output file, zip tools create the archive, packagesbuild writes
    deploy/gauge.pkg. Tools listed in fail_on raise ProcessError.
    """

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.calls: List[Call] = []
        self.fail_on = fail_on or set()

    def _record(self, cmd, cwd, env, secrets=()) -> Call:
        call = Call([str(part) for part in cmd], cwd, dict(env) if env is not None else None, list(secrets))
        self.calls.append(call)
        if call.tool in self.fail_on:
            raise ProcessError(f"{call.tool} failed", cmd=call.cmd, returncode=1)
        return call

    def run(self, cmd, cwd=None, env=None, secrets=()) -> None:
        call = self._record(cmd, cwd, env, secrets)
        if call.tool == "go" and call.cmd[1] == "build":
            output = Path(call.cmd[call.cmd.index("-o") + 1])
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text("binary")
        elif call.tool == "packagesbuild":
            pkg = Path(cwd) / "deploy" / "gauge.pkg"
            pkg.write_text("pkg")
        elif call.tool == "makensis.exe":
            installer = Path(call.cmd[3].split("=", 1)[1])
            installer.write_text("installer")

    def output(self, cmd, cwd=None, env=None) -> str:
        call = self._record(cmd, cwd, env)
        if call.tool == "zip":
            Path(call.cmd[2]).write_text("\n".join(sorted(p.name for p in Path(cwd).rglob("*"))))
        elif call.tool == "powershell.exe":
            Path(call.cmd[-1]).write_text("zip")
        return ""

    def commands(self, tool: str) -> List[Call]:
        return [call for call in self.calls if call.tool == tool]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def gauge_project(tmp_path):
    """A gauge checkout with support files and prebuilt binaries for every target."""
    root = tmp_path / "gauge"
    (root / "skel").mkdir(parents=True)
    (root / "skel" / "example.spec").write_text("# Specification Heading\n")
    (root / "skel" / "default.properties").write_text("gauge_reports_dir = reports\n")
    (root / "skel" / "gauge.properties").write_text("gauge_repository_url = https://example.com\n")
    (root / "notice.md").write_text("Notices\n")

    install = root / "build" / "install"
    (install / "windows").mkdir(parents=True)
    (install / "macosx").mkdir(parents=True)
    (install / "install.sh").write_text("#!/bin/sh\n")
    for script in ("plugin-install.bat", "backup_properties_file.bat", "set_timestamp.bat"):
        (install / "windows" / script).write_text("@echo off\n")
    (install / "windows" / "gauge-install.nsi").write_text("; nsis\n")
    (install / "macosx" / "gauge-pkg.pkgproj").write_text("<plist/>\n")

    (root / "version").mkdir()
    (root / "version" / "version.go").write_text(
        "package version\n\nvar CurrentGaugeVersion = &Version{1, 0, 0}\n"
    )

    for target in ALL_TARGETS:
        bin_dir = root / "bin" / target.name
        bin_dir.mkdir(parents=True)
        ext = ".exe" if target.os is TargetOS.WINDOWS else ""
        (bin_dir / f"gauge{ext}").write_text("gauge")
        (bin_dir / f"gauge_screenshot{ext}").write_text("screenshot")

    return root

"""Unit tests for ZipArchiver."""

import os
from unittest.mock import patch

import pytest

from gaugebuild.build.platform_utils import PlatformDetector
from gaugebuild.distro.archiver import ArchiveError, ZipArchiver


class TestZipArchiver:
    """Test cases for ZipArchiver."""

    @pytest.fixture
    def staged(self, tmp_path):
        deploy = tmp_path / "deploy"
        (deploy / "gauge-1.0.0-linux.x86_64" / "bin").mkdir(parents=True)
        (deploy / "gauge-1.0.0-linux.x86_64" / "bin" / "gauge").write_text("gauge")
        return deploy

    def test_unix_uses_zip_in_source_dir(self, tmp_path, staged, fake_runner):
        archiver = ZipArchiver(tmp_path, runner=fake_runner, host_os="linux")

        archive = archiver.create_archive(staged, "gauge-1.0.0-linux.x86_64", "gauge-1.0.0-linux.x86_64")

        assert archive == staged.resolve() / "gauge-1.0.0-linux.x86_64.zip"
        call = fake_runner.calls[0]
        assert call.cmd == ["zip", "-r", str(archive), "."]
        assert call.cwd == staged.resolve() / "gauge-1.0.0-linux.x86_64"

    def test_working_directory_is_untouched(self, tmp_path, staged, fake_runner):
        before = os.getcwd()
        ZipArchiver(tmp_path, runner=fake_runner, host_os="darwin").create_archive(staged, "gauge-1.0.0-linux.x86_64", "x")
        assert os.getcwd() == before

    def test_working_directory_is_untouched_on_failure(self, tmp_path, staged, fake_runner):
        fake_runner.fail_on = {"zip"}
        before = os.getcwd()
        with pytest.raises(ArchiveError):
            ZipArchiver(tmp_path, runner=fake_runner, host_os="linux").create_archive(
                staged, "gauge-1.0.0-linux.x86_64", "x"
            )
        assert os.getcwd() == before

    def test_windows_uses_powershell_script(self, tmp_path, staged, fake_runner):
        archiver = ZipArchiver(tmp_path, runner=fake_runner, host_os="windows")

        archive = archiver.create_archive(staged, "gauge-1.0.0-linux.x86_64", "gauge")

        assert fake_runner.calls[0].cmd == [
            "powershell.exe",
            "-noprofile",
            "-executionpolicy",
            "bypass",
            "-file",
            str(tmp_path.resolve() / "build" / "create_windows_zipfile.ps1"),
            str(staged.resolve() / "gauge-1.0.0-linux.x86_64"),
            str(archive),
        ]

    def test_archive_name_may_differ_from_directory(self, tmp_path, staged, fake_runner):
        archive = ZipArchiver(tmp_path, runner=fake_runner, host_os="linux").create_archive(
            staged, "gauge-1.0.0-linux.x86_64", "gauge-1.0.0-darwin.x86"
        )
        assert archive.name == "gauge-1.0.0-darwin.x86.zip"
        assert archive.exists()

    def test_stale_archive_is_replaced(self, tmp_path, staged, fake_runner):
        stale = staged / "gauge-1.0.0-linux.x86_64.zip"
        stale.write_text("stale")
        fake_runner.fail_on = {"zip"}

        with pytest.raises(ArchiveError):
            ZipArchiver(tmp_path, runner=fake_runner, host_os="linux").create_archive(
                staged, "gauge-1.0.0-linux.x86_64", "gauge-1.0.0-linux.x86_64"
            )
        assert not stale.exists()

    def test_missing_source_dir(self, tmp_path, fake_runner):
        with pytest.raises(ArchiveError, match="not found"):
            ZipArchiver(tmp_path, runner=fake_runner, host_os="linux").create_archive(tmp_path, "nope", "nope")
        assert fake_runner.calls == []

    def test_host_detected_when_archiving(self, tmp_path, staged, fake_runner):
        with patch("platform.system", return_value="FreeBSD"):
            archiver = ZipArchiver(tmp_path, runner=fake_runner)
            archiver.create_archive(staged, "gauge-1.0.0-linux.x86_64", "gauge")
        assert fake_runner.calls[0].tool == "zip"

        with patch.object(PlatformDetector, "host_os", return_value="windows"):
            archiver.create_archive(staged, "gauge-1.0.0-linux.x86_64", "gauge")
        assert fake_runner.calls[1].tool == "powershell.exe"

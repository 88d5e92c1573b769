"""Unit tests for the per-OS packagers."""

import pytest

from gaugebuild.build.artifacts import ArtifactLayout
from gaugebuild.build.environment import BuildEnvironment
from gaugebuild.build.targets import TargetOS
from gaugebuild.config.version import BuildVersion
from gaugebuild.distro.archiver import ArchiveError, ZipArchiver
from gaugebuild.distro.darwin_packager import DarwinPackager
from gaugebuild.distro.linux_packager import LinuxPackager
from gaugebuild.distro.packager import PackagingContext, PackagingError
from gaugebuild.distro.signer import ExecutableSigner
from gaugebuild.distro.windows_packager import WindowsPackager

NIGHTLY = BuildVersion("1.0.0", "nightly-2024-01-01")


def make_context(project, runner, version=NIGHTLY, **options):
    return PackagingContext(
        layout=ArtifactLayout(project),
        version=version,
        runner=runner,
        archiver=ZipArchiver(project, runner=runner, host_os="linux"),
        signer=ExecutableSigner(runner=runner),
        **options,
    )


def deploy_entries(project):
    return sorted(p.name for p in (project / "deploy").iterdir())


class TestLinuxPackager:
    """Test cases for LinuxPackager."""

    def test_nightly_zip(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner)

        result = LinuxPackager(context).package(BuildEnvironment(goos="linux", goarch="amd64"))

        assert result.target_os is TargetOS.LINUX
        assert [p.name for p in result.artifacts] == ["gauge-1.0.0-nightly-2024-01-01-linux.x86_64.zip"]
        assert deploy_entries(gauge_project) == ["gauge-1.0.0-nightly-2024-01-01-linux.x86_64.zip"]

    def test_archive_contains_install_layout(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner, version=BuildVersion("1.0.0"))

        result = LinuxPackager(context).package(BuildEnvironment(goos="linux", goarch="386"))

        listing = result.artifacts[0].read_text().splitlines()
        assert result.artifacts[0].name == "gauge-1.0.0-linux.x86.zip"
        assert {"bin", "gauge", "gauge_screenshot", "install.sh", "share", "notice.md"} <= set(listing)
        assert not any(name.endswith(".bat") for name in listing)

    def test_staging_removed_when_zip_fails(self, gauge_project, fake_runner):
        fake_runner.fail_on = {"zip"}
        context = make_context(gauge_project, fake_runner)

        with pytest.raises(ArchiveError):
            LinuxPackager(context).package(BuildEnvironment(goos="linux", goarch="amd64"))

        assert deploy_entries(gauge_project) == []


class TestWindowsPackager:
    """Test cases for WindowsPackager."""

    ENV = BuildEnvironment(goos="windows", goarch="amd64")

    def test_zip_installer_and_signature(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner, cert_file="cert.pfx", cert_password="secret")

        result = WindowsPackager(context).package(self.ENV)

        deploy = (gauge_project / "deploy").resolve()
        name = "gauge-1.0.0-nightly-2024-01-01-windows.x86_64"
        assert result.artifacts == [deploy / f"{name}.zip", deploy / f"{name}.exe"]
        assert result.signed is True

        makensis = fake_runner.commands("makensis.exe")[0]
        assert makensis.cmd == [
            "makensis.exe",
            "/DPRODUCT_VERSION=1.0.0-nightly-2024-01-01",
            f"/DGAUGE_DISTRIBUTABLES_DIR={deploy / name}",
            f"/DOUTPUT_FILE_NAME={deploy / name}.exe",
            str(gauge_project / "build" / "install" / "windows" / "gauge-install.nsi"),
        ]
        assert makensis.cwd == gauge_project
        assert fake_runner.commands("signtool")[0].cmd[-1] == str(deploy / f"{name}.exe")
        assert deploy_entries(gauge_project) == [f"{name}.exe", f"{name}.zip"]

    def test_zip_contains_batch_scripts(self, gauge_project, fake_runner):
        result = WindowsPackager(make_context(gauge_project, fake_runner)).package(self.ENV)

        listing = result.artifacts[0].read_text().splitlines()
        assert {"gauge.exe", "plugin-install.bat", "set_timestamp.bat"} <= set(listing)
        assert "install.sh" not in listing

    def test_skip_windows(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner, skip_windows=True)

        result = WindowsPackager(context).package(self.ENV)

        assert result.skipped is True
        assert result.artifacts == []
        assert fake_runner.calls == []

    def test_empty_password_leaves_installer_unsigned(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner, cert_file="cert.pfx", cert_password="")

        result = WindowsPackager(context).package(self.ENV)

        assert result.signed is False
        assert fake_runner.commands("signtool") == []
        assert len(result.artifacts) == 2

    def test_makensis_failure(self, gauge_project, fake_runner):
        fake_runner.fail_on = {"makensis.exe"}

        with pytest.raises(PackagingError, match="windows installer"):
            WindowsPackager(make_context(gauge_project, fake_runner)).package(self.ENV)

        deploy = gauge_project / "deploy"
        assert not (deploy / "gauge-1.0.0-nightly-2024-01-01-windows.x86_64").exists()


class TestDarwinPackager:
    """Test cases for DarwinPackager."""

    ENV = BuildEnvironment(goos="darwin", goarch="amd64")

    def test_zip_and_renamed_pkg(self, gauge_project, fake_runner):
        result = DarwinPackager(make_context(gauge_project, fake_runner)).package(self.ENV)

        deploy = (gauge_project / "deploy").resolve()
        name = "gauge-1.0.0-nightly-2024-01-01-darwin.x86_64"
        assert result.artifacts == [deploy / f"{name}.zip", deploy / f"{name}.pkg"]
        assert deploy_entries(gauge_project) == [f"{name}.pkg", f"{name}.zip"]

        zip_call = fake_runner.commands("zip")[0]
        assert zip_call.cwd == deploy / "gauge"
        build = fake_runner.commands("packagesbuild")[0]
        assert build.cmd == [
            "packagesbuild",
            "-v",
            str(gauge_project / "build" / "install" / "macosx" / "gauge-pkg.pkgproj"),
        ]

    def test_packagesbuild_failure_removes_staging(self, gauge_project, fake_runner):
        fake_runner.fail_on = {"packagesbuild"}

        with pytest.raises(PackagingError):
            DarwinPackager(make_context(gauge_project, fake_runner)).package(self.ENV)

        assert not (gauge_project / "deploy" / "gauge").exists()

    def test_no_signing(self, gauge_project, fake_runner):
        context = make_context(gauge_project, fake_runner, cert_file="cert.pfx", cert_password="secret")
        DarwinPackager(context).package(self.ENV)
        assert fake_runner.commands("signtool") == []

"""Windows distributable: zip archive plus NSIS installer."""

import logging
from pathlib import Path

from ..build.environment import BuildEnvironment
from ..build.process_runner import ProcessError
from ..build.targets import TargetOS
from .packager import IPackager, PackageResult, PackagingError
from .staging import StagingDirectory, build_install_file_set, install_files

MAKENSIS = "makensis.exe"
NSIS_SCRIPT = Path("build") / "install" / "windows" / "gauge-install.nsi"


class WindowsPackager(IPackager):
    """Builds gauge-<version>-windows.<arch>.zip and the matching .exe installer."""

    def package(self, env: BuildEnvironment) -> PackageResult:
        ctx = self.context
        if ctx.skip_windows:
            logging.info("Skipping windows distributable")
            return PackageResult(target_os=TargetOS.WINDOWS, skipped=True)

        name = ctx.layout.package_name(ctx.version, env)
        deploy_dir = ctx.layout.deploy_dir.resolve()
        distro_dir = deploy_dir / name
        installer_path = deploy_dir / f"{name}.exe"

        with StagingDirectory(distro_dir):
            install_files(build_install_file_set(ctx.layout, env, is_distro=True), distro_dir)
            archive_path = ctx.archiver.create_archive(deploy_dir, name, name)
            try:
                ctx.runner.run(
                    [
                        MAKENSIS,
                        f"/DPRODUCT_VERSION={ctx.version}",
                        f"/DGAUGE_DISTRIBUTABLES_DIR={distro_dir}",
                        f"/DOUTPUT_FILE_NAME={installer_path}",
                        ctx.layout.project_dir / NSIS_SCRIPT,
                    ],
                    cwd=ctx.layout.project_dir,
                )
            except ProcessError as e:
                raise PackagingError(f"Failed to create windows installer {installer_path.name}: {e}") from e

        signed = ctx.signer.sign(installer_path, ctx.cert_file, ctx.cert_password, TargetOS.WINDOWS)
        return PackageResult(
            target_os=TargetOS.WINDOWS,
            artifacts=[archive_path, installer_path],
            signed=signed,
        )

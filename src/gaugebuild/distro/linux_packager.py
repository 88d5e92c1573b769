"""Linux distributable: the zip archive is the deliverable."""

from ..build.environment import BuildEnvironment
from ..build.targets import TargetOS
from .packager import IPackager, PackageResult
from .staging import StagingDirectory, build_install_file_set, install_files


class LinuxPackager(IPackager):
    """Builds gauge-<version>-linux.<arch>.zip."""

    def package(self, env: BuildEnvironment) -> PackageResult:
        ctx = self.context
        name = ctx.layout.package_name(ctx.version, env)
        deploy_dir = ctx.layout.deploy_dir.resolve()
        distro_dir = deploy_dir / name

        with StagingDirectory(distro_dir):
            install_files(build_install_file_set(ctx.layout, env, is_distro=True), distro_dir)
            archive_path = ctx.archiver.create_archive(deploy_dir, name, name)

        return PackageResult(target_os=TargetOS.LINUX, artifacts=[archive_path])

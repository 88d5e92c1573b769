"""macOS distributable: zip archive plus .pkg built by packagesbuild."""

import shutil
from pathlib import Path

from ..build.artifacts import GAUGE
from ..build.environment import BuildEnvironment
from ..build.process_runner import ProcessError
from ..build.targets import TargetOS
from .packager import IPackager, PackageResult, PackagingError
from .staging import StagingDirectory, build_install_file_set, install_files

PACKAGES_BUILD = "packagesbuild"
PKG_PROJECT = Path("build") / "install" / "macosx" / "gauge-pkg.pkgproj"
PKG = ".pkg"


class DarwinPackager(IPackager):
    """Builds gauge-<version>-darwin.<arch>.zip and the matching .pkg.

    The package project reads its payload from deploy/gauge and writes
    deploy/gauge.pkg, which is then renamed to the standard artifact name.
    """

    def package(self, env: BuildEnvironment) -> PackageResult:
        ctx = self.context
        name = ctx.layout.package_name(ctx.version, env)
        deploy_dir = ctx.layout.deploy_dir.resolve()
        distro_dir = deploy_dir / GAUGE
        built_pkg = deploy_dir / f"{GAUGE}{PKG}"
        pkg_path = deploy_dir / f"{name}{PKG}"

        with StagingDirectory(distro_dir):
            install_files(build_install_file_set(ctx.layout, env, is_distro=True), distro_dir)
            archive_path = ctx.archiver.create_archive(deploy_dir, GAUGE, name)
            try:
                ctx.runner.run(
                    [PACKAGES_BUILD, "-v", ctx.layout.project_dir / PKG_PROJECT],
                    cwd=ctx.layout.project_dir,
                )
            except ProcessError as e:
                raise PackagingError(f"Failed to build macOS package: {e}") from e

            if not built_pkg.exists():
                raise PackagingError(f"{PACKAGES_BUILD} did not produce {built_pkg}")
            shutil.move(str(built_pkg), str(pkg_path))

        return PackageResult(target_os=TargetOS.DARWIN, artifacts=[archive_path, pkg_path])

"""Code signing of Windows executables with signtool."""

import logging
from pathlib import Path
from typing import Optional

from ..build.process_runner import ProcessError, ProcessRunner
from ..build.targets import TargetOS


class SigningError(Exception):
    """Raised when signtool fails."""

    pass


class ExecutableSigner:
    """Signs Windows executables when a certificate is supplied."""

    def __init__(self, runner: Optional[ProcessRunner] = None, signtool: str = "signtool"):
        self.runner = runner or ProcessRunner()
        self.signtool = signtool

    def sign(
        self,
        executable_path: Path,
        cert_file: str,
        cert_password: str,
        target_os: TargetOS,
    ) -> bool:
        """Sign an executable.

        Only Windows executables are signed. Without both a certificate file
        and its password the executable is left unsigned with a warning.

        Args:
            executable_path: Executable to sign
            cert_file: Path to the .pfx certificate
            cert_password: Certificate password
            target_os: OS the executable was built for

        Returns:
            True if the executable was signed

        Raises:
            SigningError: If signtool fails
        """
        if target_os is not TargetOS.WINDOWS:
            return False

        if not (cert_file and cert_password):
            logging.warning(f"No certificate file passed. {executable_path.name} won't be signed.")
            return False

        logging.info(f"Signing: {executable_path}")
        try:
            self.runner.run(
                [self.signtool, "sign", "/f", cert_file, "/p", cert_password, executable_path],
                secrets=[cert_password],
            )
        except ProcessError as e:
            raise SigningError(f"Failed to sign {executable_path}: {e}") from e
        return True

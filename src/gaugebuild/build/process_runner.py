"""Process Runner.

This module runs the external tools of the release pipeline (go, zip,
makensis, packagesbuild, signtool, powershell) synchronously.

Design:
    - Every invocation is logged before it starts
    - Working directory and environment are passed to the child explicitly;
      the orchestrator's own cwd and os.environ are never touched
    - Non-zero exit or spawn failure raises ProcessError
    - On KeyboardInterrupt the child's whole process tree is killed before the
      interrupt propagates
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

import psutil

Command = Sequence[Union[str, Path]]


class ProcessError(Exception):
    """Raised when an external process fails to start or exits non-zero."""

    def __init__(self, message: str, cmd: Optional[List[str]] = None, returncode: Optional[int] = None):
        super().__init__(message)
        self.cmd = cmd or []
        self.returncode = returncode


def kill_process_tree(pid: int, timeout: float = 3) -> int:
    """Kill a process and all of its children.

    Args:
        pid: PID of the root process
        timeout: Seconds to wait for graceful termination before force killing

    Returns:
        Number of processes terminated
    """
    try:
        root = psutil.Process(pid)
        processes = root.children(recursive=True) + [root]
    except psutil.NoSuchProcess:
        return 0

    killed_count = 0
    # Children first, then the root
    for proc in processes:
        try:
            proc.terminate()
            killed_count += 1
            logging.debug(f"Terminated process {proc.pid}")
        except psutil.NoSuchProcess:
            pass  # Already dead

    _gone, alive = psutil.wait_procs(processes, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
            logging.warning(f"Force killed stubborn process {proc.pid}")
        except psutil.NoSuchProcess:
            pass

    return killed_count


def _mask(args: List[str], secrets: Sequence[str]) -> List[str]:
    return ["****" if secrets and arg in secrets else arg for arg in args]


class ProcessRunner:
    """Runs external commands synchronously.

    Packagers and the compiler receive a runner instead of calling subprocess
    directly, so tests can substitute a recording fake.
    """

    def run(
        self,
        cmd: Command,
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
        secrets: Sequence[str] = (),
    ) -> None:
        """Run a command with its output streamed to this process's stdout/stderr.

        Args:
            cmd: Command and arguments
            cwd: Working directory for the child (defaults to ours)
            env: Full environment for the child (defaults to ours)
            secrets: Arguments masked in log output and error messages

        Raises:
            ProcessError: If the command cannot be started or exits non-zero
        """
        args = [str(part) for part in cmd]
        shown = _mask(args, secrets)
        logging.info(f"Execute {shown}")
        try:
            proc = subprocess.Popen(args, cwd=cwd, env=env)
        except OSError as e:
            raise ProcessError(f"Failed to start {args[0]}: {e}", cmd=shown) from e

        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            kill_process_tree(proc.pid)
            raise

        if returncode != 0:
            raise ProcessError(
                f"Command {shown} failed with exit code {returncode}",
                cmd=shown,
                returncode=returncode,
            )

    def output(
        self,
        cmd: Command,
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Run a command and capture its standard output.

        Returns:
            Stripped stdout of the command

        Raises:
            ProcessError: If the command cannot be started or exits non-zero
        """
        args = [str(part) for part in cmd]
        logging.info(f"Execute {args}")
        try:
            proc = subprocess.Popen(
                args,
                cwd=cwd,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ProcessError(f"Failed to start {args[0]}: {e}", cmd=args) from e

        try:
            stdout, stderr = proc.communicate()
        except KeyboardInterrupt:
            kill_process_tree(proc.pid)
            raise

        if proc.returncode != 0:
            error_msg = f"Command {args} failed with exit code {proc.returncode}\n"
            error_msg += f"stderr: {stderr}\n"
            error_msg += f"stdout: {stdout}"
            raise ProcessError(error_msg, cmd=args, returncode=proc.returncode)

        return stdout.strip()

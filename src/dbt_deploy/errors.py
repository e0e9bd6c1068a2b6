from typing import Sequence


class DeploymentError(Exception):
    """Base error for the deploy scripts."""


class CommandError(DeploymentError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: Sequence[str], returncode: int, stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {' '.join(self.cmd)}"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)

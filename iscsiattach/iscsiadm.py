"""
External command execution for iscsiadm.

This module runs the initiator management tool and turns its failures into
ExternalToolError. Output is returned as text with stderr merged into stdout,
since iscsiadm reports most of its diagnostics on stderr.
"""

import logging
import subprocess
from typing import List

from .constants import ISCSIConstants
from .exceptions import ExternalToolError


class CommandExecutor:
    """Runs external commands synchronously with a timeout."""

    def __init__(self, timeout: int = ISCSIConstants.COMMAND_TIMEOUT):
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def execute(self, command: str, args: List[str]) -> str:
        """Run a command and return its combined output.

        Args:
            command: Executable name or path
            args: Arguments for the executable

        Returns:
            Combined stdout and stderr text

        Raises:
            ExternalToolError: On non-zero exit, timeout, or if the command cannot be run
        """
        cmd = [command] + list(args)
        self.logger.debug("Running: %s", ' '.join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            self.logger.error("Timeout running %s %s", command, ' '.join(args))
            raise ExternalToolError(
                f"Timeout after {self.timeout}s running {command}", command, args)
        except OSError as e:
            self.logger.error("Error running %s: %s", command, e)
            raise ExternalToolError(f"Cannot run {command}: {e}", command, args)

        if result.returncode != 0:
            output = (result.stdout or "").strip()
            self.logger.error("%s %s failed with status %s: %s",
                              command, ' '.join(args), result.returncode, output)
            raise ExternalToolError(
                f"{command} failed with status {result.returncode}: {output}",
                command, args, result.returncode, output)

        return result.stdout or ""

    def iscsiadm(self, *args: str) -> str:
        """Run iscsiadm with the given arguments"""
        return self.execute(ISCSIConstants.ISCSIADM, list(args))

"""
Orchestrator exceptions.

Custom exceptions for configuration and external tool failures.
"""

from typing import Optional

from voxl_deploy.core.protocols import ProcessResult


class OrchestratorError(Exception):
    """Base class for every fatal orchestrator failure."""

    exit_code = 1


class ConfigurationError(OrchestratorError):
    """
    Raised when settings cannot be resolved.

    Examples:
        - .env exists but is unreadable
        - voxl.yaml is not valid YAML, or not a mapping
        - VOXL_SSH_PORT is not an integer
    """
    pass


class ExternalToolError(OrchestratorError):
    """
    Raised when docker, rsync or ssh exits non-zero.

    The tool has already written its own diagnostics to the terminal;
    this only carries the result so the CLI can exit with the same status.
    """

    def __init__(self, result: ProcessResult, step: Optional[str] = None):
        self.result = result
        self.step = step
        label = step or result.command[0]
        super().__init__(
            f"{label} failed (exit {result.returncode}): {' '.join(result.command)}"
        )

    @property
    def exit_code(self) -> int:
        returncode = self.result.returncode
        if returncode < 0:
            # Killed by a signal: report it the way a shell does
            return 128 - returncode
        return returncode or 1


class PrerequisiteError(OrchestratorError):
    """Raised when a missing prerequisite has no registered producer."""
    pass

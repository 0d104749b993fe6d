"""
Shared result types and the checked-invocation helper.

Every component runs its external tools through run_checked(), which turns a
non-zero exit into ExternalToolError. Nothing here retries or rolls back: the
first failing step aborts whatever chain it belongs to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from voxl_deploy.core.protocols import ProcessRunner, ProcessResult
from .exceptions import ExternalToolError


def run_checked(
    runner: ProcessRunner,
    cmd: List[str],
    step: Optional[str] = None,
    capture_output: bool = False,
) -> ProcessResult:
    """
    Run an external command and raise if it exits non-zero.

    Args:
        runner: Process runner (real or fake)
        cmd: argv to execute
        step: Short label used in the failure message (default: argv[0])
        capture_output: Capture stdout/stderr instead of streaming them

    Returns:
        ProcessResult of the successful invocation

    Raises:
        ExternalToolError: If the command exits non-zero
    """
    result = runner.run(cmd, capture_output=capture_output)
    if result.returncode != 0:
        raise ExternalToolError(result, step=step)
    return result


@dataclass
class ExtractionResult:
    """
    Outcome of copying install/ out of the build volume.

    Attributes:
        destination: Host directory that received the artifacts
        entries: Top-level names present in destination after the copy
    """
    destination: Path
    entries: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.entries


@dataclass
class DeployReport:
    """
    Outcome of a successful deploy().

    Attributes:
        destination: rsync destination (user@host:dir/)
        install_empty: True when the bundle shipped without pre-built artifacts
    """
    destination: str
    install_empty: bool


@dataclass(frozen=True)
class MissingPrerequisite:
    """
    A precondition an operation needs but does not produce itself.

    Returned (not raised) by precondition checks so the compound-operation
    layer decides how to satisfy it.

    Attributes:
        name: Identifier of the missing artifact (e.g. "runtime-archive")
        path: Where the artifact was expected
        resolution: Command names that produce it, in order
    """
    name: str
    path: Path
    resolution: tuple

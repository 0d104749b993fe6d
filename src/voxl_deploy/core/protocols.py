"""Protocol definitions for dependency injection.

This module defines Protocol-based abstractions for all external dependencies
of the orchestrator. Protocols use structural typing (duck typing with type
hints) which means any class implementing these methods satisfies the Protocol
without explicit inheritance.

Every docker, rsync and ssh invocation goes through a ProcessRunner, so the
whole build/deploy pipeline can be exercised in tests with a fake runner and
no real external tools.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Dict, Any, Optional, List, Union, Iterator


@dataclass(frozen=True)
class ProcessResult:
    """
    Structured result of one external process invocation.

    Attributes:
        command: argv that was executed
        returncode: Process exit status
        stdout: Captured standard output ("" when streamed to the terminal)
        stderr: Captured diagnostic output ("" when streamed to the terminal)
    """
    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class Logger(Protocol):
    """Abstraction for operator-facing output.

    Replaces direct print() statements throughout the codebase.
    """

    def info(self, message: str) -> None:
        """Log informational message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...


class FileSystemService(Protocol):
    """Abstraction for host filesystem operations.

    Wraps Path and shutil operations so staging logic can be tested
    without touching the real project tree.
    """

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if path exists."""
        ...

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        ...

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        ...

    def read_file(self, path: Union[str, Path]) -> str:
        """Read entire file as string."""
        ...

    def mkdir(self, path: Union[str, Path], parents: bool = True, exist_ok: bool = True) -> None:
        """Create directory (with parents if specified)."""
        ...

    def copy_file(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        """Copy a single file, overwriting dest."""
        ...

    def rename(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        """Move src onto dest, replacing dest."""
        ...

    def remove(self, path: Union[str, Path]) -> None:
        """Delete a single file."""
        ...

    def iterdir(self, path: Union[str, Path]) -> Iterator[Path]:
        """Iterate over directory contents."""
        ...

    def size(self, path: Union[str, Path]) -> int:
        """Size of a file in bytes."""
        ...


class ProcessRunner(Protocol):
    """Abstraction for blocking external process execution.

    Output is streamed to the operator's terminal unless capture_output
    is requested. Never raises on a non-zero exit; callers inspect
    ProcessResult.returncode.
    """

    def run(
        self,
        cmd: List[str],
        capture_output: bool = False,
    ) -> ProcessResult:
        """Execute command, wait for it to exit and return its result."""
        ...


class EnvironmentProvider(Protocol):
    """Abstraction for environment access.

    Wraps os.environ and the working directory so settings resolution
    can be tested without mutating the real process environment.
    """

    def get_environ(self) -> Dict[str, str]:
        """Get copy of environment variables."""
        ...

    def get_cwd(self) -> str:
        """Get current working directory."""
        ...


class ConfigLoader(Protocol):
    """Abstraction for project settings file loading.

    Wraps YAML and dotenv parsing to enable testing with mock
    configurations without requiring actual settings files.
    """

    def load_yaml(self, path: str) -> Any:
        """Load YAML file and return the parsed document."""
        ...

    def load_dotenv(self, path: str) -> Dict[str, Optional[str]]:
        """Load KEY=VALUE file and return its variables."""
        ...

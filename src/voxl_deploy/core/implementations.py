"""Production implementations of dependency injection protocols.

This module provides real implementations that wrap actual external dependencies
(filesystem, subprocess, environment, settings files). These are used in
production code.

For testing, use mocks or test doubles instead of these implementations.
"""

import os
import shutil
import subprocess
import sys
import yaml
from dotenv import dotenv_values
from pathlib import Path
from typing import Dict, Any, Optional, List, Union, Iterator

from voxl_deploy.core.protocols import ProcessResult


class ConsoleLogger:
    """Production logger that prints to console (stdout/stderr)."""

    def info(self, message: str) -> None:
        """Print info message to stdout."""
        print(message, flush=True)

    def warning(self, message: str) -> None:
        """Print warning message to stdout."""
        print(f"    WARNING: {message}", flush=True)

    def error(self, message: str) -> None:
        """Print error message to stderr."""
        print(f"Error: {message}", file=sys.stderr, flush=True)

    def debug(self, message: str) -> None:
        """Print debug message to stdout."""
        print(f"Debug: {message}", flush=True)


class RealFileSystemService:
    """Production filesystem service using real pathlib and shutil operations."""

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if path exists."""
        return Path(path).exists()

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        return Path(path).is_file()

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def read_file(self, path: Union[str, Path]) -> str:
        """Read entire file as string."""
        with open(path, 'r') as f:
            return f.read()

    def mkdir(self, path: Union[str, Path], parents: bool = True, exist_ok: bool = True) -> None:
        """Create directory."""
        Path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def copy_file(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        """Copy file contents and mode, replacing dest."""
        shutil.copy(src, dest)

    def rename(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        """Move src onto dest, replacing dest."""
        Path(src).replace(dest)

    def remove(self, path: Union[str, Path]) -> None:
        """Delete a single file."""
        Path(path).unlink()

    def iterdir(self, path: Union[str, Path]) -> Iterator[Path]:
        """Iterate over directory contents."""
        return Path(path).iterdir()

    def size(self, path: Union[str, Path]) -> int:
        """Size of a file in bytes."""
        return Path(path).stat().st_size


class SubprocessRunner:
    """Production process runner using real subprocess.run.

    stdin/stdout/stderr are inherited from the orchestrator unless output
    is captured, so interactive sessions (docker run -it, ssh -t) and
    rsync progress work unchanged.
    """

    def run(
        self,
        cmd: List[str],
        capture_output: bool = False,
    ) -> ProcessResult:
        """Execute command and wait for it to exit."""
        try:
            completed = subprocess.run(
                cmd,
                capture_output=capture_output,
                text=True,
            )
        except FileNotFoundError as e:
            # Same status a shell reports for a missing executable
            return ProcessResult(command=list(cmd), returncode=127, stderr=str(e))

        return ProcessResult(
            command=list(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


class SystemEnvironmentProvider:
    """Production environment provider using the real os module."""

    def get_environ(self) -> Dict[str, str]:
        """Get copy of environment variables."""
        return dict(os.environ)

    def get_cwd(self) -> str:
        """Get current working directory."""
        return os.getcwd()


class FileConfigLoader:
    """Production settings loader using real YAML and dotenv parsers."""

    def __init__(self, filesystem: 'RealFileSystemService'):
        """Initialize with filesystem service for reading files."""
        self.fs = filesystem

    def load_yaml(self, path: str) -> Any:
        """Load YAML file and return parsed document."""
        content = self.fs.read_file(path)
        return yaml.safe_load(content)

    def load_dotenv(self, path: str) -> Dict[str, Optional[str]]:
        """Load .env file and return its variables (no os.environ mutation)."""
        # dotenv_values swallows unreadable files; surface them instead
        self.fs.read_file(path)
        return dict(dotenv_values(path))

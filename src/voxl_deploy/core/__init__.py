"""Core dependency injection infrastructure for voxl-deploy.

This module provides Protocol-based abstractions that enable dependency injection
and testability throughout the codebase. All external dependencies (filesystem,
subprocess, environment, settings files) are abstracted via Protocols with
production implementations.

Design:
- Protocol-based abstractions (typing.Protocol) for structural typing
- Production implementations for real-world use
- Easy mocking for unit tests
"""

from voxl_deploy.core.protocols import (
    Logger,
    FileSystemService,
    ProcessRunner,
    ProcessResult,
    EnvironmentProvider,
    ConfigLoader,
)

from voxl_deploy.core.implementations import (
    ConsoleLogger,
    RealFileSystemService,
    SubprocessRunner,
    SystemEnvironmentProvider,
    FileConfigLoader,
)

__all__ = [
    # Protocols
    "Logger",
    "FileSystemService",
    "ProcessRunner",
    "ProcessResult",
    "EnvironmentProvider",
    "ConfigLoader",
    # Implementations
    "ConsoleLogger",
    "RealFileSystemService",
    "SubprocessRunner",
    "SystemEnvironmentProvider",
    "FileConfigLoader",
]

"""
Drone deployment subsystem.

Moves build output from the workstation to the drone:
    - ArtifactExtractor: cross-install volume → deploy/install/
    - DeploySynchronizer: deploy/ bundle → drone:VOXL_DIR/
    - ImageTransporter: runtime .tar.gz → drone docker load
    - RemoteController: docker compose up/down/logs/exec over ssh

Public API:
    - SSHSession: ssh/rsync command construction
    - DeployReport, ExtractionResult, MissingPrerequisite: Result types
    - OrchestratorError, ConfigurationError, ExternalToolError, PrerequisiteError: Exceptions
"""

from .base import DeployReport, ExtractionResult, MissingPrerequisite, run_checked
from .exceptions import OrchestratorError, ConfigurationError, ExternalToolError, PrerequisiteError
from .ssh import SSHSession
from .extractor import ArtifactExtractor
from .sync import DeploySynchronizer
from .transport import ImageTransporter
from .remote import RemoteController

__all__ = [
    # Result types
    "DeployReport",
    "ExtractionResult",
    "MissingPrerequisite",
    "run_checked",

    # Exceptions
    "OrchestratorError",
    "ConfigurationError",
    "ExternalToolError",
    "PrerequisiteError",

    # Implementations
    "SSHSession",
    "ArtifactExtractor",
    "DeploySynchronizer",
    "ImageTransporter",
    "RemoteController",
]

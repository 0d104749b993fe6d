"""Wires every component to one Settings record and one set of services"""
from dataclasses import dataclass

from voxl_deploy.build import ImageBuilder, WorkspaceBuilder
from voxl_deploy.core.protocols import FileSystemService, Logger, ProcessRunner
from voxl_deploy.deploy import (
    ArtifactExtractor,
    DeploySynchronizer,
    ImageTransporter,
    RemoteController,
    SSHSession,
)
from voxl_deploy.utils.config import Settings
from voxl_deploy.utils.paths import ProjectPaths


@dataclass
class Toolkit:
    """All components for one orchestrator run.

    Args:
        settings: Resolved, immutable settings
        paths: Project layout under settings.project_dir
        log: Operator-facing logger
    """
    settings: Settings
    paths: ProjectPaths
    log: Logger
    images: ImageBuilder
    workspace: WorkspaceBuilder
    extractor: ArtifactExtractor
    synchronizer: DeploySynchronizer
    transporter: ImageTransporter
    remote: RemoteController

    @classmethod
    def create(
        cls,
        settings: Settings,
        runner: ProcessRunner,
        filesystem: FileSystemService,
        logger: Logger,
    ) -> "Toolkit":
        paths = ProjectPaths(settings.project_dir)
        session = SSHSession(settings)
        return cls(
            settings=settings,
            paths=paths,
            log=logger,
            images=ImageBuilder(settings, paths, runner, filesystem, logger),
            workspace=WorkspaceBuilder(paths, runner, logger),
            extractor=ArtifactExtractor(paths.install_dir, runner, filesystem, logger),
            synchronizer=DeploySynchronizer(paths, session, runner, filesystem, logger),
            transporter=ImageTransporter(paths, session, runner, filesystem, logger),
            remote=RemoteController(session, runner, logger),
        )

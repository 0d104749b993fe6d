"""
ImageTransporter - Ship the exported runtime image to the drone and load it.

The archive must already exist; check_prerequisites() reports a missing one
as a MissingPrerequisite instead of building it here. A failed remote
docker load leaves /tmp/voxl-runtime-arm64.tar.gz on the drone.
"""

from typing import Optional

from voxl_deploy.core.protocols import FileSystemService, Logger, ProcessRunner
from voxl_deploy.utils.paths import ProjectPaths, REMOTE_TMP_DIR, remote_archive_path
from .base import MissingPrerequisite, run_checked
from .ssh import SSHSession

RUNTIME_ARCHIVE = "runtime-archive"


class ImageTransporter:
    """rsync the runtime .tar.gz to the drone, then docker load it there."""

    def __init__(
        self,
        paths: ProjectPaths,
        session: SSHSession,
        runner: ProcessRunner,
        filesystem: FileSystemService,
        logger: Logger,
    ):
        self.paths = paths
        self.session = session
        self.runner = runner
        self.fs = filesystem
        self.log = logger

    def check_prerequisites(self) -> Optional[MissingPrerequisite]:
        """Return what is missing before transfer can start, or None."""
        archive = self.paths.runtime_archive
        if self.fs.is_file(archive):
            return None
        return MissingPrerequisite(
            name=RUNTIME_ARCHIVE,
            path=archive,
            resolution=("build-runtime", "export-runtime"),
        )

    def deploy_image(self) -> None:
        """
        Transfer the archive and load it into the drone's Docker engine.

        Raises:
            FileNotFoundError: If called while the archive is still missing
            ExternalToolError: If rsync or the remote load fails
        """
        missing = self.check_prerequisites()
        if missing is not None:
            raise FileNotFoundError(f"Runtime image archive not found: {missing.path}")

        archive = self.paths.runtime_archive
        self.log.info("==> Transferring runtime image to drone...")
        run_checked(
            self.runner,
            self.session.rsync_cmd(str(archive), f"{REMOTE_TMP_DIR}/"),
            step="rsync runtime image",
        )

        remote_archive = remote_archive_path()
        self.log.info("==> Loading image on drone...")
        run_checked(
            self.runner,
            self.session.ssh_cmd(f"docker load < {remote_archive} && rm {remote_archive}"),
            step="remote docker load",
        )
        self.log.info("==> Done. Image loaded on drone.")

"""
DeploySynchronizer - Stage the deploy bundle and mirror it to the drone.

Strategy: local staging (deploy/) → ssh mkdir -p → rsync --delete

The remote mirror is not atomic. An interrupted rsync leaves the drone
directory partially updated; re-running deploy converges it.
"""

from voxl_deploy.core.protocols import FileSystemService, Logger, ProcessRunner
from voxl_deploy.utils.paths import ProjectPaths
from .base import DeployReport, run_checked
from .ssh import SSHSession, local_mirror_cmd

SOURCE_EXCLUDES = (".git", "__pycache__", "*.pyc")
EMPTY_INSTALL_WARNING = "deploy/install/ is empty. Run 'extract-install' first."


class DeploySynchronizer:
    """
    Builds deploy/ and pushes it to VOXL_DIR on the drone.

    Steps (fixed order, first failure aborts the rest):
        1. mkdir deploy/
        2. copy docker-compose.voxl.yml → deploy/docker-compose.yml
        3. rsync --delete ros2_ws/src/ → deploy/src/
        4. warn if deploy/install/ is missing or empty
        5. ssh mkdir -p VOXL_DIR
        6. rsync -avz --progress --delete deploy/ → drone:VOXL_DIR/
    """

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

    def install_is_empty(self) -> bool:
        install = self.paths.install_dir
        if not self.fs.is_dir(install):
            return True
        return next(iter(self.fs.iterdir(install)), None) is None

    def stage(self) -> bool:
        """
        Steps 1-4: assemble the local bundle.

        Returns:
            True if the bundle has no pre-built artifacts
        """
        self.log.info("==> Preparing deploy directory...")
        self.fs.mkdir(self.paths.deploy_dir, parents=True, exist_ok=True)

        self.fs.copy_file(self.paths.drone_compose, self.paths.staged_compose)

        run_checked(
            self.runner,
            local_mirror_cmd(
                f"{self.paths.source_dir}/",
                f"{self.paths.staged_source_dir}/",
                excludes=SOURCE_EXCLUDES,
            ),
            step="stage src/",
        )

        install_empty = self.install_is_empty()
        if install_empty:
            self.log.warning(EMPTY_INSTALL_WARNING)
            self.log.info("             (Or the drone can build from source if you prefer.)")
        return install_empty

    def push(self) -> str:
        """Steps 5-6: create VOXL_DIR on the drone and mirror deploy/ into it."""
        remote_dir = self.session.remote_dir
        self.log.info(f"==> Syncing to {self.session.destination}:{remote_dir}...")

        run_checked(
            self.runner,
            self.session.ssh_cmd(f"mkdir -p {remote_dir}"),
            step="remote mkdir",
        )

        target = f"{remote_dir}/"
        run_checked(
            self.runner,
            self.session.rsync_cmd(f"{self.paths.deploy_dir}/", target, delete=True),
            step="rsync deploy/",
        )
        return self.session.remote_path(target)

    def deploy(self) -> DeployReport:
        """
        Stage and push the bundle.

        Returns:
            DeployReport; install_empty=True is a degraded but successful deploy

        Raises:
            ExternalToolError: If any rsync/ssh step fails (remaining steps are skipped)
        """
        install_empty = self.stage()
        destination = self.push()

        remote_dir = self.session.remote_dir
        self.log.info("")
        self.log.info("==> Deploy complete. Drone directory layout:")
        self.log.info(f"    {remote_dir}/")
        self.log.info("    ├── docker-compose.yml")
        self.log.info("    ├── src/               (your ROS2 packages)")
        self.log.info("    └── install/           (pre-built arm64 binaries)")

        return DeployReport(destination=destination, install_empty=install_empty)

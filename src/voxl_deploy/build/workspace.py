"""Workspace Builder - colcon inside the disposable dev containers"""
from enum import Enum

from voxl_deploy.core.protocols import Logger, ProcessRunner
from voxl_deploy.deploy.base import run_checked
from voxl_deploy.utils.paths import ProjectPaths

ROS_SETUP = "/opt/ros/humble/setup.bash"
CONTAINER_WORKSPACE = "/ros2_ws"
COLCON_BUILD = (
    f"source {ROS_SETUP} && cd {CONTAINER_WORKSPACE} && colcon build --symlink-install"
)


class WorkspaceTarget(Enum):
    """Compose service in docker-compose.workstation.yml for each flavour."""

    NATIVE = "dev"
    EMULATED = "cross-arm64"

    @property
    def service(self) -> str:
        return self.value


class WorkspaceBuilder:
    """Runs the ROS 2 workspace build (or a shell) in a throwaway compose container.

    Build output lands in the compose-managed volumes of the service
    (cross-install for the arm64 container), never directly on the host.
    """

    def __init__(self, paths: ProjectPaths, runner: ProcessRunner, logger: Logger):
        self.paths = paths
        self.runner = runner
        self.log = logger

    def compose_run_cmd(self, target: WorkspaceTarget, *command: str) -> list:
        return [
            "docker", "compose",
            "-f", str(self.paths.workstation_compose),
            "run", "--rm", target.service,
            *command,
        ]

    def open_shell(self, target: WorkspaceTarget) -> None:
        """Interactive shell in the dev container (uses the image's default command)."""
        if target is WorkspaceTarget.NATIVE:
            self.log.info("==> Starting native x86_64 dev container...")
        else:
            self.log.info("==> Starting arm64 cross-build container (QEMU)...")
        run_checked(self.runner, self.compose_run_cmd(target), step=target.service)

    def build_workspace(self, target: WorkspaceTarget) -> None:
        """
        colcon build --symlink-install inside the container.

        Raises:
            ExternalToolError: With docker compose's exit status if the build fails
        """
        if target is WorkspaceTarget.NATIVE:
            self.log.info("==> Running colcon build in native dev container...")
        else:
            self.log.info("==> Running colcon build in arm64 container (QEMU-emulated)...")

        run_checked(
            self.runner,
            self.compose_run_cmd(target, "bash", "-c", COLCON_BUILD),
            step=f"colcon build ({target.service})",
        )

        if target is WorkspaceTarget.EMULATED:
            self.log.info("")
            self.log.info("==> ARM64 binaries built. Run 'extract-install' to copy them out.")

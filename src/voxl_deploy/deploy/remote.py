"""RemoteController - lifecycle of the deployed container on the drone"""
from voxl_deploy.core.protocols import Logger, ProcessRunner
from .base import run_checked
from .ssh import SSHSession

RUNTIME_CONTAINER = "voxl-runtime"
LOG_TAIL_LINES = 100


class RemoteController:
    """One ssh invocation per operation; nothing is retried."""

    def __init__(self, session: SSHSession, runner: ProcessRunner, logger: Logger):
        self.session = session
        self.runner = runner
        self.log = logger

    def _in_deploy_dir(self, command: str) -> str:
        return f"cd {self.session.remote_dir} && {command}"

    def start(self) -> None:
        self.log.info(f"==> Starting drone container on {self.session.host}...")
        run_checked(
            self.runner,
            self.session.ssh_cmd(self._in_deploy_dir("docker compose up -d"), tty=True),
            step="voxl-start",
        )

    def shell(self) -> None:
        self.log.info("==> Connecting to drone container...")
        run_checked(
            self.runner,
            self.session.ssh_cmd(f"docker exec -it {RUNTIME_CONTAINER} bash", tty=True),
            step="voxl-shell",
        )

    def logs(self) -> None:
        # Follows until the operator interrupts
        run_checked(
            self.runner,
            self.session.ssh_cmd(
                self._in_deploy_dir(f"docker compose logs -f --tail={LOG_TAIL_LINES}")
            ),
            step="voxl-logs",
        )

    def stop(self) -> None:
        self.log.info("==> Stopping voxl-drone container...")
        run_checked(
            self.runner,
            self.session.ssh_cmd(self._in_deploy_dir("docker compose down"), tty=True),
            step="voxl-stop",
        )

"""
SSH / rsync command construction for the drone.

Remote commands are passed to ssh as a single string and VOXL_DIR is
interpolated unquoted, so ~ and $HOME expand in the drone's shell.
"""

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from voxl_deploy.utils.config import Settings

DEFAULT_SSH_PORT = 22


class SSHSession:
    """Builds ssh and rsync argv for one RemoteEndpoint."""

    def __init__(self, settings: "Settings"):
        self.host = settings.host
        self.destination = settings.destination
        self.ssh_port = settings.ssh_port
        self.remote_dir = settings.remote_dir

    def _port_args(self) -> List[str]:
        if self.ssh_port == DEFAULT_SSH_PORT:
            return []
        return ["-p", str(self.ssh_port)]

    def ssh_cmd(self, command: str, tty: bool = False) -> List[str]:
        """Build SSH command; tty=True allocates a terminal (ssh -t)."""
        cmd = ["ssh"]
        if tty:
            cmd.append("-t")
        cmd.extend(self._port_args())
        cmd.extend([self.destination, command])
        return cmd

    def remote_path(self, path: str) -> str:
        """rsync target spec, e.g. ubuntu@drone.local:/voxl_docker/"""
        return f"{self.destination}:{path}"

    def rsync_cmd(
        self,
        source: str,
        remote_path: str,
        delete: bool = False,
        progress: bool = True,
    ) -> List[str]:
        """Build an archive-mode, compressed rsync push to the drone."""
        cmd = ["rsync", "-avz"]
        if progress:
            cmd.append("--progress")
        if delete:
            cmd.append("--delete")
        if self.ssh_port != DEFAULT_SSH_PORT:
            cmd.extend(["-e", f"ssh -p {self.ssh_port}"])
        cmd.extend([source, self.remote_path(remote_path)])
        return cmd


def local_mirror_cmd(source: str, dest: str, excludes: Sequence[str] = ()) -> List[str]:
    """rsync -a --delete between two host directories."""
    cmd = ["rsync", "-a", "--delete"]
    cmd.extend(f"--exclude={pattern}" for pattern in excludes)
    cmd.extend([source, dest])
    return cmd

"""
Project and drone directory layout.

Workstation:
<project>/
├── docker/
│   ├── Dockerfile                       # multi-stage: voxl-dev, voxl-runtime
│   ├── docker-compose.workstation.yml   # services: dev, cross-arm64
│   └── docker-compose.voxl.yml          # runtime composition for the drone
├── ros2_ws/src/                         # managed source tree
├── deploy/                              # staging, mirrors the drone layout
│   ├── docker-compose.yml
│   ├── src/
│   └── install/                         # extracted arm64 artifacts
└── voxl-runtime-arm64.tar.gz            # exported runtime image

Drone:
<VOXL_DIR>/
├── docker-compose.yml
├── src/
└── install/
"""

from dataclasses import dataclass
from pathlib import Path

RUNTIME_ARCHIVE_NAME = "voxl-runtime-arm64.tar.gz"
REMOTE_TMP_DIR = "/tmp"
REMOTE_COMPOSE_NAME = "docker-compose.yml"


@dataclass(frozen=True)
class ProjectPaths:
    """Fixed project-relative locations used by every component."""
    root: Path

    @property
    def docker_dir(self) -> Path:
        return self.root / "docker"

    @property
    def dockerfile(self) -> Path:
        return self.docker_dir / "Dockerfile"

    @property
    def workstation_compose(self) -> Path:
        return self.docker_dir / "docker-compose.workstation.yml"

    @property
    def drone_compose(self) -> Path:
        return self.docker_dir / "docker-compose.voxl.yml"

    @property
    def source_dir(self) -> Path:
        return self.root / "ros2_ws" / "src"

    @property
    def deploy_dir(self) -> Path:
        return self.root / "deploy"

    @property
    def staged_compose(self) -> Path:
        return self.deploy_dir / REMOTE_COMPOSE_NAME

    @property
    def staged_source_dir(self) -> Path:
        return self.deploy_dir / "src"

    @property
    def install_dir(self) -> Path:
        return self.deploy_dir / "install"

    @property
    def runtime_archive(self) -> Path:
        return self.root / RUNTIME_ARCHIVE_NAME


def remote_archive_path() -> str:
    """Where the runtime archive lands on the drone before docker load."""
    return f"{REMOTE_TMP_DIR}/{RUNTIME_ARCHIVE_NAME}"


def format_size(num_bytes: int) -> str:
    """Human-readable size, du -h style (e.g. 412M)."""
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G"):
        if size < 1024:
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}T"

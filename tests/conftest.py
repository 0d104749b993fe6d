"""Shared test doubles: a recording ProcessRunner and a wired Toolkit."""
from pathlib import Path
from unittest.mock import Mock

import pytest

from voxl_deploy.commands.context import Toolkit
from voxl_deploy.core import Logger, ProcessResult, RealFileSystemService
from voxl_deploy.utils.config import Settings


class FakeProcessRunner:
    """Records every argv and answers from configured rules.

    Rules are (substring, returncode, stdout, side_effect); the first rule
    whose substring occurs in the joined command wins. Unmatched commands
    succeed with empty output.
    """

    def __init__(self):
        self.calls = []
        self.rules = []

    def on(self, substring, returncode=0, stdout="", side_effect=None):
        self.rules.append((substring, returncode, stdout, side_effect))
        return self

    def run(self, cmd, capture_output=False):
        self.calls.append(list(cmd))
        cmd_str = ' '.join(cmd)
        for substring, returncode, stdout, side_effect in self.rules:
            if substring in cmd_str:
                if side_effect is not None:
                    side_effect(cmd)
                return ProcessResult(command=list(cmd), returncode=returncode, stdout=stdout)
        return ProcessResult(command=list(cmd), returncode=0)

    def joined(self):
        return [' '.join(c) for c in self.calls]

    def index_of(self, substring):
        for i, cmd_str in enumerate(self.joined()):
            if substring in cmd_str:
                return i
        return -1


@pytest.fixture
def runner():
    return FakeProcessRunner()


@pytest.fixture
def logger():
    return Mock(spec=Logger)


@pytest.fixture
def project(tmp_path):
    """Minimal project tree: docker/ compose files and a ROS 2 source tree."""
    docker = tmp_path / "docker"
    docker.mkdir()
    (docker / "Dockerfile").write_text("FROM ubuntu:22.04 AS voxl-dev\n")
    (docker / "docker-compose.voxl.yml").write_text("services:\n  voxl-runtime: {}\n")
    (docker / "docker-compose.workstation.yml").write_text("services:\n  dev: {}\n")
    src = tmp_path / "ros2_ws" / "src" / "test_pkg"
    src.mkdir(parents=True)
    (src / "package.xml").write_text("<package/>\n")
    return tmp_path


@pytest.fixture
def settings(project):
    return Settings(project_dir=Path(project))


@pytest.fixture
def toolkit(settings, runner, logger):
    return Toolkit.create(settings, runner, RealFileSystemService(), logger)


@pytest.fixture(autouse=True)
def clean_voxl_environment(monkeypatch):
    """Keep the developer's own VOXL_* settings out of the tests."""
    for key in ("VOXL_USER", "VOXL_HOST", "VOXL_DIR", "VOXL_IMAGE",
                "VOXL_SSH_PORT", "VOXL_PROJECT_DIR"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def export_writes():
    """Build a side_effect for the docker save | gzip pipeline that writes its redirect target."""
    def make(data=b"\x1f\x8b"):
        def write(cmd):
            Path(cmd[-1].rsplit("> ", 1)[1]).write_bytes(data)
        return write
    return make

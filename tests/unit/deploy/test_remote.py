"""Unit tests for RemoteController ssh commands."""
import pytest

from voxl_deploy.deploy import RemoteController, SSHSession
from voxl_deploy.deploy.exceptions import ExternalToolError


class TestRemoteController:

    def test_start(self, toolkit, runner):
        toolkit.remote.start()

        assert runner.calls == [
            ["ssh", "-t", "ubuntu@drone.local", "cd /voxl_docker && docker compose up -d"]
        ]

    def test_shell(self, toolkit, runner):
        toolkit.remote.shell()

        assert runner.calls == [
            ["ssh", "-t", "ubuntu@drone.local", "docker exec -it voxl-runtime bash"]
        ]

    def test_logs_follow_last_100_lines(self, toolkit, runner):
        toolkit.remote.logs()

        assert runner.calls == [
            ["ssh", "ubuntu@drone.local",
             "cd /voxl_docker && docker compose logs -f --tail=100"]
        ]

    def test_stop(self, toolkit, runner):
        toolkit.remote.stop()

        assert runner.calls == [
            ["ssh", "-t", "ubuntu@drone.local", "cd /voxl_docker && docker compose down"]
        ]

    def test_failure_is_not_retried(self, toolkit, runner):
        runner.on("compose up", returncode=255)

        with pytest.raises(ExternalToolError) as exc_info:
            toolkit.remote.start()

        assert exc_info.value.exit_code == 255
        assert len(runner.calls) == 1


class TestSSHSession:

    def test_custom_port_applies_to_ssh_and_rsync(self, settings):
        from dataclasses import replace

        session = SSHSession(replace(settings, ssh_port=2222, user="root", host="10.0.0.2"))

        assert session.ssh_cmd("uname -m") == ["ssh", "-p", "2222", "root@10.0.0.2", "uname -m"]
        rsync = session.rsync_cmd("deploy/", "/voxl_docker/", delete=True)
        assert rsync[rsync.index("-e") + 1] == "ssh -p 2222"
        assert rsync[-1] == "root@10.0.0.2:/voxl_docker/"

    def test_remote_dir_is_not_quoted(self, settings, runner, logger):
        from dataclasses import replace

        session = SSHSession(replace(settings, remote_dir="$HOME/voxl"))
        RemoteController(session, runner, logger).stop()

        assert runner.calls[0][-1] == "cd $HOME/voxl && docker compose down"

    def test_destination_comes_from_settings(self, settings):
        from dataclasses import replace

        session = SSHSession(replace(settings, user="root", host="10.0.0.2"))

        assert session.destination == "root@10.0.0.2"
        assert session.ssh_cmd("true") == ["ssh", "root@10.0.0.2", "true"]
        assert session.remote_path("/voxl_docker/") == "root@10.0.0.2:/voxl_docker/"

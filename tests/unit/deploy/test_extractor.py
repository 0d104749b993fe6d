"""Unit tests for ArtifactExtractor helper-container lifecycle."""
import pytest

from voxl_deploy.deploy.exceptions import ExternalToolError


def helper_name(runner):
    create = next(c for c in runner.calls if c[:2] == ["docker", "create"])
    return create[create.index("--name") + 1]


class TestExtractInstall:

    def test_creates_destination_and_copies_from_read_only_volume(self, toolkit, runner, project):
        result = toolkit.extractor.extract_install()

        dest = project / "deploy" / "install"
        assert dest.is_dir()
        assert result.destination == dest

        create = runner.calls[0]
        assert "cross-install:/src:ro" in create
        assert f"{dest}:/dest" in create
        assert "ubuntu:22.04" in create
        assert create[-3:] == ["bash", "-c", "cp -a /src/. /dest/"]

    def test_container_lifecycle_order(self, toolkit, runner):
        toolkit.extractor.extract_install()

        name = helper_name(runner)
        assert runner.calls[1] == ["docker", "start", "-a", name]
        assert runner.calls[2] == ["docker", "rm", "-f", name]

    def test_is_idempotent_on_existing_destination(self, toolkit, runner):
        toolkit.extractor.extract_install()
        toolkit.extractor.extract_install()

        assert len([c for c in runner.calls if c[:2] == ["docker", "start"]]) == 2

    def test_keeps_stale_files(self, toolkit, project):
        dest = project / "deploy" / "install"
        dest.mkdir(parents=True)
        (dest / "old_pkg").mkdir()

        result = toolkit.extractor.extract_install()

        assert (dest / "old_pkg").is_dir()
        assert result.entries == ["old_pkg"]
        assert not result.empty

    def test_helper_removed_when_copy_fails(self, toolkit, runner):
        runner.on("docker start", returncode=1)

        with pytest.raises(ExternalToolError):
            toolkit.extractor.extract_install()

        name = helper_name(runner)
        assert runner.calls[-1] == ["docker", "rm", "-f", name]

    def test_no_removal_when_create_fails(self, toolkit, runner):
        runner.on("docker create", returncode=125)

        with pytest.raises(ExternalToolError):
            toolkit.extractor.extract_install()

        assert runner.index_of("docker rm") == -1

    def test_empty_volume_warns_operator(self, toolkit, logger):
        result = toolkit.extractor.extract_install()

        assert result.empty
        logger.warning.assert_called_once()
        assert "build-ws-cross" in logger.warning.call_args[0][0]

    def test_populated_volume_lists_contents(self, toolkit, runner, project, logger):
        dest = project / "deploy" / "install"

        def copy(cmd):
            (dest / "test_pkg").mkdir()
            (dest / "setup.bash").write_text("")

        runner.on("docker start", side_effect=copy)

        result = toolkit.extractor.extract_install()

        assert result.entries == ["setup.bash", "test_pkg"]
        logger.warning.assert_not_called()

"""Unit tests for ImageBuilder: target selection, tags, QEMU setup and export."""
import pytest

from voxl_deploy.build import BuildTarget
from voxl_deploy.deploy.exceptions import ExternalToolError


class TestBuildTarget:

    @pytest.mark.parametrize("target, platform, stage, suffix", [
        (BuildTarget.NATIVE_DEV, "linux/amd64", "voxl-dev", "dev-amd64"),
        (BuildTarget.EMULATED_DEV, "linux/arm64", "voxl-dev", "dev-arm64"),
        (BuildTarget.EMULATED_RUNTIME, "linux/arm64", "voxl-runtime", "runtime-arm64"),
    ])
    def test_target_triples(self, target, platform, stage, suffix):
        assert target.platform == platform
        assert target.stage == stage
        assert target.suffix == suffix
        assert target.tag("voxl-drone") == f"voxl-drone:{suffix}"

    def test_tags_are_unique(self):
        tags = {t.tag("voxl-drone") for t in BuildTarget}
        assert len(tags) == 3


class TestBuild:

    @pytest.mark.parametrize("target", list(BuildTarget))
    def test_build_invokes_buildx_once_with_platform_and_stage(self, toolkit, runner, target):
        tag = toolkit.images.build(target)

        builds = [c for c in runner.calls if c[:3] == ["docker", "buildx", "build"]]
        assert len(builds) == 1
        cmd = builds[0]
        assert cmd[cmd.index("--platform") + 1] == target.platform
        assert cmd[cmd.index("--target") + 1] == target.stage
        assert cmd[cmd.index("-t") + 1] == tag == f"voxl-drone:{target.suffix}"
        assert "--load" in cmd
        assert cmd[-1] == str(toolkit.paths.docker_dir)
        assert cmd[cmd.index("-f") + 1] == str(toolkit.paths.dockerfile)

    def test_runtime_build_reports_image_size(self, toolkit, runner, logger):
        runner.on("docker images", stdout="412MB\n")

        toolkit.images.build(BuildTarget.EMULATED_RUNTIME)

        assert runner.calls[-1] == [
            "docker", "images", "voxl-drone:runtime-arm64", "--format", "{{.Size}}"
        ]
        messages = [c.args[0] for c in logger.info.call_args_list]
        assert "    412MB" in messages

    def test_dev_build_does_not_query_size(self, toolkit, runner):
        toolkit.images.build(BuildTarget.NATIVE_DEV)

        assert runner.index_of("docker images") == -1

    def test_build_failure_propagates_exit_status(self, toolkit, runner):
        runner.on("buildx build", returncode=17)

        with pytest.raises(ExternalToolError) as exc_info:
            toolkit.images.build(BuildTarget.EMULATED_DEV)

        assert exc_info.value.exit_code == 17
        assert "voxl-drone:dev-arm64" in str(exc_info.value)

    def test_custom_image_name(self, project, runner, logger):
        from pathlib import Path
        from voxl_deploy.commands.context import Toolkit
        from voxl_deploy.core import RealFileSystemService
        from voxl_deploy.utils.config import Settings

        settings = Settings(project_dir=Path(project), image_name="payload")
        toolkit = Toolkit.create(settings, runner, RealFileSystemService(), logger)

        assert toolkit.images.build(BuildTarget.NATIVE_DEV) == "payload:dev-amd64"


class TestSetupQemu:

    def test_creates_builder_and_bootstraps(self, toolkit, runner):
        toolkit.images.setup_qemu()

        assert runner.joined() == [
            "docker run --rm --privileged multiarch/qemu-user-static --reset -p yes",
            "docker buildx create --name multiarch --driver docker-container --use",
            "docker buildx inspect --bootstrap",
        ]

    def test_reuses_existing_builder(self, toolkit, runner):
        runner.on("buildx create", returncode=1)

        toolkit.images.setup_qemu()

        assert "docker buildx use multiarch" in runner.joined()
        assert runner.joined()[-1] == "docker buildx inspect --bootstrap"

    def test_qemu_registration_failure_stops_setup(self, toolkit, runner):
        runner.on("qemu-user-static", returncode=125)

        with pytest.raises(ExternalToolError):
            toolkit.images.setup_qemu()

        assert len(runner.calls) == 1


class TestExportRuntime:

    def test_pipes_docker_save_through_gzip(self, toolkit, runner, project, export_writes):
        archive = project / "voxl-runtime-arm64.tar.gz"
        runner.on("docker save", side_effect=export_writes(b"x" * 2048))

        path = toolkit.images.export_runtime()

        assert path == archive
        assert archive.read_bytes() == b"x" * 2048
        cmd = runner.calls[0]
        assert cmd[:3] == ["bash", "-o", "pipefail"]
        assert cmd[-1] == f"docker save voxl-drone:runtime-arm64 | gzip > {archive}.partial"
        assert not (project / "voxl-runtime-arm64.tar.gz.partial").exists()

    def test_export_failure_is_fatal(self, toolkit, runner):
        runner.on("docker save", returncode=1)

        with pytest.raises(ExternalToolError):
            toolkit.images.export_runtime()

    def test_failed_export_leaves_no_archive(self, toolkit, runner, project, export_writes):
        # gzip has already created (and partly written) its output when docker save fails
        runner.on("docker save", returncode=1, side_effect=export_writes(b"\x1f\x8b"))

        with pytest.raises(ExternalToolError):
            toolkit.images.export_runtime()

        assert not (project / "voxl-runtime-arm64.tar.gz").exists()
        assert not (project / "voxl-runtime-arm64.tar.gz.partial").exists()

    def test_failed_export_keeps_previous_archive(self, toolkit, runner, project, export_writes):
        archive = project / "voxl-runtime-arm64.tar.gz"
        archive.write_bytes(b"previous")
        runner.on("docker save", returncode=1, side_effect=export_writes(b"\x1f\x8b"))

        with pytest.raises(ExternalToolError):
            toolkit.images.export_runtime()

        assert archive.read_bytes() == b"previous"

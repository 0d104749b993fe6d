"""
Image Builder - docker buildx wrapper for the three image variants.

Images (all from docker/Dockerfile):
    dev-amd64       Full dev image (workstation, x86_64)
    dev-arm64       Full dev image (cross-build via QEMU, arm64)
    runtime-arm64   Slim runtime image (drone, arm64)
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from voxl_deploy.core.protocols import FileSystemService, Logger, ProcessRunner
from voxl_deploy.deploy.base import run_checked
from voxl_deploy.deploy.exceptions import ExternalToolError
from voxl_deploy.utils.config import Settings
from voxl_deploy.utils.paths import ProjectPaths, format_size

QEMU_IMAGE = "multiarch/qemu-user-static"
BUILDX_BUILDER = "multiarch"


@dataclass(frozen=True)
class TargetSpec:
    platform: str
    stage: str
    suffix: str
    description: str


class BuildTarget(Enum):
    """Named image configurations; value is the (platform, stage, suffix) triple."""

    NATIVE_DEV = TargetSpec(
        "linux/amd64", "voxl-dev", "dev-amd64",
        "dev image for x86_64",
    )
    EMULATED_DEV = TargetSpec(
        "linux/arm64", "voxl-dev", "dev-arm64",
        "dev image for arm64 via QEMU",
    )
    EMULATED_RUNTIME = TargetSpec(
        "linux/arm64", "voxl-runtime", "runtime-arm64",
        "slim runtime image for arm64",
    )

    @property
    def platform(self) -> str:
        return self.value.platform

    @property
    def stage(self) -> str:
        return self.value.stage

    @property
    def suffix(self) -> str:
        return self.value.suffix

    def tag(self, image_name: str) -> str:
        return f"{image_name}:{self.suffix}"


class ImageBuilder:
    """Builds, inspects and exports images with the local Docker engine."""

    def __init__(
        self,
        settings: Settings,
        paths: ProjectPaths,
        runner: ProcessRunner,
        filesystem: FileSystemService,
        logger: Logger,
    ):
        self.settings = settings
        self.paths = paths
        self.runner = runner
        self.fs = filesystem
        self.log = logger

    def tag_for(self, target: BuildTarget) -> str:
        return target.tag(self.settings.image_name)

    def build_cmd(self, target: BuildTarget) -> list:
        return [
            "docker", "buildx", "build",
            "--platform", target.platform,
            "--target", target.stage,
            "-f", str(self.paths.dockerfile),
            "-t", self.tag_for(target),
            "--load",
            str(self.paths.docker_dir),
        ]

    def build(self, target: BuildTarget) -> str:
        """
        Build one variant and load it into the local image store.

        Returns:
            The image tag, {image_name}:{suffix}

        Raises:
            ExternalToolError: If docker buildx fails
        """
        tag = self.tag_for(target)
        self.log.info(f"==> Building {target.value.description} ({target.stage})...")
        run_checked(self.runner, self.build_cmd(target), step=f"build {tag}")
        self.log.info(f"==> Built: {tag}")

        if target is BuildTarget.EMULATED_RUNTIME:
            self.log.info("    Image size:")
            self.log.info(f"    {self.image_size(tag)}")

        return tag

    def image_size(self, tag: str) -> str:
        result = run_checked(
            self.runner,
            ["docker", "images", tag, "--format", "{{.Size}}"],
            step="docker images",
            capture_output=True,
        )
        return result.stdout.strip() or "(unknown)"

    def setup_qemu(self) -> None:
        """Register QEMU binfmt handlers and select a multi-arch buildx builder."""
        self.log.info("==> Installing QEMU user-static for multi-arch support...")
        run_checked(
            self.runner,
            ["docker", "run", "--rm", "--privileged", QEMU_IMAGE, "--reset", "-p", "yes"],
            step="qemu-user-static",
        )

        self.log.info("==> Creating buildx builder...")
        created = self.runner.run(
            ["docker", "buildx", "create", "--name", BUILDX_BUILDER,
             "--driver", "docker-container", "--use"],
            capture_output=True,
        )
        if created.returncode != 0:
            # Builder already exists from an earlier run
            run_checked(self.runner, ["docker", "buildx", "use", BUILDX_BUILDER],
                        step="buildx use")

        run_checked(self.runner, ["docker", "buildx", "inspect", "--bootstrap"],
                    step="buildx inspect")
        self.log.info("")
        self.log.info("==> Done. You can now build arm64 images on this x86 machine.")

    def export_runtime(self) -> Path:
        """
        Serialize the runtime image to a gzip archive at the project root.

        Returns:
            Path to the archive

        Raises:
            ExternalToolError: If docker save or gzip fails
        """
        outfile = self.paths.runtime_archive
        tag = self.tag_for(BuildTarget.EMULATED_RUNTIME)
        self.log.info(f"==> Exporting runtime image to {outfile}...")

        # gzip creates its output before docker save runs; only a complete
        # archive may appear at outfile
        partial = outfile.with_name(outfile.name + ".partial")
        pipeline = f"docker save {shlex.quote(tag)} | gzip > {shlex.quote(str(partial))}"
        try:
            run_checked(self.runner, ["bash", "-o", "pipefail", "-c", pipeline],
                        step="export-runtime")
        except ExternalToolError:
            if self.fs.exists(partial):
                self.fs.remove(partial)
            raise
        self.fs.rename(partial, outfile)

        size = format_size(self.fs.size(outfile))
        self.log.info(f"==> Saved: {outfile} ({size})")
        return outfile

"""
ArtifactExtractor - Copy cross-built install/ out of the Docker volume.

The cross-install volume is only reachable from inside a container, so a
throwaway helper container mounts it read-only next to the host destination
and runs cp -a. The copy is additive: stale files from an earlier extraction
stay in place.
"""

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from voxl_deploy.core.protocols import FileSystemService, Logger, ProcessRunner
from .base import ExtractionResult, run_checked

ARTIFACT_VOLUME = "cross-install"
HELPER_IMAGE = "ubuntu:22.04"
COPY_COMMAND = "cp -a /src/. /dest/"


class ArtifactExtractor:
    """Extracts the arm64 install tree into deploy/install/."""

    def __init__(
        self,
        destination: Path,
        runner: ProcessRunner,
        filesystem: FileSystemService,
        logger: Logger,
        volume: str = ARTIFACT_VOLUME,
        helper_image: str = HELPER_IMAGE,
    ):
        self.destination = destination
        self.runner = runner
        self.fs = filesystem
        self.log = logger
        self.volume = volume
        self.helper_image = helper_image

    @contextmanager
    def helper_container(self) -> Iterator[str]:
        """
        Create the helper container and guarantee its removal.

        Yields:
            Container name, ready for docker start -a
        """
        name = f"voxl-extract-{uuid.uuid4().hex[:12]}"
        run_checked(
            self.runner,
            [
                "docker", "create",
                "--name", name,
                "-v", f"{self.volume}:/src:ro",
                "-v", f"{self.destination}:/dest",
                self.helper_image,
                "bash", "-c", COPY_COMMAND,
            ],
            step="docker create",
            capture_output=True,
        )
        try:
            yield name
        finally:
            removed = self.runner.run(["docker", "rm", "-f", name], capture_output=True)
            if removed.returncode != 0:
                self.log.warning(f"could not remove helper container {name}: {removed.stderr.strip()}")

    def extract_install(self) -> ExtractionResult:
        """
        Copy the volume contents into the destination directory.

        Returns:
            ExtractionResult listing what is now in the destination

        Raises:
            ExternalToolError: If the helper container cannot be created or the copy fails
        """
        self.fs.mkdir(self.destination, parents=True, exist_ok=True)

        self.log.info("==> Extracting arm64 install/ from cross-build volume...")
        with self.helper_container() as name:
            run_checked(self.runner, ["docker", "start", "-a", name], step="extract-install copy")

        entries = sorted(p.name for p in self.fs.iterdir(self.destination))
        self.log.info(f"==> Extracted to {self.destination}/")
        self.log.info("    Contents:")
        if entries:
            for entry in entries:
                self.log.info(f"    {entry}")
        else:
            self.log.warning("install/ is empty. Have you run 'build-ws-cross'?")

        return ExtractionResult(destination=self.destination, entries=entries)

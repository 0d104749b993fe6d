"""Compound operations: deploy-image (with prerequisite resolution) and deploy-all

Every chain is strictly sequential and fail-fast: the first ExternalToolError propagates
and nothing after it runs.
"""
from voxl_deploy.commands import build, deploy
from voxl_deploy.commands.context import Toolkit
from voxl_deploy.deploy import MissingPrerequisite, PrerequisiteError
from voxl_deploy.deploy.transport import RUNTIME_ARCHIVE

# Prerequisite name -> operations that produce it, in order
PRODUCERS = {
    RUNTIME_ARCHIVE: (build.build_runtime, deploy.export_runtime),
}


def resolve_prerequisite(toolkit: Toolkit, missing: MissingPrerequisite) -> None:
    """Run the producer chain for one missing prerequisite exactly once."""
    producers = PRODUCERS.get(missing.name)
    if producers is None:
        raise PrerequisiteError(f"No producer registered for prerequisite '{missing.name}'")

    toolkit.log.info(
        f"==> {missing.path.name} not found. Running {' + '.join(missing.resolution)} first..."
    )
    for step in producers:
        step(toolkit)


def deploy_image(toolkit: Toolkit) -> None:
    """Transfer and load the runtime image, building and exporting it first if needed."""
    missing = toolkit.transporter.check_prerequisites()
    if missing is not None:
        resolve_prerequisite(toolkit, missing)
    toolkit.transporter.deploy_image()


# Full build + deploy pipeline
DEPLOY_ALL_STEPS = (
    build.build_runtime,
    deploy.export_runtime,
    deploy.deploy,
    deploy_image,
)


def deploy_all(toolkit: Toolkit) -> None:
    for step in DEPLOY_ALL_STEPS:
        step(toolkit)

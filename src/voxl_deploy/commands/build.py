"""Image build commands: setup-qemu, build-dev, build-cross, build-runtime, build-all"""
from voxl_deploy.build import BuildTarget
from voxl_deploy.commands.context import Toolkit


def setup_qemu(toolkit: Toolkit) -> None:
    toolkit.images.setup_qemu()


def build_dev(toolkit: Toolkit) -> None:
    toolkit.images.build(BuildTarget.NATIVE_DEV)


def build_cross(toolkit: Toolkit) -> None:
    toolkit.images.build(BuildTarget.EMULATED_DEV)


def build_runtime(toolkit: Toolkit) -> None:
    toolkit.images.build(BuildTarget.EMULATED_RUNTIME)


def build_all(toolkit: Toolkit) -> None:
    """All three variants in sequence; stops at the first failed build."""
    for target in (BuildTarget.NATIVE_DEV, BuildTarget.EMULATED_DEV, BuildTarget.EMULATED_RUNTIME):
        toolkit.images.build(target)

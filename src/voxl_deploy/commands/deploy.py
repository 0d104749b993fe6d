"""Deploy commands: export-runtime, extract-install, deploy"""
from voxl_deploy.commands.context import Toolkit


def export_runtime(toolkit: Toolkit) -> None:
    toolkit.images.export_runtime()


def extract_install(toolkit: Toolkit) -> None:
    toolkit.extractor.extract_install()


def deploy(toolkit: Toolkit) -> None:
    toolkit.synchronizer.deploy()

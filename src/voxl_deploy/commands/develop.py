"""Workstation commands: dev, cross, build-ws, build-ws-cross"""
from voxl_deploy.build import WorkspaceTarget
from voxl_deploy.commands.context import Toolkit


def dev(toolkit: Toolkit) -> None:
    toolkit.workspace.open_shell(WorkspaceTarget.NATIVE)


def cross(toolkit: Toolkit) -> None:
    toolkit.workspace.open_shell(WorkspaceTarget.EMULATED)


def build_ws(toolkit: Toolkit) -> None:
    toolkit.workspace.build_workspace(WorkspaceTarget.NATIVE)


def build_ws_cross(toolkit: Toolkit) -> None:
    toolkit.workspace.build_workspace(WorkspaceTarget.EMULATED)

"""Drone operations over SSH: voxl-start, voxl-shell, voxl-logs, voxl-stop"""
from voxl_deploy.commands.context import Toolkit


def voxl_start(toolkit: Toolkit) -> None:
    toolkit.remote.start()


def voxl_shell(toolkit: Toolkit) -> None:
    toolkit.remote.shell()


def voxl_logs(toolkit: Toolkit) -> None:
    toolkit.remote.logs()


def voxl_stop(toolkit: Toolkit) -> None:
    toolkit.remote.stop()

"""Command table and help text: one token -> one handler"""
from collections import namedtuple
from typing import Callable, Dict, Optional

from voxl_deploy.commands import build, deploy, develop, drone, pipeline
from voxl_deploy.commands.context import Toolkit

Command = namedtuple("Command", ["name", "handler", "help", "section"])

SECTIONS = (
    "HELP",
    "ONE-TIME SETUP",
    "BUILD IMAGES",
    "DEVELOPMENT (workstation)",
    "DEPLOY TO DRONE",
    "DRONE OPERATIONS (via SSH)",
    "COMPOUND",
)

_TABLE = (
    Command("help", None, "Display all commands", "HELP"),
    Command("setup-qemu", build.setup_qemu,
            "Install QEMU user-static for arm64 emulation (run once)", "ONE-TIME SETUP"),
    Command("build-dev", build.build_dev,
            "Build the full dev image (native x86_64)", "BUILD IMAGES"),
    Command("build-cross", build.build_cross,
            "Build the full dev image for arm64 via QEMU", "BUILD IMAGES"),
    Command("build-runtime", build.build_runtime,
            "Build the slim runtime image for arm64", "BUILD IMAGES"),
    Command("dev", develop.dev,
            "Open a shell in the native x86 dev container", "DEVELOPMENT (workstation)"),
    Command("cross", develop.cross,
            "Open a shell in the arm64 QEMU dev container", "DEVELOPMENT (workstation)"),
    Command("build-ws", develop.build_ws,
            "Run colcon build in the native dev container", "DEVELOPMENT (workstation)"),
    Command("build-ws-cross", develop.build_ws_cross,
            "Run colcon build in the arm64 container (produces arm64 binaries)",
            "DEVELOPMENT (workstation)"),
    Command("export-runtime", deploy.export_runtime,
            "Save the slim runtime image to a .tar.gz file", "DEPLOY TO DRONE"),
    Command("extract-install", deploy.extract_install,
            "Copy cross-built arm64 install/ out of the Docker volume", "DEPLOY TO DRONE"),
    Command("deploy", deploy.deploy,
            "Rsync source + install + compose to drone", "DEPLOY TO DRONE"),
    Command("deploy-image", pipeline.deploy_image,
            "Transfer the runtime image .tar.gz to drone and load it", "DEPLOY TO DRONE"),
    Command("voxl-start", drone.voxl_start,
            "Start the voxl-drone container", "DRONE OPERATIONS (via SSH)"),
    Command("voxl-shell", drone.voxl_shell,
            "Attach to the running voxl-drone container", "DRONE OPERATIONS (via SSH)"),
    Command("voxl-logs", drone.voxl_logs,
            "Show voxl-drone container logs", "DRONE OPERATIONS (via SSH)"),
    Command("voxl-stop", drone.voxl_stop,
            "Stop the voxl-drone container", "DRONE OPERATIONS (via SSH)"),
    Command("build-all", build.build_all,
            "Build all images (dev, cross, runtime)", "COMPOUND"),
    Command("deploy-all", pipeline.deploy_all,
            "Full build + deploy pipeline", "COMPOUND"),
)

COMMANDS: Dict[str, Command] = {command.name: command for command in _TABLE}


def help_text(prog: str = "voxl-deploy") -> str:
    """Static command menu."""
    lines = [f"Help: {prog} <command>", ""]
    for section in SECTIONS:
        lines.append(f"---- {section} ----")
        for command in _TABLE:
            if command.section == section:
                lines.append(f"  {command.name:<20} {command.help}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def lookup(token: Optional[str]) -> Optional[Callable[[Toolkit], None]]:
    """Handler for a token, or None for help / unknown / missing tokens."""
    if not token or token not in COMMANDS:
        return None
    return COMMANDS[token].handler


def dispatch(token: Optional[str], toolkit: Toolkit) -> int:
    """
    Run the operation (or chain) named by token.

    Returns:
        0 on success; unknown tokens print help and also return 0

    Raises:
        OrchestratorError: First failure of any invoked external process
    """
    handler = lookup(token)
    if handler is None:
        print(help_text(), end="")
        return 0
    handler(toolkit)
    return 0

"""
voxl-deploy - Build and deploy orchestrator for the VOXL drone payload

A command-line interface for multi-arch Docker image builds, QEMU-emulated
colcon builds, artifact extraction and rsync/ssh deployment to the drone.
"""
import argparse
import sys

__version__ = "1.0.0"


def main(argv=None):
    """Main CLI entry point"""
    from voxl_deploy.core import (
        ConsoleLogger,
        FileConfigLoader,
        RealFileSystemService,
        SubprocessRunner,
        SystemEnvironmentProvider,
    )
    from voxl_deploy.commands.context import Toolkit
    from voxl_deploy.deploy.exceptions import ConfigurationError, OrchestratorError
    from voxl_deploy.dispatcher import dispatch, help_text, lookup
    from voxl_deploy.utils.config import resolve_settings

    parser = argparse.ArgumentParser(
        prog='voxl-deploy',
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description='Multi-arch build, cross-compile and deploy helper for the VOXL drone',
    )
    parser.add_argument('command', nargs='?', help='Command to execute')
    args, _ = parser.parse_known_args(argv)

    if lookup(args.command) is None:
        print(help_text(parser.prog), end="")
        sys.exit(0)

    logger = ConsoleLogger()
    filesystem = RealFileSystemService()

    try:
        settings = resolve_settings(
            env_provider=SystemEnvironmentProvider(),
            filesystem=filesystem,
            config_loader=FileConfigLoader(filesystem),
        )
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    toolkit = Toolkit.create(settings, SubprocessRunner(), filesystem, logger)

    # Dispatch to command handler
    try:
        sys.exit(dispatch(args.command, toolkit))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except OrchestratorError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except OSError as e:
        # Host-side file operations (missing compose file, unwritable deploy/)
        logger.error(str(e))
        sys.exit(1)

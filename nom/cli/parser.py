"""
nom CLI argument parser.

This module implements the command-line interface for nom using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("nom")
except Exception:
    __version__ = "1.0.0"

logger = logging.getLogger(__name__)


class CLI:
    """nom command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="nom",
            description="Management program for node.js versions",
            epilog='Use "nom COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument("--version", action="version", version=f"nom {__version__}")
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: <install-root>/config.yaml)",
        )
        parser.add_argument(
            "--install-root",
            type=Path,
            metavar="PATH",
            help="Directory to install versions into (default: ~/.nom)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a node.js version",
            description="Download and install a specified node.js version",
        )
        parser.add_argument(
            "node_version",
            nargs="?",
            metavar="NODE_VERSION",
            help="Version to install (e.g., v18.19.0)",
        )
        parser.add_argument(
            "--version",
            "-v",
            dest="version_option",
            metavar="NODE_VERSION",
            help="Version to install, as an alternative to the positional argument",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Reinstall even if the version is already installed",
        )
        parser.add_argument(
            "--platform",
            metavar="ID",
            help="Artifact platform to download (e.g., linux-x64, darwin-arm64)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "install": "nom.cli.commands.install",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()

"""
Install command implementation.

Downloads a node.js version and unpacks it into the install root. This is the
only place where pipeline errors become user-visible messages and exit codes.
"""

import logging

from nom.core.config import load_config
from nom.core.download import DownloadProgress
from nom.core.exceptions import NomError
from nom.core.pipeline import install_version

logger = logging.getLogger(__name__)

# Log download progress every N percent
PROGRESS_STEP = 10


def _progress_logger():
    """Build a progress callback that logs at most once per PROGRESS_STEP percent."""
    last_reported = -PROGRESS_STEP

    def on_progress(progress: DownloadProgress):
        nonlocal last_reported
        if progress.percentage - last_reported >= PROGRESS_STEP:
            last_reported = progress.percentage
            logger.debug(f"  {progress}")

    return on_progress


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, the error's exit code on failure)
    """
    logger.debug(f"Arguments: {args}")

    node_version = args.node_version or args.version_option
    if not node_version:
        print("No version supplied. Usage: nom install NODE_VERSION (e.g. v18.19.0)")
        return 0

    try:
        config = load_config(config_file=args.config, install_root=args.install_root)
        if args.platform:
            config.platform = args.platform

        result = install_version(
            node_version,
            config,
            force=args.force,
            progress_callback=_progress_logger(),
        )
    except NomError as e:
        logger.error(f"Error: {e}")
        return e.exit_code

    if result.was_cached:
        print(f"node.js {result.version} is already installed at {result.install_path}")
    else:
        print(f"Installed node.js {result.version} at {result.install_path}")
    return 0

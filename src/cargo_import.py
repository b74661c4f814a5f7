"""cargo-import - build a test registry document from a crates.io index mirror.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from errors import CargoImportError, DiscoveryError
from output.serializer import write_registry
from registry.aggregate import build_registry
from registry.cargo.discovery import discover_index_files
from versioning.models import MergeStrategy, OutputFormat


def resolve_index_pattern(args):
    """Index glob pattern: CLI flag, then environment, then the built-in default."""
    if getattr(args, "INDEX_PATTERN", None):
        return args.INDEX_PATTERN
    env_pattern = os.environ.get(Constants.ENV_INDEX_PATTERN)
    if env_pattern and env_pattern.strip():
        return env_pattern.strip()
    return None


def run(args, stream=None):
    """Discover, parse, merge and write the registry.

    Raises:
        CargoImportError: Any discovery, parse or grammar failure.
    """
    output_format = OutputFormat.JSON if args.JSON else OutputFormat.MSGPACK
    strategy = MergeStrategy(args.MERGE_STRATEGY)

    files = discover_index_files(resolve_index_pattern(args))
    registry = build_registry(files, strategy)
    write_registry(registry, output_format, stream)
    return registry


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    try:
        configure_logging(getattr(args, "LOG_FILE", None))
    except OSError as e:
        logging.error("Log file couldn't be opened: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        run(args)
    except DiscoveryError as e:
        logging.error("%s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except CargoImportError as e:
        logging.error("%s, aborting", e)
        sys.exit(ExitCodes.PARSE_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()

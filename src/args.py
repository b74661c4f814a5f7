"""Argument parsing functionality for cargo-import."""

import argparse
from constants import Constants
from versioning.models import MergeStrategy

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cargo-import",
        description=(
            "Convert a local crates.io index mirror into a test registry document. "
            "Output is msgpack on stdout; --json is the only output-mode switch. "
            "The remaining options only configure input, merging and logging."
        ),
        add_help=True,
    )

    parser.add_argument("--json",
                        dest="JSON",
                        help="Write indented JSON instead of msgpack.",
                        action="store_true")
    parser.add_argument("--index",
                        dest="INDEX_PATTERN",
                        help=(
                            "Glob pattern matching index files "
                            f"(default: ${Constants.ENV_INDEX_PATTERN} or ~/.cargo/registry/index/*/*/*/*)"
                        ),
                        action="store",
                        type=str)
    parser.add_argument("--merge-strategy",
                        dest="MERGE_STRATEGY",
                        help="How packages repeated across index files are merged (default: replace)",
                        action="store",
                        type=str.lower,
                        choices=[s.value for s in MergeStrategy],
                        default=MergeStrategy.REPLACE.value)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)

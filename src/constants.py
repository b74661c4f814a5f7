"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    PARSE_ERROR = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Local crates.io index mirror: ~/.cargo/registry/index/<source>/<a>/<b>/<crate>
    INDEX_ROOT_PARTS = (".cargo", "registry", "index")
    INDEX_GLOB_DEPTH = 4
    INDEX_CONFIG_FILE = "config.json"
    NAME_NAMESPACE = "test/"
    DEPENDENCY_KIND_DEFAULT = "normal"
    JSON_INDENT = 2
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVEL_DEFAULT = "WARNING"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_INDEX_PATTERN = "CARGO_IMPORT_INDEX"
    ENV_LOG_LEVEL = "CARGO_IMPORT_LOG_LEVEL"

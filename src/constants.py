"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    ARCHIVE_PATTERN = "**/*.jar"
    POM_PREFIX = "META-INF"
    POM_SUFFIX = "pom.xml"
    MANIFEST_PATH = "META-INF/MANIFEST.MF"
    MANIFEST_NAME_ATTR = "Bundle-SymbolicName"
    MANIFEST_VERSION_ATTR = "Implementation-Version"

    # Resolution tunables (overridable from config file and CLI)
    MAX_WORKERS = 1
    ARCHIVE_TIMEOUT_SEC = None

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "ANTDEPS_LOG_LEVEL"

"""Argument parsing functionality for antdeps."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="antdeps",
        description=(
            "antdeps - Resolve pre-built jars in an Ant project to Maven identities"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="FROM_SRC",
                        help="Project directory to scan recursively for *.jar files",
                        action="store",
                        type=str,
                        required=True)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output JSON file (default: stdout)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-j", "--workers",
                        dest="WORKERS",
                        help="Number of archives resolved in parallel (default: 1)",
                        action="store",
                        type=int)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="Per-archive resolution budget in seconds",
                        action="store",
                        type=float)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)

"""antdeps - Ant project jar resolver

Scans a project directory for pre-built jars, resolves each one to a Maven
identity and writes the resulting dependency graph as JSON.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, load_config, apply_config, apply_cli_overrides
from buildtools.ant import ArchiveScanError, build_graph


def export_json(graph, path=None):
    """Exports the dependency graph as JSON.

    Args:
        graph (DependencyGraph): Graph to export.
        path (str, optional): File path; stdout when omitted.
    """
    data = graph.to_dict()
    if not path:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=4)
        sys.stdout.write("\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _setup_logging(args):
    """Configure logging from CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.LOG_LEVEL_ENV] = str(args.LOG_LEVEL).upper()
    configure_logging()
    if getattr(args, "QUIET", False) and str(args.LOG_LEVEL).upper() != "DEBUG":
        logging.getLogger().setLevel(logging.ERROR)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logging.info("Logging to file: %s", log_file)


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        apply_config(load_config(args.CONFIG))
        apply_cli_overrides(args)
    except ConfigError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    try:
        graph = build_graph(args.FROM_SRC)
    except ArchiveScanError as e:
        logging.error("Couldn't scan given path, error: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    logging.info("Resolved %d jar(s).", len(graph.direct))

    if args.OUTPUT:
        export_json(graph, args.OUTPUT)
    elif not args.QUIET:
        export_json(graph)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="main",
                outcome="success"
            )
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()

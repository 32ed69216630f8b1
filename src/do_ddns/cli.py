"""
CLI entry point for DO DDNS Updater.

This module provides the command-line interface for starting the agent.
"""

from __future__ import annotations

import logging
import sys

from do_ddns.config import ensure_config, options_from_args, parse_args
from do_ddns.logging_config import LOGGER_NAME, setup_logging
from do_ddns.updater import Updater

logger = logging.getLogger(LOGGER_NAME)


def main() -> None:
    """
    Start the DO DDNS Updater agent.

    Parse command-line arguments, set up logging and run the update loop.
    With "--once", run a single cycle and exit with its outcome.
    """
    options = options_from_args(parse_args())
    setup_logging(options.logging)

    ensure_config(options.env_file)
    updater = Updater(env_path=options.env_file)

    if options.once:
        result = updater.run_once()
        sys.exit(0 if result.success else 1)

    logger.info('DO DDNS Updater starting (config: "%s").', options.env_file)
    try:
        updater.run_forever()
    except KeyboardInterrupt:
        logger.info("DO DDNS Updater shutting down.")


if __name__ == "__main__":
    main()

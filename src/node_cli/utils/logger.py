"""
Process-wide logging and crash reporting setup.

The filter pattern follows the familiar ``level,target=level`` syntax:
a bare level applies to the root logger, ``target=level`` pairs tune a
single named logger.

    init_logger("info,sync=debug,db=warning")
"""

import logging
import sys
from typing import Dict, Optional, Tuple

from node_cli.exceptions import LoggerInitError

DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s  %(message)s"

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}

logger = logging.getLogger(__name__)


def _parse_level(raw: str, pattern: str) -> int:
    level = LOG_LEVELS.get(raw.strip().lower())
    if level is None:
        raise LoggerInitError(
            f"Invalid log level '{raw}' in filter '{pattern}'. "
            f"Valid levels: {', '.join(sorted(LOG_LEVELS))}"
        )
    return level


def parse_log_filters(pattern: Optional[str]) -> Tuple[int, Dict[str, int]]:
    """
    Parse a log filter pattern.

    Args:
        pattern: Comma-separated directives, e.g. ``"info,sync=debug"``

    Returns:
        Tuple of (root level, mapping of logger name to level)

    Raises:
        LoggerInitError: On an unknown level or an empty target name
    """
    root_level = DEFAULT_LOG_LEVEL
    targets: Dict[str, int] = {}

    if not pattern:
        return root_level, targets

    for directive in pattern.split(","):
        directive = directive.strip()
        if not directive:
            continue
        if "=" in directive:
            target, _, raw_level = directive.partition("=")
            target = target.strip()
            if not target:
                raise LoggerInitError(
                    f"Empty log target in filter '{pattern}'"
                )
            targets[target] = _parse_level(raw_level, pattern)
        else:
            root_level = _parse_level(directive, pattern)

    return root_level, targets


def init_logger(pattern: Optional[str] = None) -> None:
    """Configure the root logger and per-target levels from a filter pattern."""
    root_level, targets = parse_log_filters(pattern)

    logging.basicConfig(level=root_level, format=LOG_FORMAT, force=True)
    for target, level in targets.items():
        logging.getLogger(target).setLevel(level)

    logger.debug("Logging initialised (root=%s, targets=%s)", root_level, targets)


def install_crash_handler(support_url: str, version: str) -> None:
    """
    Install a ``sys.excepthook`` that asks the user to report unexpected crashes.

    The previous hook still runs, so the traceback is printed as usual.
    """
    previous_hook = sys.excepthook

    def _crash_hook(exc_type, exc_value, exc_traceback):
        if not issubclass(exc_type, KeyboardInterrupt):
            sys.stderr.write(
                "\n====================\n\n"
                f"Version: {version}\n\n"
                "This is a bug. Please report it at:\n\n"
                f"\t{support_url}\n\n"
            )
        previous_hook(exc_type, exc_value, exc_traceback)

    sys.excepthook = _crash_hook

"""
Command-line utilities shared by the deephem commands.
"""

import logging
from typing import Any, Dict

from ..errors import InvalidArgument
from ..logging import set_log_level


def configure_logging(args: Dict[str, Any]) -> None:
    """
    Configure logging based on command line flags.

    Args:
        args: Mapping with "quiet", "debug" and "verbose" entries
    """
    quiet = args.get("quiet", False)
    debug = args.get("debug", False)
    verbosity = args.get("verbose", 0)

    if quiet:
        log_level = logging.ERROR
    elif debug:
        log_level = logging.DEBUG
    else:
        # 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG
        if verbosity == 0:
            log_level = logging.WARNING
        elif verbosity == 1:
            log_level = logging.INFO
        else:
            log_level = logging.DEBUG

    set_log_level(log_level)
    logging.getLogger("deephem").debug(
        f"Logging configured with level {logging.getLevelName(log_level)}"
    )


def parse_julian_date(text: str) -> float:
    """Parse a Julian Date given on the command line.

    Raises:
        InvalidArgument: If the text is not a number
    """
    try:
        return float(text.strip("' "))
    except ValueError:
        raise InvalidArgument(f"invalid Julian date {text!r}")


def parse_resolution(text: str) -> int:
    """Parse a sample count, accepting base prefixes like the item index.

    Raises:
        InvalidArgument: If the text is not a positive integer
    """
    try:
        resolution = int(text.strip(), 0)
    except ValueError:
        raise InvalidArgument(f"invalid resolution {text!r}")
    if resolution <= 0:
        raise InvalidArgument(f"resolution {resolution} must be positive")
    return resolution

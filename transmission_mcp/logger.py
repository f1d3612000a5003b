import sys

from loguru import logger

from .config import Config


VERBOSE = Config.VERBOSE
LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION


# stdout carries the MCP stdio transport, so console output goes to stderr
logger.remove()
_console_sink = logger.add(
    sys.stderr,
    level=LOG_LEVEL if VERBOSE else "WARNING",
)

# Log to a file
if LOG_PATH:
    logger.add(
        LOG_PATH,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level=LOG_LEVEL,
    )


def set_console_level(level):
    """Replace the stderr sink with one at the given level."""
    global _console_sink
    logger.remove(_console_sink)
    _console_sink = logger.add(sys.stderr, level=level)

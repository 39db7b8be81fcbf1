from loguru import logger

from .config import Config


VERBOSE = Config.VERBOSE
LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION

PACKAGE = "torrent_rpc"


# Log to a file
if LOG_PATH:
    logger.add(
        LOG_PATH,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level=LOG_LEVEL,
    )

# Library records stay silent unless asked for
if VERBOSE or LOG_PATH:
    logger.enable(PACKAGE)
else:
    logger.disable(PACKAGE)


def set_verbose(verbose=True):
    """Toggle this package's records on loguru's configured sinks."""
    if verbose:
        logger.enable(PACKAGE)
    else:
        logger.disable(PACKAGE)

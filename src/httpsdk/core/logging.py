import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """
    Route SDK logs to STDOUT. Handlers installed by an earlier call are removed
    first so repeated calls do not duplicate every line.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    ))

    logger.addHandler(handler)


def set_aiohttp_logging_level(level: int = logging.WARNING) -> None:
    """Lowers the aiohttp client loggers to avoid per-connection noise in STDIO"""
    logging.getLogger("aiohttp.client").setLevel(level)
    logging.getLogger("aiohttp.internal").setLevel(level)

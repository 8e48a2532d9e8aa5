import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s > %(message)s"

__all__ = ["setup_logger", "CompassHandler"]


class CompassHandler(logging.StreamHandler):
    """stderr handler installed by `setup_logger`."""


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the `compass` logger hierarchy.

    Log records go to stderr so that stdout only ever carries response bodies.
    Calling this again replaces the handler, so it always writes to the
    current stderr.
    """
    logger = logging.getLogger("compass")
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if isinstance(h, CompassHandler)]:
        logger.removeHandler(handler)

    handler = CompassHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger

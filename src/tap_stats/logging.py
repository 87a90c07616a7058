import logging
import sys
import json


def get_logger(name: str = __name__) -> logging.Logger:
    """Return a JSON-configured logger writing to stderr.

    Stdout is left to report output. Handlers are attached once per
    logger name so repeated calls do not duplicate lines.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stderr)
    fmt = json.dumps(
        {
            "ts": "%(asctime)s",
            "lvl": "%(levelname)s",
            "mod": "%(name)s",
            "msg": "%(message)s",
        }
    )
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger

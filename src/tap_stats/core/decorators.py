"""Common decorators for error handling and performance logging."""

from __future__ import annotations

import time
from functools import wraps

from ..logging import get_logger
from ..exceptions import ReportError, TapStatsError


logger = get_logger(__name__)


def handle_report_errors(func):
    """Wrap report computations to raise :class:`ReportError` on failure.

    ``tap_stats`` exceptions such as :class:`~tap_stats.exceptions.FilterError`
    pass through untouched so callers can tell them apart.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TapStatsError:
            raise
        except Exception as exc:
            logger.error("Report error in %s: %s", func.__name__, exc, exc_info=True)
            raise ReportError(str(exc), context=func.__qualname__) from exc

    return wrapper


def log_performance(func):
    """Log execution duration for ``func``."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.info("%s call failed after %.3f seconds", func.__name__, duration)
            raise
        duration = time.perf_counter() - start_time
        logger.info("%s executed in %.3f seconds", func.__name__, duration)
        return result

    return wrapper

"""Decorators shared by the transfer service."""
import functools
import logging
import time
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_listing(func: F) -> F:
    """Log how many files a listing returned and how long the store took.

    Failures are logged with the elapsed time and re-raised unchanged.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            entries = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Listing files failed after {elapsed_ms:.1f}ms: {e}")
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Listed {len(entries)} files in {elapsed_ms:.1f}ms")
        return entries
    return cast(F, wrapper)

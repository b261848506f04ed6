"""Slow-operation detection.

Wrap a batch operation with :func:`slow_operation_logger` to get a warning
record whenever a single call exceeds a wall-clock threshold:

    >>> @slow_operation_logger(threshold_seconds=0.5)
    ... def summarize_everything(source):
    ...     ...
"""

import functools
import logging
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _sized(value: Any) -> int | None:
    try:
        return len(value)
    except TypeError:
        return None


def slow_operation_logger(
    threshold_seconds: float | None = None,
    operation_name: str | None = None,
) -> Callable[[F], F]:
    """Log a warning when the decorated call runs longer than ``threshold_seconds``.

    When no threshold is given, ``settings.slow_operation_threshold_seconds``
    is read at call time so tests can tune it through the environment.
    """
    def decorator(func: F) -> F:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start
                limit = threshold_seconds
                if limit is None:
                    from romancache.core.config import get_settings

                    limit = get_settings().slow_operation_threshold_seconds
                if duration > limit:
                    logger.warning(
                        "slow_operation_detected",
                        extra={
                            "structured_data": {
                                "operation": op_name,
                                "duration_seconds": round(duration, 3),
                                "threshold_seconds": limit,
                                "input_size": _sized(args[0]) if args else None,
                            }
                        },
                    )

        return wrapper  # type: ignore

    return decorator

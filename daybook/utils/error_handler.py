"""Common error handling utilities

Failures are logged once, with context, at the boundary where they leave an
operation. Cancelled input prompts are never logged.
"""

import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from daybook.errors import is_cancellation

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ErrorHandler:
    """Standard logging patterns for failed operations"""

    @staticmethod
    def log_and_return_default(
        operation_name: str, exception: BaseException, default_value: T, **kwargs: Any
    ) -> T:
        """Log the error and return a default value"""
        if not is_cancellation(exception):
            logger.error(f"Failed to {operation_name}", error=str(exception), **kwargs)
        return default_value

    @staticmethod
    def log_and_reraise(
        operation_name: str, exception: BaseException, **kwargs: Any
    ) -> None:
        """Log the error, then raise it again"""
        if not is_cancellation(exception):
            logger.error(f"Failed to {operation_name}", error=str(exception), **kwargs)
        raise exception


def handle_errors(
    operation_name: str,
    default_return: Any = None,
    reraise: bool = True,
    **log_kwargs: Any,
):
    """
    Decorator that logs failures of the wrapped (async) callable.

    Args:
        operation_name: name used in the log line
        default_return: value returned when ``reraise`` is False
        reraise: re-raise the original exception after logging
        **log_kwargs: extra context for the log line
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if reraise:
                    ErrorHandler.log_and_reraise(operation_name, e, **log_kwargs)
                return ErrorHandler.log_and_return_default(
                    operation_name, e, default_return, **log_kwargs
                )

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if reraise:
                    ErrorHandler.log_and_reraise(operation_name, e, **log_kwargs)
                return ErrorHandler.log_and_return_default(
                    operation_name, e, default_return, **log_kwargs
                )

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return wrapper

    return decorator

"""Degrade-gracefully policy for best-effort validation checks."""

from typing import Awaitable, TypeVar

from loguru import logger

T = TypeVar("T")


async def soft_fail(operation: Awaitable[T], neutral_default: T, *, label: str) -> T:
    """Await an operation, substituting a neutral default on any error.

    Cancellation is not an ``Exception`` and still propagates.

    Args:
        operation: Awaitable running the check
        neutral_default: Value returned when the operation raises
        label: Check name for the log line

    Returns:
        The operation's result, or ``neutral_default``
    """
    try:
        return await operation
    except Exception as e:
        logger.warning(f"{label} check failed, using neutral default: {type(e).__name__}: {e}")
        return neutral_default

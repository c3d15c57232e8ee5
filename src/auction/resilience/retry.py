"""Retry decorator for transient infrastructure errors in transfer primitives.

Wraps a callable with tenacity: a fixed number of attempts with exponential
backoff and jitter, a warning log before each retry, an error log on final
exhaustion, and the original exception re-raised afterwards.  The auction
machine itself never retries; only primitives that talk to infrastructure
use this.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


def _log_final_failure(call_name: str, retry_state: RetryCallState) -> None:
    """Log the failure after the last attempt and re-raise its exception."""
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.error(
        "call_failed_after_retries",
        call_name=call_name,
        attempts=retry_state.attempt_number,
        exception=str(exception),
    )
    if exception is not None:
        raise exception


def _before_sleep_log(call_name: str, retry_state: RetryCallState) -> None:
    """Log a warning before each retry attempt."""
    logger.warning(
        "retrying_call",
        call_name=call_name,
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else 0,
    )


def resilient_call(
    call_name: str,
    retry_on: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError),
    attempts: int = 3,
    initial_wait: float = 0.05,
    max_wait: float = 1.0,
) -> Callable[[F], F]:
    """Create a retry decorator for a transient-failure-prone call.

    Only exceptions listed in *retry_on* are retried; anything else
    propagates on the first attempt.

    Args:
        call_name: Human-readable name used in logs.
        retry_on: Exception types considered transient.
        attempts: Maximum number of attempts, including the first.
        initial_wait: First backoff delay in seconds.
        max_wait: Upper bound on a single backoff delay in seconds.

    Returns:
        A decorator that wraps the function with retry logic.
    """

    def decorator(func: F) -> F:
        wrapped = retry(
            retry=retry_if_exception_type(retry_on),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential_jitter(initial=initial_wait, max=max_wait, jitter=initial_wait),
            before_sleep=partial(_before_sleep_log, call_name),
            retry_error_callback=partial(_log_final_failure, call_name),
            reraise=True,
        )(func)

        return wrapped  # type: ignore[return-value]

    return decorator

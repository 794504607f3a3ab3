# /*
# Copyright 2026 The Lissto Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Fixed-interval polling for eventually consistent cluster state."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import urllib3
from kubernetes.client.exceptions import ApiException
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_delay,
    wait_fixed,
)

from lissto_e2e import logger

T = TypeVar("T")

# Read failures that mean "not converged yet" rather than "broken".
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    ApiException,
    urllib3.exceptions.HTTPError,
    OSError,
)


class ConvergenceTimeout(AssertionError):
    """Raised when a polled condition is not met within its time budget.

    Attributes:
        description: Human readable name of the awaited condition.
        timeout: Budget in seconds that elapsed.
        last_value: Value returned by the final poll, if it returned.
        last_error: Exception raised by the final poll, if it raised.
    """

    def __init__(
        self,
        description: str,
        timeout: float,
        last_value: Any = None,
        last_error: BaseException | None = None,
    ) -> None:
        self.description = description
        self.timeout = timeout
        self.last_value = last_value
        self.last_error = last_error
        if last_error is not None:
            detail = f"last error: {last_error}"
        else:
            detail = f"last observed: {last_value!r}"
        super().__init__(f"timed out after {timeout}s waiting for {description} ({detail})")


def eventually(
    fn: Callable[[], T],
    *,
    timeout: float,
    interval: float,
    description: str,
    until: Callable[[T], bool] = bool,
) -> T:
    """Poll *fn* until *until* accepts its result or *timeout* elapses.

    Every call of *fn* is a fresh read. Transient read errors count as
    "not yet"; any other exception propagates immediately.

    Args:
        fn: Zero-argument probe.
        timeout: Total wall-clock budget in seconds.
        interval: Seconds to sleep between probes.
        description: Name of the awaited condition, used in the failure.
        until: Acceptance test applied to each result. Defaults to truthiness.

    Returns:
        The first accepted result.

    Raises:
        ConvergenceTimeout: If no result is accepted within *timeout*.
    """
    retrying = Retrying(
        stop=stop_after_delay(timeout),
        wait=wait_fixed(interval),
        retry=(
            retry_if_exception_type(TRANSIENT_ERRORS)
            | retry_if_result(lambda value: not until(value))
        ),
    )
    try:
        result = retrying(fn)
    except RetryError as err:
        outcome = err.last_attempt
        if outcome.failed:
            raise ConvergenceTimeout(description, timeout, last_error=outcome.exception()) from None
        raise ConvergenceTimeout(description, timeout, last_value=outcome.result()) from None
    logger.debug("Condition met: %s", description)
    return result


def eventually_equal(
    fn: Callable[[], T],
    expected: T,
    *,
    timeout: float,
    interval: float,
    description: str,
) -> T:
    """Poll *fn* until it returns a value equal to *expected*."""
    return eventually(
        fn,
        timeout=timeout,
        interval=interval,
        description=f"{description} == {expected!r}",
        until=lambda value: value == expected,
    )


def eventually_absent(
    exists: Callable[[], bool],
    *,
    timeout: float,
    interval: float,
    description: str,
) -> None:
    """Poll an existence probe until it reports the resource gone."""
    eventually(
        exists,
        timeout=timeout,
        interval=interval,
        description=f"absence of {description}",
        until=lambda present: not present,
    )

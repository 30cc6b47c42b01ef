"""Fixed-size parallel batches with per-branch failure isolation."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from ambos.errors import RateLimitedError

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def gather_partial(
    branches: Sequence[Awaitable[T]],
    labels: Sequence[str],
    *,
    raise_if_all_failed: bool = True,
) -> list[T]:
    """Run branches concurrently and keep the results of the ones that succeed.

    A failing branch is logged and contributes nothing; the other branches
    are unaffected. When every branch fails and ``raise_if_all_failed`` is
    set, the first rate-limit error (or else the first error) is re-raised so
    that callers can tell "request failed" apart from "no results".

    Args:
        branches: Awaitables to run.
        labels: One label per branch, used in log messages.
        raise_if_all_failed: Re-raise when no branch succeeded.

    Returns:
        Results of the successful branches, in branch order.
    """
    results = await asyncio.gather(*branches, return_exceptions=True)

    successes: list[T] = []
    errors: list[Exception] = []
    for label, result in zip(labels, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning(f"Error in {label}. Error: {result}")
            errors.append(result)
            continue
        successes.append(result)

    if errors and not successes and raise_if_all_failed:
        raise next((e for e in errors if isinstance(e, RateLimitedError)), errors[0])
    return successes

"""Concurrent execution of independent requests."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Callable

from portalclient.config.settings import DEFAULT_MAX_CONCURRENT
from portalclient.core.pipeline import RequestOutcome, RequestPipeline
from portalclient.models import RequestSpec


async def execute_all(
    pipeline: RequestPipeline,
    specs: list[RequestSpec],
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    on_complete: Callable[[RequestOutcome], None] | None = None,
) -> list[RequestOutcome]:
    """Execute requests concurrently, each with its own retry state.

    Args:
        pipeline: Pipeline to run every request through
        specs: Requests to execute
        max_concurrent: Upper bound on in-flight executions
        on_complete: Optional callback called with each outcome as it finishes

    Returns:
        Outcomes in the same order as ``specs``
    """
    semaphore = asyncio.Semaphore(max_concurrent)

    async def bounded(spec: RequestSpec) -> RequestOutcome:
        async with semaphore:
            outcome = await pipeline.execute(spec)
        if on_complete:
            on_complete(outcome)
        return outcome

    return list(await asyncio.gather(*(bounded(spec) for spec in specs)))


def categorize_outcomes(outcomes: list[RequestOutcome]) -> dict[str, list[RequestOutcome]]:
    """Group outcomes by "success" or the error kind of the failure."""
    categories: dict[str, list[RequestOutcome]] = defaultdict(list)

    for outcome in outcomes:
        if outcome.success:
            categories["success"].append(outcome)
        else:
            categories[outcome.error.kind.value].append(outcome)

    return dict(categories)

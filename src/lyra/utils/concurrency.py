from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


def fan_out(calls: dict[str, Callable[[], Any]], max_workers: int = 8) -> dict[str, Any]:
    """
    Run independent zero-argument calls on a thread pool and join them.

    Returns a dict keyed like `calls`. The first exception raised by any call
    is re-raised once every call has finished.
    """
    if not calls:
        return {}
    workers = max(1, min(max_workers, len(calls)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lyra") as pool:
        futures = {name: pool.submit(fn) for name, fn in calls.items()}
        results: dict[str, Any] = {}
        error: BaseException | None = None
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except Exception as e:
                logger.debug(f"fan_out call '{name}' raised: {e}")
                if error is None:
                    error = e
    if error is not None:
        raise error
    return results


def map_concurrently(fn: Callable[[Any], Any], items: list[Any], max_workers: int = 8) -> list[Any]:
    """Apply `fn` to every item concurrently, preserving input order."""
    if not items:
        return []
    results = fan_out({str(i): (lambda item=item: fn(item)) for i, item in enumerate(items)}, max_workers)
    return [results[str(i)] for i in range(len(items))]

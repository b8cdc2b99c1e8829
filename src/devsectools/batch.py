# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Fan-out/fan-in helper for batched lookups.

Every call is submitted before any result is awaited, and the pool is joined
before returning, so a slow or failing call never cancels its siblings.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    """Terminal state of one settled call: either `value` or `error` is meaningful."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def fulfilled(self) -> bool:
        return self.error is None


def settle(calls: Sequence[Callable[[], T]], max_workers: int | None = None) -> list[Outcome[T]]:
    """Run `calls` concurrently and return one Outcome per call, in input order."""
    if not calls:
        return []

    workers = len(calls) if max_workers is None else max(1, min(max_workers, len(calls)))
    outcomes: list[Outcome[Any] | None] = [None] * len(calls)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="devsectools-batch") as executor:
        future_to_idx = {executor.submit(call): i for i, call in enumerate(calls)}
        for future in concurrent.futures.as_completed(future_to_idx):
            idx = future_to_idx[future]
            try:
                outcomes[idx] = Outcome(value=future.result())
            except Exception as exc:  # noqa: BLE001
                outcomes[idx] = Outcome(error=exc)
    return [outcome for outcome in outcomes if outcome is not None]


__all__ = ["Outcome", "settle"]

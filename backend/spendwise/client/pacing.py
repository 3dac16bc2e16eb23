"""
Client-side pacing between outbound requests.

Spacing requests out makes it less likely we trip the server's rate limiter.
It is best-effort only: other clients and processes aren't coordinated.
"""

import asyncio
import enum
import logging
import time
from typing import Awaitable, Callable, Dict, Optional, Union

from spendwise.config import settings

logger = logging.getLogger(__name__)


class OperationKind(str, enum.Enum):
    """Kinds of outbound call, each paced independently."""
    list = "list"
    fetch = "fetch"
    stats = "stats"
    budget = "budget"
    mutation = "mutation"
    profile = "profile"


class PacingPolicy:
    """Keeps consecutive sends of the same kind at least `interval(kind)` apart."""

    def __init__(
        self,
        intervals: Optional[Dict[Union[OperationKind, str], float]] = None,
        default_interval: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.intervals = {OperationKind(k): v for k, v in (intervals or {}).items()}
        self.default_interval = default_interval
        self._clock = clock
        self._sleep = sleep
        self._last_sent: Dict[OperationKind, float] = {}

    @classmethod
    def from_settings(cls) -> "PacingPolicy":
        return cls(
            intervals={
                OperationKind.list: settings.pacing_list_interval,
                OperationKind.stats: settings.pacing_stats_interval,
                OperationKind.budget: settings.pacing_budget_interval,
                OperationKind.mutation: settings.pacing_mutation_interval,
            },
            default_interval=settings.pacing_default_interval,
        )

    def interval(self, kind: Union[OperationKind, str]) -> float:
        return self.intervals.get(OperationKind(kind), self.default_interval)

    async def before_send(self, kind: Union[OperationKind, str]) -> None:
        """Wait out whatever is left of the interval since the last send of this kind."""
        kind = OperationKind(kind)
        last = self._last_sent.get(kind)
        if last is not None:
            wait = self.interval(kind) - (self._clock() - last)
            if wait > 0:
                logger.debug(f"Pacing {kind.value} request for {wait:.3f}s")
                await self._sleep(wait)
        self._last_sent[kind] = self._clock()

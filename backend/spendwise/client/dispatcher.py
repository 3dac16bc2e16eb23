"""
Serializing request dispatcher with transparent rate-limit retries.

Every outbound call goes through one queue drained by one task, so at most
one request is ever in flight. A request that comes back rate limited is
not settled: after a fixed backoff it is put back at the *head* of the
queue. Other requests keep draining while it waits, and a request enqueued
before the retry is reinserted can still go first. Retried requests
therefore trade strict FIFO for guaranteed eventual delivery; requests that
are never retried stay FIFO.

Request lifecycle::

    queued -> in_flight -> resolved
                        -> rejected
                        -> retry_scheduled -> queued
"""

import asyncio
import enum
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, Union

from spendwise.client.pacing import OperationKind, PacingPolicy
from spendwise.config import settings
from spendwise.errors import AuthError, DispatcherClosed, RateLimited

logger = logging.getLogger(__name__)

Operation = Callable[[], Awaitable[Any]]


class RequestState(str, enum.Enum):
    queued = "queued"
    in_flight = "in_flight"
    retry_scheduled = "retry_scheduled"
    resolved = "resolved"
    rejected = "rejected"


@dataclass(eq=False)
class QueuedRequest:
    kind: OperationKind
    operation: Operation
    future: asyncio.Future
    enqueued_at: float
    attempt_count: int = 0
    state: RequestState = RequestState.queued


class RequestDispatcher:
    """
    Single-flight request queue.

    `operation` callables must raise errors from spendwise.errors:
    RateLimited is retried, AuthError rejects the caller and fires
    `on_auth_failure`, anything else rejects the caller as-is.

    With `max_retries=None` a rate-limited request is retried until it
    succeeds. Setting a cap surfaces the last RateLimited once the request
    has been retried that many times.

    Requests can't be withdrawn once queued, but a caller that cancels its
    await is skipped when its turn comes.
    """

    def __init__(
        self,
        pacing: Optional[PacingPolicy] = None,
        backoff: float = 1.0,
        max_retries: Optional[int] = None,
        on_auth_failure: Optional[Callable[[AuthError], None]] = None
    ):
        self.pacing = pacing or PacingPolicy()
        self.backoff = backoff
        self.max_retries = max_retries
        self.on_auth_failure = on_auth_failure

        self._queue: Deque[QueuedRequest] = deque()
        self._retry_handles: Dict[QueuedRequest, asyncio.TimerHandle] = {}
        self._in_flight: Optional[QueuedRequest] = None
        # popped from the queue, possibly still waiting on pacing
        self._current: Optional[QueuedRequest] = None
        self._wakeup: Optional[asyncio.Event] = None
        self._drain_task: Optional[asyncio.Task] = None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        on_auth_failure: Optional[Callable[[AuthError], None]] = None
    ) -> "RequestDispatcher":
        return cls(
            pacing=PacingPolicy.from_settings(),
            backoff=settings.retry_backoff_seconds,
            max_retries=settings.max_retries,
            on_auth_failure=on_auth_failure,
        )

    @property
    def in_flight(self) -> Optional[QueuedRequest]:
        return self._in_flight

    @property
    def pending(self) -> int:
        """Requests queued or waiting out a backoff."""
        return len(self._queue) + len(self._retry_handles)

    @property
    def closed(self) -> bool:
        return self._closed

    async def dispatch(self, kind: Union[OperationKind, str], operation: Operation) -> Any:
        """Queue `operation` and wait for its terminal result."""
        if self._closed:
            raise DispatcherClosed("Dispatcher is closed")

        loop = asyncio.get_running_loop()
        request = QueuedRequest(
            kind=OperationKind(kind),
            operation=operation,
            future=loop.create_future(),
            enqueued_at=loop.time(),
        )
        self._queue.append(request)
        self._ensure_draining()
        return await request.future

    def _ensure_draining(self) -> None:
        if self._wakeup is None:
            self._wakeup = asyncio.Event()
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = asyncio.get_running_loop().create_task(self._drain())
        self._wakeup.set()

    async def _drain(self) -> None:
        while True:
            if not self._queue:
                self._wakeup.clear()
                await self._wakeup.wait()
                continue

            request = self._queue.popleft()
            if request.future.done():
                # caller gave up while the request was queued
                continue
            self._current = request
            try:
                await self._send(request)
            finally:
                self._current = None

    async def _send(self, request: QueuedRequest) -> None:
        await self.pacing.before_send(request.kind)
        if request.future.done():
            return

        request.state = RequestState.in_flight
        request.attempt_count += 1
        self._in_flight = request
        try:
            result = await request.operation()
        except RateLimited as exc:
            self._schedule_retry(request, exc)
        except AuthError as exc:
            logger.warning(f"{request.kind.value} request rejected, credentials invalid: {exc}")
            self._reject(request, exc)
            self._notify_auth_failure(exc)
        except Exception as exc:
            self._reject(request, exc)
        else:
            self._resolve(request, result)
        finally:
            self._in_flight = None

    def _notify_auth_failure(self, exc: AuthError) -> None:
        if self.on_auth_failure is None:
            return
        try:
            self.on_auth_failure(exc)
        except Exception:
            logger.exception("Auth failure callback raised")

    def _schedule_retry(self, request: QueuedRequest, exc: RateLimited) -> None:
        if self.max_retries is not None and request.attempt_count > self.max_retries:
            logger.error(
                f"{request.kind.value} request still rate limited after "
                f"{request.attempt_count} attempts, giving up"
            )
            self._reject(request, exc)
            return

        logger.info(
            f"{request.kind.value} request rate limited (attempt {request.attempt_count}), "
            f"retrying in {self.backoff}s"
        )
        request.state = RequestState.retry_scheduled
        loop = asyncio.get_running_loop()
        self._retry_handles[request] = loop.call_later(self.backoff, self._requeue, request)

    def _requeue(self, request: QueuedRequest) -> None:
        self._retry_handles.pop(request, None)
        if self._closed or request.future.done():
            return
        request.state = RequestState.queued
        self._queue.appendleft(request)
        self._ensure_draining()

    def _resolve(self, request: QueuedRequest, result: Any) -> None:
        request.state = RequestState.resolved
        if not request.future.done():
            request.future.set_result(result)

    def _reject(self, request: QueuedRequest, exc: BaseException) -> None:
        request.state = RequestState.rejected
        if not request.future.done():
            request.future.set_exception(exc)

    async def close(self) -> None:
        """Stop draining and reject everything still pending."""
        if self._closed:
            return
        self._closed = True

        pending = list(self._queue)
        self._queue.clear()
        for request, handle in list(self._retry_handles.items()):
            handle.cancel()
            pending.append(request)
        self._retry_handles.clear()

        current = self._current
        if self._drain_task is not None and not self._drain_task.done():
            self._drain_task.cancel()
            try:
                await self._drain_task
            except asyncio.CancelledError:
                pass
        if current is not None:
            pending.append(current)

        if pending:
            logger.info(f"Dispatcher closed with {len(pending)} pending requests")
        for request in pending:
            self._reject(request, DispatcherClosed("Dispatcher closed before the request completed"))

    async def __aenter__(self) -> "RequestDispatcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

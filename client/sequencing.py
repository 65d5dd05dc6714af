"""Latest-request-wins fetch bookkeeping shared by the catalog controllers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from client.errors import CatalogClientError, TransportError
from shared.config import DEFAULT_FETCH_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


Listener = Callable[[Any], None]


async def _raise(error: Exception) -> Any:
    raise error


class SequencedController:
    """Issue fetches as tasks and apply only the response of the latest one.

    Handlers run synchronously on the event loop thread. Each fetch captures a
    sequence number when issued; a response whose number is no longer the
    latest is dropped on arrival. Failures keep the previous snapshot.
    """

    name = "controller"

    def __init__(self, *, fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS) -> None:
        self._fetch_timeout_seconds = fetch_timeout_seconds
        self._sequence = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []
        self._is_loading = False
        self._last_error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def view(self) -> Any:
        raise NotImplementedError

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with `view()` after every state change."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_idle(self) -> None:
        """Wait until no fetch issued by this controller is in flight."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._is_loading = False

    def _notify(self) -> None:
        if not self._listeners:
            return
        current_view = self.view()
        for listener in list(self._listeners):
            try:
                listener(current_view)
            except Exception:
                logger.exception("listener_failed controller=%s", self.name)

    def _issue(
        self,
        fetch: Callable[[], Awaitable[Any]],
        apply: Callable[[Any], None],
        *,
        description: str,
    ) -> int:
        loop = asyncio.get_running_loop()
        self._sequence += 1
        sequence = self._sequence
        try:
            awaitable = fetch()
        except Exception as exc:
            # Reported through the task so the loading flag still clears.
            awaitable = _raise(exc)
        self._is_loading = True
        logger.info("fetch_issued controller=%s sequence=%s %s", self.name, sequence, description)

        task = loop.create_task(self._run(sequence, awaitable, apply))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._notify()
        return sequence

    async def _run(self, sequence: int, awaitable: Awaitable[Any], apply: Callable[[Any], None]) -> None:
        error: BaseException | None = None
        result: Any = None
        try:
            result = await asyncio.wait_for(awaitable, timeout=self._fetch_timeout_seconds)
        except asyncio.TimeoutError:
            error = TransportError(f"Catalog fetch timed out after {self._fetch_timeout_seconds}s")
        except CatalogClientError as exc:
            error = exc
        except Exception as exc:
            logger.exception("fetch_unexpected_error controller=%s sequence=%s", self.name, sequence)
            error = exc

        if sequence != self._sequence:
            logger.debug(
                "stale_response_dropped controller=%s sequence=%s latest=%s failed=%s",
                self.name,
                sequence,
                self._sequence,
                error is not None,
            )
            return

        self._is_loading = False
        if error is None:
            self._last_error = None
            apply(result)
            logger.info("fetch_applied controller=%s sequence=%s", self.name, sequence)
        else:
            self._last_error = str(error) or type(error).__name__
            logger.warning(
                "fetch_failed controller=%s sequence=%s error_type=%s message=%s",
                self.name,
                sequence,
                type(error).__name__,
                error,
            )
        self._notify()

"""Boundary between remote calls and the cache protocol.

The dispatcher awaits the remote coroutine, then applies its result to
the cache synchronously.  Nothing is applied when the call fails or when
the caller abandoned the operation in the meantime.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from admin_cache.modules.core.cache import EntityCache
from admin_cache.modules.core.exceptions import ErrorResponse, TransportError
from admin_cache.shared.domain.bus import IEventBus
from admin_cache.shared.domain.events import CacheChanged

logger = structlog.get_logger(__name__)

R = TypeVar("R")


class AbortSignal:
    """Liveness flag owned by the caller of a mutation (e.g. a view)."""

    def __init__(self) -> None:
        self._aborted = False
        self.reason: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self._aborted

    def abort(self, reason: str = "abandoned") -> None:
        self._aborted = True
        self.reason = reason


class MutationDispatcher:
    """Runs remote calls for one domain and applies confirmed results.

    Results are applied in the order their calls resolve; two in-flight
    edits of the same entity end with whichever resolved last.
    """

    def __init__(
        self,
        domain: str,
        cache: EntityCache,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._domain = domain
        self._cache = cache
        self._bus = bus
        self._in_flight = 0
        self.last_error: Optional[ErrorResponse] = None

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def clear_error(self) -> None:
        self.last_error = None

    async def run(
        self,
        action: str,
        call: Awaitable[R],
        apply: Optional[Callable[[R], object]] = None,
        *,
        signal: Optional[AbortSignal] = None,
        entity_id: Optional[int] = None,
    ) -> Optional[R]:
        """Await ``call``; on success hand its result to ``apply``.

        Returns the remote result, or ``None`` when ``signal`` was aborted
        before the call resolved.

        Raises:
            TransportError: the remote call failed; recorded as
                ``last_error`` and the cache is left untouched.
        """
        log = logger.bind(domain=self._domain, action=action, entity_id=entity_id)
        self._in_flight += 1
        self.last_error = None
        try:
            result = await call
        except TransportError as exc:
            self.last_error = exc.error
            log.warning(
                "dispatch.failed",
                message=exc.error.message,
                error_code=exc.error.error_code,
            )
            raise
        finally:
            self._in_flight -= 1

        if signal is not None and signal.aborted:
            log.info("dispatch.discarded", reason=signal.reason)
            return None

        if apply is not None:
            revision_before = self._cache.revision
            apply(result)
            if self._cache.revision != revision_before:
                self._publish(action, entity_id)
        log.info("dispatch.applied")
        return result

    def _publish(self, action: str, entity_id: Optional[int]) -> None:
        if self._bus is None:
            return
        self._bus.publish(
            CacheChanged(
                domain=self._domain,
                action=action,
                entity_id=entity_id,
                revision=self._cache.revision,
            )
        )

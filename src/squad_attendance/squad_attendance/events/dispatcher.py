from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from .model import ChangeEvent

logger = logging.getLogger(__name__)


class PostWriteObserver(Protocol):
    def notify(self, event: ChangeEvent) -> None:
        raise NotImplementedError


class ChangeDispatcher:
    """Invoke post-write observers, in registration order, after each commit.

    Observers are side effects (audit, notifications): a failing observer is
    logged and skipped, it never reaches the caller of the primary write and
    never stops the observers after it.
    """

    def __init__(self, observers: Optional[Iterable[PostWriteObserver]] = None):
        self._observers: list[PostWriteObserver] = list(observers or [])

    def register(self, observer: PostWriteObserver) -> None:
        self._observers.append(observer)

    @property
    def observers(self) -> tuple[PostWriteObserver, ...]:
        return tuple(self._observers)

    def dispatch(self, event: ChangeEvent) -> None:
        for observer in self._observers:
            try:
                observer.notify(event)
            except Exception:
                logger.exception(
                    "Observer %s failed for %s %s on %s",
                    type(observer).__name__,
                    event.operation.value,
                    event.entity_id,
                    event.entity_type.value,
                )

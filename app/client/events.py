# app/client/events.py
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """
    Published once per mutation of a resource kind.

    record_id is the server id when known, else the record's localId.
    """

    kind: str
    action: str
    record_id: str | None = None


Listener = Callable[[ChangeEvent], None]


class ChangeBus:
    """
    Typed publish/subscribe channel per resource kind.

    Listeners re-read the shared collection when notified. A failing
    listener is logged and does not stop the others.
    """

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, kind: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener; returns a function that unsubscribes it.
        """
        self._listeners[kind].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[kind]:
                self._listeners[kind].remove(listener)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners[event.kind]):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener for %s raised on %s", event.kind, event.action)

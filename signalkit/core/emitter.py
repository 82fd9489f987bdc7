import itertools
import logging
from typing import Any, Callable, Dict, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[[T], Any]


class Emitter(Generic[T]):
    """Ordered observer registry for a single event channel.

    Handlers are addressed by the token returned from ``register`` so the
    same callable can be registered more than once and removed one
    occurrence at a time.
    """

    def __init__(self) -> None:
        # dicts keep insertion order, which is the delivery order
        self._handlers: Dict[int, Handler] = {}
        self._tokens = itertools.count(1)

    def register(self, handler: Handler) -> int:
        token = next(self._tokens)
        self._handlers[token] = handler
        return token

    def unregister(self, token: int) -> None:
        self._handlers.pop(token, None)

    def remove_all(self) -> None:
        self._handlers.clear()

    def deliver(self, value: T) -> List[Exception]:
        """Call every handler registered when delivery begins, in order.

        Handlers removed while the cycle is running are skipped if they have
        not been reached yet; handlers added while it is running wait for the
        next cycle. Exceptions raised by handlers are collected and returned
        instead of interrupting the cycle.
        """
        failures: List[Exception] = []
        for token, handler in list(self._handlers.items()):
            if token not in self._handlers:
                continue
            try:
                handler(value)
            except Exception as exc:
                logger.debug("Observer %r raised %r", handler, exc)
                failures.append(exc)
        return failures

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, token: object) -> bool:
        return token in self._handlers

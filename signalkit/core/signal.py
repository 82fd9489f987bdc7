import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from signalkit.core.emitter import Emitter
from signalkit.core.equality import ShallowFieldEquality, resolve_policy
from signalkit.core.exceptions import ObserverFailure
from signalkit.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Signal(Generic[T]):
    """Mutable value with change notification."""

    def __init__(self, value: T, equality=None, project_settings=None) -> None:
        self.settings = project_settings or settings
        self.equality = resolve_policy(equality)
        self.equality.validate(value)
        self._value: T = self.equality.store(value)
        self._observers: Emitter[T] = Emitter()
        self._detach: Optional[Callable[[], None]] = None

    def get(self) -> T:
        return self._value

    def update(self, value: T) -> None:
        """Store ``value`` and notify observers, unless it equals the current value.

        Observers run synchronously, in the order they were registered. An
        observer that updates this signal again runs a full nested delivery
        before the remaining observers of the outer one are called.
        """
        self.equality.validate(value)
        if self.equality.equals(self._value, value):
            return
        self._value = self.equality.store(value)
        self._notify(self._value)

    def on_change(self, handler: Callable[[T], Any]) -> Callable[[], None]:
        """Call ``handler`` with every new value; returns a function that stops it."""
        token = self._observers.register(handler)

        def unsubscribe() -> None:
            self._observers.unregister(token)

        return unsubscribe

    def subscribe(self, handler: Callable[[T], Any]) -> Callable[[], None]:
        """Like ``on_change``, but ``handler`` also gets the current value right away."""
        handler(self._value)
        return self.on_change(handler)

    def map(self, fn: Callable[[T], U]) -> "Signal[U]":
        """Return a new signal that follows ``fn(value)`` of this one.

        The derived signal stays attached until its ``detach`` is called.
        """
        derived: Signal[U] = Signal(fn(self._value), project_settings=self.settings)
        derived._detach = self.on_change(lambda value: derived.update(fn(value)))
        logger.debug("Mapped %r into %r", self, derived)
        return derived

    def detach(self) -> None:
        """Stop following the source signal this one was mapped from."""
        if self._detach is None:
            return
        self._detach()
        self._detach = None
        logger.debug("Detached %r from its source", self)

    def unsubscribe_all(self) -> None:
        count = len(self._observers)
        self._observers.remove_all()
        logger.debug("Removed %s observer(s) from %r", count, self)

    def _notify(self, value: T) -> None:
        failures: List[Exception] = self._observers.deliver(value)
        if not failures:
            return
        if self.settings.observer_errors == "log":
            for exc in failures:
                logger.error("Observer of %r failed", self, exc_info=exc)
            return
        raise ObserverFailure(failures) from failures[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class GroupSignal(Signal[T]):
    """Signal over a composite value that compares it field by field.

    Updating with a structurally equal mapping or object is not a change. The
    stored value is always a shallow copy of what was passed in.
    """

    def __init__(self, value: T, project_settings=None) -> None:
        super().__init__(
            value,
            equality=ShallowFieldEquality(),
            project_settings=project_settings,
        )


def signal(value: T, equality=None) -> Signal[T]:
    """Create a signal holding ``value``.

    ``equality`` may be an ``EqualityPolicy`` or an ``(old, new) -> bool``
    function; by default primitives compare by value and everything else by
    identity.

        count = signal(1)
        stop = count.subscribe(print)  # prints 1
        count.update(2)                # prints 2
        count.update(2)                # unchanged, prints nothing
        stop()
    """
    return Signal(value, equality=equality)


def group_signal(value: T) -> GroupSignal[T]:
    """Create a signal that compares mapping or object values field by field."""
    return GroupSignal(value)

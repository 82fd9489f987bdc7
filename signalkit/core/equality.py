import copy
import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from signalkit.core.exceptions import InvalidArgument

PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)

_MISSING = object()


class EqualityPolicy(ABC):
    """Contract every equality policy must implement."""

    @abstractmethod
    def equals(self, old: Any, new: Any) -> bool:
        """Return True when ``new`` should not trigger a notification."""

    def validate(self, value: Any) -> None:
        """Reject values the policy cannot compare."""

    def store(self, value: Any) -> Any:
        """Return what the signal keeps once ``value`` is accepted."""
        return value


class IdentityEquality(EqualityPolicy):
    """Primitives compare by value, everything else by identity."""

    def equals(self, old: Any, new: Any) -> bool:
        if old is new:
            return True
        if isinstance(new, PRIMITIVE_TYPES):
            # 1, 1.0 and True are distinct values here
            return type(old) is type(new) and old == new
        return False


class ShallowFieldEquality(EqualityPolicy):
    """Compare composites field by field, looking only at the new value's keys.

    Fields that exist only on the old value are never inspected, so dropping a
    key is not a change by itself.
    """

    def __init__(self, field_equality: EqualityPolicy | None = None) -> None:
        self.field_equality = field_equality or IdentityEquality()

    def equals(self, old: Any, new: Any) -> bool:
        old_fields = fields_of(old)
        for key, value in fields_of(new).items():
            current = old_fields.get(key, _MISSING)
            if current is _MISSING or not self.field_equality.equals(current, value):
                return False
        return True

    def validate(self, value: Any) -> None:
        fields_of(value)

    def store(self, value: Any) -> Any:
        # never keep the caller's instance
        if isinstance(value, Mapping):
            return dict(value)
        return copy.copy(value)


class CallableEquality(EqualityPolicy):
    """Adapts a plain ``(old, new) -> bool`` function to the policy contract."""

    def __init__(self, func: Callable[[Any, Any], bool]) -> None:
        self.func = func

    def equals(self, old: Any, new: Any) -> bool:
        return bool(self.func(old, new))


def fields_of(value: Any) -> Mapping:
    """Return the field mapping of a composite value.

    Mappings are used as they are, sequences are keyed by index, namedtuples
    and dataclasses by field name, other objects expose their ``__dict__``.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, PRIMITIVE_TYPES):
        raise InvalidArgument(f"value must be an object, got {value!r}")
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return value._asdict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    if isinstance(value, Sequence):
        return dict(enumerate(value))
    try:
        return vars(value)
    except TypeError:
        raise InvalidArgument(
            f"value must be a mapping or an object with attributes, got {type(value).__name__}"
        ) from None


def resolve_policy(equality) -> EqualityPolicy:
    """Turn the ``equality`` argument of a signal into a policy instance."""
    if equality is None:
        return IdentityEquality()
    if isinstance(equality, EqualityPolicy):
        return equality
    if callable(equality):
        return CallableEquality(equality)
    raise InvalidArgument(
        f"equality must be an EqualityPolicy or a callable, got {type(equality).__name__}"
    )

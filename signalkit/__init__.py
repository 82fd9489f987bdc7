"""Reactive value containers with change notification."""

import logging

from signalkit.core.emitter import Emitter
from signalkit.core.equality import (
    CallableEquality,
    EqualityPolicy,
    IdentityEquality,
    ShallowFieldEquality,
)
from signalkit.core.exceptions import ConfigurationError, InvalidArgument, ObserverFailure
from signalkit.core.logging import configure_logging
from signalkit.core.signal import GroupSignal, Signal, group_signal, signal

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CallableEquality",
    "ConfigurationError",
    "Emitter",
    "EqualityPolicy",
    "GroupSignal",
    "IdentityEquality",
    "InvalidArgument",
    "ObserverFailure",
    "ShallowFieldEquality",
    "Signal",
    "configure_logging",
    "group_signal",
    "signal",
]

__version__ = "0.1.0"

class ConfigurationError(Exception):
    """Raised when settings are missing or invalid."""


class InvalidArgument(Exception):
    """Raised when a signal is given a value it cannot hold."""


class ObserverFailure(Exception):
    """Raised after a delivery cycle in which one or more observers failed."""

    def __init__(self, failures) -> None:
        self.failures = list(failures)
        super().__init__(f"{len(self.failures)} observer(s) failed during delivery")

import logging
import os

OBSERVER_ERROR_POLICIES = ("raise", "log")


class Settings:
    """Library settings, read from the environment once at import time."""

    def __init__(self) -> None:
        self.environment = os.environ.get("SIGNALKIT_ENV", "base")
        self.log_level = os.environ.get("SIGNALKIT_LOG_LEVEL", "INFO").upper()

        # What a signal does with exceptions collected from its observers
        self.observer_errors = (
            os.environ.get("SIGNALKIT_OBSERVER_ERRORS", "raise").strip().lower()
        )

    def validate(self) -> dict:
        """Validate configuration and return any errors."""
        errors = {}

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors["log_level"] = (
                f"Unknown log level {self.log_level!r} (SIGNALKIT_LOG_LEVEL)"
            )

        if self.observer_errors not in OBSERVER_ERROR_POLICIES:
            errors["observer_errors"] = (
                f"Expected one of {', '.join(OBSERVER_ERROR_POLICIES)}, "
                f"got {self.observer_errors!r} (SIGNALKIT_OBSERVER_ERRORS)"
            )

        return errors


settings = Settings()

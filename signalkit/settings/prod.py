import os

from signalkit.settings.base import Settings


class ProdSettings(Settings):
    """Production overrides: observer failures are logged, not raised."""

    def __init__(self) -> None:
        super().__init__()
        self.environment = "prod"
        self.observer_errors = (
            os.environ.get("SIGNALKIT_OBSERVER_ERRORS", "log").strip().lower()
        )


settings = ProdSettings()

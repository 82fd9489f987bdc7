import importlib
import os

from dotenv import load_dotenv

from signalkit.core.exceptions import ConfigurationError

load_dotenv()


def load_settings():
    """Load the configured settings module and validate it."""
    module_path = os.environ.get(
        "SIGNALKIT_SETTINGS_MODULE",
        "signalkit.settings.base",
    )
    module = importlib.import_module(module_path)
    loaded = getattr(module, "settings")
    errors = loaded.validate()
    if errors:
        raise ConfigurationError(f"Configuration errors: {errors}")
    return loaded


settings = load_settings()

__all__ = ["load_settings", "settings"]

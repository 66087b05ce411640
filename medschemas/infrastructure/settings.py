"""Application Settings and Configuration.

Settings only drive the developer tooling (CLI output and logging). Schema
constraints and defaults are the shared contract and are deliberately not
configurable here.
"""

import os

# Application metadata
APP_NAME = "medschemas"
APP_VERSION = "1.0.0"

DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in _TRUE_VALUES


class Settings:
    """Settings loaded from ``MEDSCHEMAS_*`` environment variables.

    Attributes:
        app_name: Name shown by the CLI
        log_level: Root logging level
        log_json: Emit JSON log lines instead of human-readable ones
        accept_legacy: Run the legacy vocabulary translation before validating
            unless the CLI is told otherwise
    """

    def __init__(self):
        self.app_name = os.getenv("MEDSCHEMAS_APP_NAME", APP_NAME)
        self.log_level = os.getenv("MEDSCHEMAS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        self.log_json = _env_flag("MEDSCHEMAS_LOG_JSON", False)
        self.accept_legacy = _env_flag("MEDSCHEMAS_ACCEPT_LEGACY", True)


# Global settings instance
settings = Settings()

"""Configuration settings for the HostNote server."""

import os
from dataclasses import dataclass
from pathlib import Path

from hostnote.constants import DEFAULT_KDF_ITERATIONS
from hostnote.exceptions import ConfigurationError


HOSTNOTE_HOST = os.environ.get("HOSTNOTE_HOST", "0.0.0.0")

HOSTNOTE_PORT = int(os.environ.get("HOSTNOTE_PORT", "8080"))

DEFAULT_DATA_DIR = "/data"

MIN_SECRET_LENGTH = 32


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings consumed by the storage core and the HTTP layer.
    """
    encryption_key: str
    data_dir: Path
    kdf_iterations: int = DEFAULT_KDF_ITERATIONS
    rate_limit_requests: int = 100
    rate_limit_window: int = 60


def load_settings() -> Settings:
    """
    Build settings from the current environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If ENCRYPTION_KEY is missing or a numeric value is malformed
    """
    encryption_key = os.environ.get("ENCRYPTION_KEY", "")
    if not encryption_key:
        raise ConfigurationError(
            "ENCRYPTION_KEY environment variable is missing. Server cannot start securely."
        )

    try:
        kdf_iterations = int(os.environ.get("HOSTNOTE_KDF_ITERATIONS", str(DEFAULT_KDF_ITERATIONS)))
        rate_limit_requests = int(os.environ.get("HOSTNOTE_RATE_LIMIT_REQUESTS", "100"))
        rate_limit_window = int(os.environ.get("HOSTNOTE_RATE_LIMIT_WINDOW", "60"))
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    if kdf_iterations < 1:
        raise ConfigurationError("HOSTNOTE_KDF_ITERATIONS must be positive")

    return Settings(
        encryption_key=encryption_key,
        data_dir=Path(os.environ.get("HOSTNOTE_DATA_DIR", DEFAULT_DATA_DIR)),
        kdf_iterations=kdf_iterations,
        rate_limit_requests=rate_limit_requests,
        rate_limit_window=rate_limit_window,
    )

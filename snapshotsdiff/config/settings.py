"""Tool settings via Pydantic BaseSettings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from snapshotsdiff.exceptions import ConfigError

DEFAULT_THRESHOLD = 1600
SNAPSHOT_MARKER = "__Snapshots__"


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "SNAPSHOTSDIFF_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Batch mode defaults, relative to the working directory
    artifacts_dir: str = "../SnapshotArtifacts"
    output_dir: str = "../SnapshotDiffs"
    tests_dir: str = "../AppSnapshotTests"

    # Squared RGBA distance above which a pixel counts as different
    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=0)
    snapshot_marker: str = SNAPSHOT_MARKER

    log_level: str = "WARNING"
    json_logs: bool = False


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance.

    Invalid ``SNAPSHOTSDIFF_*`` values raise ConfigError with a one-line message.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        msg = f"Invalid configuration: {problems}"
        raise ConfigError(msg) from exc

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

ENV_PREFIX = "PUZTERM_"
TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime knobs. Defaults match a 100 Hz input poll and a 10 Hz clock redraw."""

    model_config = ConfigDict(frozen=True)

    poll_interval: float = Field(default=0.01, gt=0)
    status_refresh_ticks: int = Field(default=10, ge=1)
    refresh_per_second: float = Field(default=30, gt=0)
    clues_scroll_step: int = Field(default=5, ge=1)

    log_level: LogLevel = "INFO"
    log_file: Optional[str] = None
    show_log: bool = False
    log_buffer_size: int = Field(default=5000, ge=1)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        """Read PUZTERM_* variables; anything unset keeps its default."""
        values = {}
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            values["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"].upper()
        if environ.get(f"{ENV_PREFIX}LOG_FILE"):
            values["log_file"] = environ[f"{ENV_PREFIX}LOG_FILE"]
        if f"{ENV_PREFIX}SHOW_LOG" in environ:
            values["show_log"] = environ[f"{ENV_PREFIX}SHOW_LOG"].strip().lower() in TRUTHY
        if f"{ENV_PREFIX}POLL_INTERVAL" in environ:
            values["poll_interval"] = environ[f"{ENV_PREFIX}POLL_INTERVAL"]
        return cls.model_validate(values)

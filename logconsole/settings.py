"""
Console settings - validated configuration for the log console
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ConsoleSettings(BaseModel):
    history_limit: int = Field(10_000, gt=0)
    shown_limit: int = Field(100, gt=0)
    quiet_interval_ms: int = Field(300, ge=0)  # 1000 for the slow setting
    regex_search: bool = True
    source_root: Optional[Path] = None
    poll_interval: float = Field(1 / 30, gt=0)

    @model_validator(mode="after")
    def check_limits(self) -> "ConsoleSettings":
        if self.shown_limit > self.history_limit:
            raise ValueError("shown_limit cannot exceed history_limit")
        return self

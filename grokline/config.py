# grokline/config.py
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class GrokConfig(BaseModel):
    """Options the host hands to the parser."""

    # top-level patterns, tried in order against every line
    patterns: list[str] = Field(..., min_length=1)
    # inline definitions, same format as a pattern file
    custom_patterns: str = ""
    custom_pattern_files: list[Path] = Field(default_factory=list)
    # reference zone for layouts without an offset: "", "UTC", "Local" or an IANA name
    timezone: str = ""
    # "auto" nudges repeated timestamps forward, "disable" leaves them alone
    unique_timestamp: Literal["auto", "disable"] = "auto"

    @field_validator("patterns")
    @classmethod
    def _no_blank_patterns(cls, v: list[str]) -> list[str]:
        if any(not p.strip() for p in v):
            raise ValueError("patterns must not be blank")
        return v


def config_from_env(**overrides) -> GrokConfig:
    """
    Build a GrokConfig from environment variables; keyword overrides win.

    GROK_PATTERNS          ';'-separated top-level patterns
    GROK_CUSTOM_PATTERNS   inline pattern definitions
    GROK_PATTERN_FILES     os.pathsep-separated pattern files
    GROK_TIMEZONE          reference timezone
    GROK_UNIQUE_TIMESTAMP  "auto" or "disable"
    """
    patterns = [p for p in os.getenv("GROK_PATTERNS", "").split(";") if p.strip()]
    files = [f for f in os.getenv("GROK_PATTERN_FILES", "").split(os.pathsep) if f]
    values = {
        "patterns": patterns,
        "custom_patterns": os.getenv("GROK_CUSTOM_PATTERNS", ""),
        "custom_pattern_files": files,
        "timezone": os.getenv("GROK_TIMEZONE", ""),
        "unique_timestamp": os.getenv("GROK_UNIQUE_TIMESTAMP", "auto"),
    }
    values.update(overrides)
    return GrokConfig(**values)

# grokline/base.py
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd


class GrokError(Exception):
    """Base class for everything the engine raises."""


class CompileError(GrokError):
    """Pattern setup failed; the parser must not be used."""

    def __init__(self, reason: str, pattern: str | None = None):
        self.reason = reason
        self.pattern = pattern
        msg = f"grok compile error: {reason}"
        if pattern:
            msg += f" (pattern: {pattern})"
        super().__init__(msg)


class ParseError(GrokError):
    """A line matched but one of its captures could not be converted."""

    def __init__(self, reason: str, field: str | None = None):
        self.reason = reason
        self.field = field
        msg = f"grok parse error: {reason}"
        if field:
            msg += f" (field: {field})"
        super().__init__(msg)


class Modifier(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DURATION = "duration"
    TAG = "tag"
    DROP = "drop"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class FieldSpec:
    """
    One named capture of a compiled pattern.

    - group: internal regex group name (unique inside one matcher)
    - name: semantic field name written to the record
    - modifier: how the captured text is converted
    - layout: timestamp layout key, only set for Modifier.TIMESTAMP
    """

    group: str
    name: str
    modifier: Modifier = Modifier.STRING
    layout: str | None = None


@dataclass(frozen=True)
class CompiledMatcher:
    pattern: str
    regex: re.Pattern
    fields: tuple[FieldSpec, ...]
    timestamp_field: FieldSpec | None = None


@dataclass
class Record:
    """
    Structured result of one matched line.

    - fields: semantic name -> str | int | float (durations are int nanoseconds)
    - tags: semantic name -> str
    - timestamp: extracted or caller supplied instant, None if neither
    - pattern: the configured top-level pattern that matched
    """

    fields: dict[str, Any] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)
    timestamp: pd.Timestamp | None = None
    pattern: str = ""

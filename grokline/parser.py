# grokline/parser.py
import logging
import re
from datetime import datetime

import pandas as pd
from dateutil import tz

from .base import CompiledMatcher, GrokError, Modifier, Record
from .compiler import PatternCompiler
from .config import GrokConfig
from .convert import convert_value
from .library import PatternLibrary
from .timestamps import resolve_timezone
from .tsmod import TimestampModder

logger = logging.getLogger(__name__)


class GrokParser:
    """
    Matches log lines against grok patterns and builds typed records.

    Usage:

        parser = GrokParser(patterns=["%{COMMON_LOG_FORMAT}"])
        parser.compile()
        record = parser.parse_line(line)   # Record, or None when nothing matched

    compile() runs once before parsing. The compiled matchers are read-only
    and can be shared between threads; the timestamp de-duplication state is
    not, so concurrent callers need their own parser or
    unique_timestamp="disable".
    """

    def __init__(self, config: GrokConfig | None = None, **options):
        if config is None:
            config = GrokConfig(**options)
        elif options:
            config = GrokConfig(**{**config.model_dump(), **options})
        self.config = config
        self.library: PatternLibrary | None = None
        self.matchers: list[CompiledMatcher] = []
        self.zone = tz.UTC
        self.tsmodder: TimestampModder | None = None
        self._compiled = False

    def compile(self) -> "GrokParser":
        """
        Load the pattern library and compile every top-level pattern.

        Raises CompileError; on failure the parser keeps its previous state.
        """
        zone = resolve_timezone(self.config.timezone)

        library = PatternLibrary()
        if self.config.custom_patterns:
            library.add_text(self.config.custom_patterns)
        for path in self.config.custom_pattern_files:
            library.add_file(path)

        matchers = PatternCompiler(library).compile(self.config.patterns)

        self.library = library
        self.zone = zone
        self.matchers = matchers
        self.tsmodder = TimestampModder() if self.config.unique_timestamp == "auto" else None
        self._compiled = True
        logger.debug("Compiled %d grok patterns (%d definitions)", len(matchers), len(library))
        return self

    def parse_line(self, line: str, now: datetime | None = None) -> Record | None:
        """
        Parse one line with the first matching pattern.

        `now` is used as the record timestamp when the pattern has no
        timestamp field. Returns None when no pattern matches; raises
        ParseError when a capture does not fit its declared type.
        """
        if not self._compiled:
            raise GrokError("parser is not compiled, call compile() first")

        for matcher in self.matchers:
            m = matcher.regex.search(line)
            # patterns without named captures can't produce anything
            if m is None or not matcher.fields:
                continue
            return self._build_record(matcher, m, now)

        logger.debug("Grok no match found for: %r", line)
        return None

    def _build_record(
        self, matcher: CompiledMatcher, m: re.Match, now: datetime | None
    ) -> Record:
        record = Record(pattern=matcher.pattern)
        timestamp = None
        for spec in matcher.fields:
            value = m.group(spec.group)
            if not value:
                continue
            if spec.modifier is Modifier.DROP or spec.name.startswith("_"):
                continue

            converted = convert_value(spec, value, self.zone)
            if spec.modifier is Modifier.TAG:
                record.tags[spec.name] = converted
            elif spec.modifier is Modifier.TIMESTAMP:
                timestamp = converted
            else:
                record.fields[spec.name] = converted

        if timestamp is None and now is not None:
            timestamp = pd.Timestamp(now)
        if self.tsmodder is not None:
            timestamp = self.tsmodder.tsmod(timestamp)
        record.timestamp = timestamp
        return record


def compile_parser(config: GrokConfig | None = None, **options) -> GrokParser:
    """Build and compile a parser in one step."""
    return GrokParser(config, **options).compile()

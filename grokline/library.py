# grokline/library.py
"""
Pattern library: the name -> definition table the compiler expands from.

Definitions come from the built-in table, inline text and pattern files.
Each source uses the same plain-text format, one definition per line:

    # comment
    NAME definition-body

Later definitions with the same name override earlier ones.
"""

import logging
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

from .base import CompileError
from .default_patterns import DEFAULT_PATTERNS

logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"^\w+$")


class PatternLibrary(Mapping[str, str]):
    def __init__(self, defaults: bool = True):
        self._patterns: dict[str, str] = {}
        if defaults:
            self.add_text(DEFAULT_PATTERNS, source="<defaults>")

    def __getitem__(self, name: str) -> str:
        return self._patterns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def add(self, name: str, body: str) -> None:
        """Register a single definition, replacing any previous one."""
        if not NAME_RE.match(name):
            raise CompileError(f"invalid pattern name {name!r}")
        if not body.strip():
            raise CompileError(f"pattern {name} has no definition", pattern=name)
        self._patterns[name] = body

    def add_text(self, text: str, source: str = "<inline>") -> int:
        """
        Parse pattern definitions out of `text`.

        Returns the number of definitions loaded. A malformed line aborts the
        whole load with a CompileError that names the source and line.
        """
        count = 0
        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split(None, 1)
            if len(parts) < 2:
                raise CompileError(
                    f"{source}:{line_no}: pattern {parts[0]} has no definition",
                    pattern=parts[0],
                )
            name, body = parts
            if not NAME_RE.match(name):
                raise CompileError(f"{source}:{line_no}: invalid pattern name {name!r}")
            self._patterns[name] = body
            count += 1
        logger.debug("Loaded %d grok patterns from %s", count, source)
        return count

    def add_file(self, path: str | Path) -> int:
        """Load definitions from a pattern file; unreadable files are compile errors."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CompileError(f"cannot read pattern file {path}: {exc}") from exc
        return self.add_text(text, source=str(path))

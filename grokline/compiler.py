# grokline/compiler.py
"""
Expands grok pattern references into plain regular expressions.

    %{NUMBER}                 -> (?:<NUMBER body>)
    %{NUMBER:bytes}           -> (?P<_g0><NUMBER body>)        bytes: string
    %{NUMBER:bytes:int}       -> (?P<_g0><NUMBER body>)        bytes: int
    %{HTTPDATE:ts:ts-httpd}   -> (?P<_g1><HTTPDATE body>)      ts: timestamp
    %{X:ts:ts-"%d/%m/%Y"}     -> custom strptime layout

Named captures nested inside referenced patterns keep their own names and
modifiers, so %{RESPONSE_CODE} still yields a response_code tag.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import NamedTuple

from .base import CompiledMatcher, CompileError, FieldSpec, Modifier
from .timestamps import custom_layout, is_timestamp_modifier

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"""%\{
        (?P<pattern>\w+)
        (?::(?P<field>[^:{}\s]+))?
        (?::(?P<modifier>ts-"[^"]*"|[^:{}\s"]+))?
    \}""",
    re.VERBOSE,
)

MODIFIERS = {
    "string": Modifier.STRING,
    "int": Modifier.INT,
    "float": Modifier.FLOAT,
    "duration": Modifier.DURATION,
    "tag": Modifier.TAG,
    "drop": Modifier.DROP,
}


class Token(NamedTuple):
    start: int
    end: int
    pattern: str
    field: str | None
    modifier: str | None


def scan_tokens(body: str) -> list[Token]:
    """
    Find every %{...} reference in a pattern body.

    Raises ValueError on a %{ that does not open a well-formed reference.
    """
    tokens = []
    pos = 0
    while True:
        idx = body.find("%{", pos)
        if idx < 0:
            return tokens
        m = TOKEN_RE.match(body, idx)
        if not m:
            end = body.find("}", idx)
            snippet = body[idx:] if end < 0 else body[idx : end + 1]
            raise ValueError(f"malformed pattern reference {snippet!r}")
        tokens.append(Token(m.start(), m.end(), m["pattern"], m["field"], m["modifier"]))
        pos = m.end()


class PatternCompiler:
    """Turns top-level patterns into CompiledMatchers using a pattern library."""

    def __init__(self, library: Mapping[str, str]):
        self.library = library

    def compile(self, patterns: Sequence[str]) -> list[CompiledMatcher]:
        return [self.compile_one(p) for p in patterns]

    def compile_one(self, pattern: str) -> CompiledMatcher:
        fields: list[FieldSpec] = []
        try:
            expanded = self._expand(pattern, (), fields)
        except ValueError as exc:
            raise CompileError(str(exc), pattern=pattern) from exc

        ts_fields = [f for f in fields if f.modifier is Modifier.TIMESTAMP]
        if len(ts_fields) > 1:
            names = ", ".join(f.name for f in ts_fields)
            raise CompileError(
                f"each pattern is allowed only one timestamp field, found: {names}",
                pattern=pattern,
            )

        try:
            regex = re.compile(expanded)
        except re.error as exc:
            raise CompileError(f"invalid regular expression: {exc}", pattern=pattern) from exc

        logger.debug("Compiled %s with %d named captures", pattern, len(fields))
        return CompiledMatcher(
            pattern=pattern,
            regex=regex,
            fields=tuple(fields),
            timestamp_field=ts_fields[0] if ts_fields else None,
        )

    def _expand(self, body: str, stack: tuple[str, ...], fields: list[FieldSpec]) -> str:
        out = []
        pos = 0
        for token in scan_tokens(body):
            out.append(body[pos : token.start])
            name = token.pattern
            if name in stack:
                cycle = " -> ".join((*stack[stack.index(name) :], name))
                raise ValueError(f"pattern reference cycle: {cycle}")
            if name not in self.library:
                raise ValueError(f"undefined pattern %{{{name}}}")

            if token.field:
                # allocate before expanding so outer groups precede inner ones
                spec = self._field_spec(token, len(fields))
                fields.append(spec)
                inner = self._expand(self.library[name], (*stack, name), fields)
                out.append(f"(?P<{spec.group}>{inner})")
            else:
                inner = self._expand(self.library[name], (*stack, name), fields)
                out.append(f"(?:{inner})")
            pos = token.end
        out.append(body[pos:])
        return "".join(out)

    def _field_spec(self, token: Token, index: int) -> FieldSpec:
        group = f"_g{index}"
        mod = token.modifier
        if mod is None:
            return FieldSpec(group, token.field)
        if mod in MODIFIERS:
            return FieldSpec(group, token.field, MODIFIERS[mod])
        if is_timestamp_modifier(mod):
            layout = custom_layout(mod) or mod
            return FieldSpec(group, token.field, Modifier.TIMESTAMP, layout)
        logger.warning(
            "Unknown modifier %r on field %s, keeping it as a string", mod, token.field
        )
        return FieldSpec(group, token.field)

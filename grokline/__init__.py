# Explicit re-exports for library users.
from .base import (
    CompiledMatcher as CompiledMatcher,
)
from .base import (
    CompileError as CompileError,
)
from .base import (
    FieldSpec as FieldSpec,
)
from .base import (
    GrokError as GrokError,
)
from .base import (
    Modifier as Modifier,
)
from .base import (
    ParseError as ParseError,
)
from .base import (
    Record as Record,
)
from .compiler import PatternCompiler as PatternCompiler
from .config import GrokConfig as GrokConfig
from .config import config_from_env as config_from_env
from .library import PatternLibrary as PatternLibrary
from .parser import GrokParser as GrokParser
from .parser import compile_parser as compile_parser
from .tsmod import TimestampModder as TimestampModder

__all__ = [
    "CompileError",
    "CompiledMatcher",
    "FieldSpec",
    "GrokConfig",
    "GrokError",
    "GrokParser",
    "Modifier",
    "ParseError",
    "PatternCompiler",
    "PatternLibrary",
    "Record",
    "TimestampModder",
    "compile_parser",
    "config_from_env",
]

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import re

from .locator import WatchTarget


DEFAULT_POLL_INTERVAL = 0.1
DEFAULT_CHUNK_SIZE = 512 * 1024
DEFAULT_ENCODING = "utf-8"


class PatternError(ValueError):
    """Raised when a filter pattern is not a valid regular expression."""


LinePredicate = Callable[[str], bool]

# leading global inline flags, e.g. "(?i)", must stay at the very start
_GLOBAL_FLAGS = re.compile(r"^(?:\(\?[aiLmsux]+\))+")


def _match_all(line: str) -> bool:
    return True


def _pattern_error(pattern: str, e: re.error) -> PatternError:
    return PatternError(
        f"Invalid regex '{pattern}': {e}\n"
        f"Please check the pattern given to --filter-regex"
    )


@dataclass(frozen=True)
class FilterSpec:
    pattern: str = ""
    is_regex: bool = False
    case_insensitive: bool = False
    invert: bool = False

    def compile(self) -> LinePredicate:
        """
        Build the predicate deciding whether one line is emitted.

        Substring mode escapes the text and searches anywhere in the line,
        inverting the result when requested. Regex mode anchors the pattern
        so that the expression itself carries the inversion.
        """
        if not self.pattern:
            return _match_all

        flags = re.IGNORECASE if self.case_insensitive else 0

        if not self.is_regex:
            compiled = re.compile(re.escape(self.pattern), flags)
            invert = self.invert
            return lambda line: (compiled.search(line) is not None) != invert

        try:
            # checked bare first: the wrapping group could balance a stray ')('
            re.compile(self.pattern, flags)
        except re.error as e:
            raise _pattern_error(self.pattern, e)

        m = _GLOBAL_FLAGS.match(self.pattern)
        prefix = m.group(0) if m else ""
        body = self.pattern[len(prefix):]
        if self.invert:
            source = f"{prefix}^(?!.*(?:{body})).*$"
        else:
            source = f"{prefix}^.*(?:{body}).*$"
        try:
            compiled = re.compile(source, flags)
        except re.error as e:
            raise _pattern_error(self.pattern, e)
        return lambda line: compiled.match(line) is not None


@dataclass(frozen=True)
class TailConfig:
    target: WatchTarget
    filter: FilterSpec = field(default_factory=FilterSpec)
    colors: bool = True
    poll_interval: float = DEFAULT_POLL_INTERVAL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    encoding: str = DEFAULT_ENCODING


def build_filter(
    text: Optional[str] = None,
    regex: Optional[str] = None,
    *,
    ignore_case: bool = False,
    invert: bool = False,
) -> FilterSpec:
    """Pick the filter from the CLI options; a regex wins over plain text."""
    if regex:
        spec = FilterSpec(pattern=regex, is_regex=True, case_insensitive=ignore_case, invert=invert)
    else:
        spec = FilterSpec(pattern=text or "", case_insensitive=ignore_case, invert=invert)
    # fail fast on a bad regex, before the session starts
    spec.compile()
    return spec


def build_config(
    target: WatchTarget,
    spec: FilterSpec,
    *,
    colors: bool = True,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: str = DEFAULT_ENCODING,
) -> TailConfig:
    if poll_interval < 0:
        raise ValueError(f"Poll interval must not be negative, got {poll_interval}")
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be positive, got {chunk_size}")
    return TailConfig(
        target=target,
        filter=spec,
        colors=colors,
        poll_interval=poll_interval,
        chunk_size=chunk_size,
        encoding=encoding,
    )

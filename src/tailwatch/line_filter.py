from __future__ import annotations
from typing import Callable
import re

from .config import FilterSpec


_TERMINATORS = re.compile(r"[\r\n]+")


class LineFilter:
    """
    Stream-oriented line filter.

    Text arrives in arbitrary chunks; only lines whose terminator has been
    seen are matched and emitted. The unterminated tail is carried over to
    the next write and is never flushed on its own.
    """
    def __init__(self, spec: FilterSpec, emit: Callable[[str], None]) -> None:
        self.spec = spec
        self._predicate = spec.compile()
        self._emit = emit
        self._carry = ""

    @property
    def pending(self) -> str:
        return self._carry

    def write(self, chunk: str) -> None:
        text = self._carry + chunk
        last = max(text.rfind("\r"), text.rfind("\n"))
        if last < 0:
            self._carry = text
            return

        complete, self._carry = text[: last + 1], text[last + 1 :]
        for line in _TERMINATORS.split(complete):
            # split() leaves empty edges around leading/trailing terminators
            if not line:
                continue
            if self._predicate(line):
                self._emit(line)

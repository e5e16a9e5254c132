from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from contextlib import closing
import codecs
import threading
import time

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_ENCODING, DEFAULT_POLL_INTERVAL, TailConfig
from .line_filter import LineFilter
from .logutil import get_logger
from .notify import Notifier
from .sources.file_follow import TransientReadError, file_length, read_range


# -------------------------
# Model
# -------------------------
class FileStatus(Enum):
    UNKNOWN = "unknown"
    NOT_EXIST = "not_exist"
    SHRUNK = "shrunk"
    IDLE = "idle"


# statuses worth telling the user about when entered
_NOTIFY_ON = (FileStatus.NOT_EXIST, FileStatus.SHRUNK)


@dataclass
class FileState:
    status: FileStatus = FileStatus.UNKNOWN
    offset: int = 0


# -------------------------
# Engine
# -------------------------
class TailEngine:
    """
    Polls one path and forwards whatever was appended since the last poll.

    Each poll compares the file length with the recorded offset:
      - missing file         -> NOT_EXIST, offset kept
      - length == offset     -> IDLE
      - length <  offset     -> SHRUNK, offset back to 0 (read on next poll)
      - length >  offset     -> read [offset, length), IDLE
    The notifier hears about entering NOT_EXIST or SHRUNK only, once per edge.
    """
    def __init__(
        self,
        path: str,
        write: Callable[[str], None],
        notifier: Notifier,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.path = path
        self.write = write
        self.notifier = notifier
        self.poll_interval = poll_interval
        self.chunk_size = chunk_size
        self.encoding = encoding
        self.state = FileState()
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._log = get_logger()

    @classmethod
    def from_config(cls, config: TailConfig, line_filter: LineFilter, notifier: Notifier) -> "TailEngine":
        return cls(
            config.target.path,
            line_filter.write,
            notifier,
            poll_interval=config.poll_interval,
            chunk_size=config.chunk_size,
            encoding=config.encoding,
        )

    def _forward(self, length: int) -> None:
        # closing() releases the handle even when the sink raises mid-read
        with closing(read_range(self.path, self.state.offset, length, self.chunk_size)) as chunks:
            for data in chunks:
                # a split multi-byte character stays in the decoder until its tail arrives
                self.state.offset += len(data)
                text = self._decoder.decode(data)
                if text:
                    self.write(text)

    def _evaluate(self) -> FileStatus:
        length = file_length(self.path)
        if length is None:
            return FileStatus.NOT_EXIST
        if length == self.state.offset:
            return FileStatus.IDLE
        if length < self.state.offset:
            self.state.offset = 0
            self._decoder.reset()
            return FileStatus.SHRUNK
        self._forward(length)
        return FileStatus.IDLE

    def poll(self) -> FileState:
        """Run exactly one tick and return the resulting state."""
        previous = self.state.status
        try:
            status = self._evaluate()
        except TransientReadError as e:
            # offset already counts every byte forwarded before the failure
            self._log.debug("Skipping poll of %s: %s", self.path, e)
            status = FileStatus.UNKNOWN
        self.state.status = status

        if status != previous and status in _NOTIFY_ON:
            if status is FileStatus.NOT_EXIST:
                self.notifier.waiting(self.path)
            else:
                self.notifier.restarting(self.path)
        return self.state

    def run(self, stop_event: Optional[threading.Event] = None, max_ticks: Optional[int] = None) -> None:
        """
        Poll until `stop_event` is set (or `max_ticks` polls have run).

        The stop event is checked between polls only; a poll in progress
        always completes. The notifier is closed on the way out.
        """
        ticks = 0
        try:
            while True:
                self.poll()
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
                if stop_event is None:
                    time.sleep(self.poll_interval)
                elif stop_event.wait(self.poll_interval):
                    break
        finally:
            self.notifier.close()

from __future__ import annotations
from typing import Iterator, Optional
import os


class TransientReadError(Exception):
    """An I/O failure while inspecting or reading the watched file."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Cannot read {path}: {cause}")
        self.path = path
        self.cause = cause


def file_length(path: str) -> Optional[int]:
    """Current size of `path` in bytes, or None when it does not exist."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise TransientReadError(path, e) from e
    return st.st_size


def read_range(path: str, start: int, stop: int, chunk_size: int) -> Iterator[bytes]:
    """
    Yield the bytes of `path` in [start, stop) in chunks of at most
    `chunk_size`.

    The file is opened fresh and closed when the generator finishes or is
    closed, so nothing stays open between polls and rotation tools can
    rename or replace the file freely. Reading stops early if the file got
    shorter than `stop` in the meantime.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise TransientReadError(path, e) from e

    with f:
        try:
            f.seek(start)
        except OSError as e:
            raise TransientReadError(path, e) from e

        remaining = stop - start
        while remaining > 0:
            try:
                data = f.read(min(chunk_size, remaining))
            except OSError as e:
                raise TransientReadError(path, e) from e
            if not data:
                break
            remaining -= len(data)
            yield data

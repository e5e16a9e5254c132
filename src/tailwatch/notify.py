from __future__ import annotations
from typing import Optional, Protocol, Tuple

from rich.console import Console
from rich.style import Style


class Notifier(Protocol):
    def started(self, path: str) -> None: ...

    def waiting(self, path: str) -> None: ...

    def restarting(self, path: str) -> None: ...

    def close(self) -> None: ...


# -------------------------
# Color inference
# -------------------------
def infer_color(text: str) -> Tuple[int, int, int]:
    """
    Derive a stable RGB color from a piece of text.

    The UTF-16LE bytes of the text are dealt round-robin into three
    components, each summed modulo 256. The same banner therefore always
    gets the same color, which makes several tail windows easy to tell
    apart.
    """
    sums = [0, 0, 0]
    for i, b in enumerate(text.encode("utf-16-le")):
        sums[i % 3] += b
    return sums[0] % 256, sums[1] % 256, sums[2] % 256


def banner_style(text: str) -> Style:
    r, g, b = infer_color(text)
    fg = 0 if (r + g + b) / 3 >= 128 else 255
    return Style(color=f"rgb({fg},{fg},{fg})", bgcolor=f"rgb({r},{g},{b})")


# -------------------------
# Implementations
# -------------------------
class PlainNotifier:
    """Status messages without any styling or terminal title changes."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(no_color=True, highlight=False)

    def _say(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def started(self, path: str) -> None:
        self._say(f"Tailing file {path}")

    def waiting(self, path: str) -> None:
        self.console.line()
        self._say(f"Waiting for {path} to be created.")

    def restarting(self, path: str) -> None:
        self.console.line()
        self._say(f"Restarting {path}.")

    def close(self) -> None:
        self.console.line()
        self._say("Done.")


class ColorNotifier(PlainNotifier):
    """Highlights status changes and colors the banner after the path."""

    STATUS_STYLE = Style(reverse=True)

    def __init__(self, console: Optional[Console] = None) -> None:
        super().__init__(console or Console(highlight=False))
        self._title_set = False

    def _say(self, text: str, style: Optional[Style] = None) -> None:
        self.console.print(
            text, style=style or self.STATUS_STYLE, markup=False, highlight=False, soft_wrap=True
        )

    def started(self, path: str) -> None:
        title = f"Tailing file {path}"
        self._title_set = self.console.set_window_title(title)
        self._say(title, banner_style(title))

    def close(self) -> None:
        self.console.line()
        self._say("Done.")
        if self._title_set:
            self.console.set_window_title("")
            self._title_set = False


def make_notifier(colors: bool, console: Optional[Console] = None) -> Notifier:
    """Choose the notifier once per session."""
    if colors:
        return ColorNotifier(console)
    return PlainNotifier(console)

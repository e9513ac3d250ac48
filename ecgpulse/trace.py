"""A scrolling trace of the filtered signal on a small monochrome screen."""

from __future__ import annotations

SCREEN_WIDTH = 128
SCREEN_HEIGHT = 32
LABEL_WIDTH = 42
LABEL_HEIGHT = 8


def signal_to_row(
    value: float, window_min: float, window_max: float, height: int = SCREEN_HEIGHT
) -> int:
    """Map ``value`` within the signal window to a screen row (0 is the top)."""
    span = window_max - window_min
    if span == 0:
        raise ValueError("signal window is empty")
    conversion = span / height
    return int(height - (value - window_min) / conversion - 1)


class TraceDisplay:
    """Frame buffer that draws the signal left to right and wraps at the edge."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"invalid screen size {width}x{height}")
        self.width = width
        self.height = height
        self.column = 0
        self.bpm = 0
        self._last = (0, 0)
        self._pixels: set[tuple[int, int]] = set()

    def clear(self) -> None:
        """Turn every pixel off."""
        self._pixels.clear()

    def pixel(self, x: int, y: int) -> bool:
        """Whether the pixel at ``(x, y)`` is lit."""
        return (x, y) in self._pixels

    def plot(self, value: float, window_min: float, window_max: float, bpm: int) -> int:
        """Draw the next point of the trace, update the BPM label and return the row."""
        row = signal_to_row(value, window_min, window_max, self.height)
        if self.column > self.width - 1:
            self.clear()
            self.column = 0
            self._last = (0, self._last[1])
        self._blank(LABEL_WIDTH, LABEL_HEIGHT)
        self.bpm = bpm
        self._line(self._last, (self.column, row))
        self._last = (self.column, row)
        self.column += 1
        return row

    def render(self) -> str:
        """Text picture of the screen: the BPM label, then one line per pixel row."""
        rows = [
            "".join("#" if (x, y) in self._pixels else "." for x in range(self.width))
            for y in range(self.height)
        ]
        return "\n".join([f"BPM:{self.bpm}", *rows])

    def _set(self, x: int, y: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels.add((x, y))

    def _blank(self, width: int, height: int) -> None:
        self._pixels = {(x, y) for x, y in self._pixels if not (x < width and y < height)}

    def _line(self, start: tuple[int, int], end: tuple[int, int]) -> None:
        x0, y0 = start
        x1, y1 = end
        steep = abs(y1 - y0) > abs(x1 - x0)
        if steep:
            x0, y0, x1, y1 = y0, x0, y1, x1
        if x0 > x1:
            x0, x1, y0, y1 = x1, x0, y1, y0
        dx = x1 - x0
        dy = abs(y1 - y0)
        err = dx // 2
        ystep = 1 if y0 < y1 else -1
        y = y0
        for x in range(x0, x1 + 1):
            if steep:
                self._set(y, x)
            else:
                self._set(x, y)
            err -= dy
            if err < 0:
                y += ystep
                err += dx
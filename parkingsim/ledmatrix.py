"""Frame buffer for a 5x5 serpentine WS2812B LED matrix."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

LED_COUNT = 25
SIDE = 5
SPOT_COLOR = (0, 0, 80)


@dataclass(frozen=True)
class Pixel:
    """One LED colour; the strip receives it in G, R, B order."""

    r: int = 0
    g: int = 0
    b: int = 0


def get_index(x: int, y: int) -> int:
    """Strip position of the LED in column ``x`` and row ``y``.

    Even rows run one way and odd rows the other, counted from the end of the strip.
    """
    if not (0 <= x < SIDE and 0 <= y < SIDE):
        raise ValueError(f"position ({x}, {y}) outside the {SIDE}x{SIDE} matrix")
    column = x if y % 2 == 0 else SIDE - 1 - x
    return LED_COUNT - 1 - (y * SIDE + column)


def xy_from_spot(spot: int) -> tuple[int, int]:
    """Column and row of a parking spot numbered 1 to 25."""
    if not 1 <= spot <= LED_COUNT:
        raise ValueError(f"spot must be between 1 and {LED_COUNT}, got {spot}")
    row, column = divmod(spot - 1, SIDE)
    return column, row


def _check_channel(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"colour channel {value} outside 0..255")
    return value


class LedMatrix:
    """Pixel buffer for the matrix; ``write`` hands the GRB frame to ``sink``."""

    def __init__(self, sink: Callable[[bytes], None] | None = None) -> None:
        self.sink = sink
        self._leds = [Pixel() for _ in range(LED_COUNT)]

    @property
    def pixels(self) -> tuple[Pixel, ...]:
        """The current colour of every LED, in strip order."""
        return tuple(self._leds)

    def set_led(self, index: int, r: int, g: int, b: int) -> None:
        """Set the colour of the LED at strip position ``index``."""
        if not 0 <= index < LED_COUNT:
            raise IndexError(f"LED index {index} outside 0..{LED_COUNT - 1}")
        self._leds[index] = Pixel(_check_channel(r), _check_channel(g), _check_channel(b))

    def clear(self) -> None:
        """Turn every LED off in the buffer."""
        self._leds = [Pixel() for _ in range(LED_COUNT)]

    def frame(self) -> bytes:
        """The buffer as the byte stream the strip expects: G, R, B per LED."""
        return bytes(channel for led in self._leds for channel in (led.g, led.r, led.b))

    def write(self) -> None:
        """Send the current frame to the sink."""
        if self.sink is not None:
            self.sink(self.frame())

    def clear_all(self) -> None:
        """Turn every LED off and send the frame."""
        self.clear()
        self.write()

    def set_spot(self, spot: int, on: bool) -> None:
        """Light a parking spot in blue, or turn it off, and send the frame."""
        x, y = xy_from_spot(spot)
        color = SPOT_COLOR if on else (0, 0, 0)
        self.set_led(get_index(x, y), *color)
        self.write()

    def draw_sprite(self, sprite: Sequence[Sequence[Iterable[int]]],
                    intensity: float = 1.0) -> None:
        """Copy a 5x5 grid of (r, g, b) rows into the buffer, scaled by ``intensity``."""
        rows = list(sprite)
        if len(rows) != SIDE or any(len(row) != SIDE for row in rows):
            raise ValueError(f"sprite must be {SIDE}x{SIDE}")
        for y, row in enumerate(rows):
            for x, rgb in enumerate(row):
                r, g, b = (int(channel * intensity) for channel in rgb)
                self.set_led(get_index(x, y), r, g, b)
"""Frame buffer and command stream for an SSD1306 monochrome OLED."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Protocol

from parkingsim.font import GLYPH_WIDTH, glyph

DATA_PREFIX = 0x40
COMMAND_PREFIX = 0x80


class Command(IntEnum):
    """SSD1306 command opcodes."""

    SET_CONTRAST = 0x81
    SET_ENTIRE_ON = 0xA4
    SET_NORM_INV = 0xA6
    SET_DISP = 0xAE
    SET_MEM_ADDR = 0x20
    SET_COL_ADDR = 0x21
    SET_PAGE_ADDR = 0x22
    SET_DISP_START_LINE = 0x40
    SET_SEG_REMAP = 0xA0
    SET_MUX_RATIO = 0xA8
    SET_COM_OUT_DIR = 0xC0
    SET_DISP_OFFSET = 0xD3
    SET_COM_PIN_CFG = 0xDA
    SET_DISP_CLK_DIV = 0xD5
    SET_PRECHARGE = 0xD9
    SET_VCOM_DESEL = 0xDB
    SET_CHARGE_PUMP = 0x8D


class Bus(Protocol):
    """Anything that can carry an I2C write to a device address."""

    def write(self, address: int, data: bytes) -> None: ...


class Display:
    """An SSD1306 display held as a vertical-addressing frame buffer."""

    def __init__(self, width: int = 128, height: int = 64, address: int = 0x3C,
                 bus: Bus | None = None) -> None:
        if width <= 0 or height <= 0 or height % 8:
            raise ValueError("width must be positive and height a positive multiple of 8")
        self.width = width
        self.height = height
        self.pages = height // 8
        self.address = address
        self.bus = bus
        self._buffer = bytearray(self.pages * width + 1)
        self._buffer[0] = DATA_PREFIX

    @property
    def buffer(self) -> bytes:
        """The data transfer sent to the device: a data prefix and the frame."""
        return bytes(self._buffer)

    def _write(self, data: Iterable[int]) -> None:
        if self.bus is not None:
            self.bus.write(self.address, bytes(data))

    def command(self, value: int) -> None:
        """Send a single command byte."""
        self._write((COMMAND_PREFIX, value & 0xFF))

    def config(self) -> None:
        """Send the power-up configuration sequence."""
        sequence = (
            Command.SET_DISP | 0x00,
            Command.SET_MEM_ADDR, 0x01,
            Command.SET_DISP_START_LINE | 0x00,
            Command.SET_SEG_REMAP | 0x01,
            Command.SET_MUX_RATIO, self.height - 1,
            Command.SET_COM_OUT_DIR | 0x08,
            Command.SET_DISP_OFFSET, 0x00,
            Command.SET_COM_PIN_CFG, 0x12,
            Command.SET_DISP_CLK_DIV, 0x80,
            Command.SET_PRECHARGE, 0xF1,
            Command.SET_VCOM_DESEL, 0x30,
            Command.SET_CONTRAST, 0xFF,
            Command.SET_ENTIRE_ON,
            Command.SET_NORM_INV,
            Command.SET_CHARGE_PUMP, 0x14,
            Command.SET_DISP | 0x01,
        )
        for value in sequence:
            self.command(value)

    def send_data(self) -> None:
        """Set the full address window and push the frame buffer."""
        for value in (Command.SET_COL_ADDR, 0, self.width - 1,
                      Command.SET_PAGE_ADDR, 0, self.pages - 1):
            self.command(value)
        self._write(self._buffer)

    def _locate(self, x: int, y: int) -> tuple[int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} display")
        return x * self.pages + (y >> 3) + 1, y & 0b111

    def pixel(self, x: int, y: int, value: bool) -> None:
        """Turn one pixel on or off."""
        index, bit = self._locate(x, y)
        if value:
            self._buffer[index] |= 1 << bit
        else:
            self._buffer[index] &= ~(1 << bit) & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        """Whether the pixel at (x, y) is on."""
        index, bit = self._locate(x, y)
        return bool(self._buffer[index] & (1 << bit))

    def fill(self, value: bool) -> None:
        """Set every pixel to ``value``."""
        byte = 0xFF if value else 0x00
        self._buffer[1:] = bytes([byte]) * (len(self._buffer) - 1)

    def rect(self, top: int, left: int, width: int, height: int, value: bool,
             fill: bool) -> None:
        """Draw a rectangle outline, optionally filling its interior."""
        if width <= 0 or height <= 0:
            return
        right = left + width - 1
        bottom = top + height - 1
        for x in range(left, left + width):
            self.pixel(x, top, value)
            self.pixel(x, bottom, value)
        for y in range(top, top + height):
            self.pixel(left, y, value)
            self.pixel(right, y, value)
        if fill:
            for x in range(left + 1, right):
                for y in range(top + 1, bottom):
                    self.pixel(x, y, value)

    def line(self, x0: int, y0: int, x1: int, y1: int, value: bool) -> None:
        """Draw a straight line with Bresenham's algorithm."""
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while True:
            self.pixel(x0, y0, value)
            if x0 == x1 and y0 == y1:
                break
            e2 = err * 2
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy

    def hline(self, x0: int, x1: int, y: int, value: bool) -> None:
        """Draw a horizontal line from x0 to x1 inclusive."""
        for x in range(x0, x1 + 1):
            self.pixel(x, y, value)

    def vline(self, x: int, y0: int, y1: int, value: bool) -> None:
        """Draw a vertical line from y0 to y1 inclusive."""
        for y in range(y0, y1 + 1):
            self.pixel(x, y, value)

    def draw_char(self, char: str, x: int, y: int) -> None:
        """Draw one 8x8 character with its top-left corner at (x, y)."""
        for i, column in enumerate(glyph(char)):
            for j in range(8):
                self.pixel(x + i, y + j, bool(column & (1 << j)))

    def draw_string(self, text: str, x: int, y: int) -> None:
        """Draw text, wrapping at the right edge and stopping near the bottom."""
        for char in text:
            self.draw_char(char, x, y)
            x += GLYPH_WIDTH
            if x + GLYPH_WIDTH >= self.width:
                x = 0
                y += 8
            if y + 8 >= self.height:
                break

    def render(self) -> str:
        """The frame as text: one line per row, '#' for lit and '.' for dark pixels."""
        return "\n".join(
            "".join("#" if self.get_pixel(x, y) else "." for x in range(self.width))
            for y in range(self.height)
        )
"""Smart parking lot simulator with an HTTP API, an OLED frame buffer and an LED matrix buffer."""

__version__ = "0.1.0"
__all__ = ["font", "ssd1306", "ledmatrix", "server"]
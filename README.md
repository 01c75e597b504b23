# parkingsim

A small smart-parking simulator. It models a lot of up to 25 spots. Each spot
maps to one LED of a 5x5 matrix, and a 128x64 monochrome SSD1306-style display
shows the number of spots and how many are taken. The lot is controlled through
a tiny HTTP API.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running the server

```
parkingsim --port 8080
```

Options:

- `--host` – address to listen on (default `0.0.0.0`)
- `--port` – TCP port (default `80`, which usually needs extra privileges)
- `--spots` – number of spots, 1 to 25 (default `25`)

The server reads one request per connection, sends one response and closes the
connection. It stops on Ctrl+C.

- `GET /vagaN` switches spot `N` (1 to the number of spots) between free and
  occupied. The reply is JSON such as `{"vaga": 3, "ocupada": true}`, and the
  change is logged as `Vaga 3 ocupada` or `Vaga 3 liberada`.
- `GET /status` returns the state of every spot, `1` for taken and `0` for
  free, for example `{"vagas":[0,1,0,...]}`.
- Anything else, including a spot number out of range, gets
  `404 Not Found` with a plain-text body.

Every response carries `Access-Control-Allow-Origin: *`, so a browser page can
call the API directly.

## Using it as a library

```python
from parkingsim.ssd1306 import Display
from parkingsim.ledmatrix import LedMatrix
from parkingsim.server import ParkingLot

display = Display()            # 128x64, address 0x3C, no bus
matrix = LedMatrix()           # no sink
lot = ParkingLot(25, display, matrix)

print(lot.handle_request("GET /vaga3 HTTP/1.1\r\n\r\n"))
print(lot.occupied_count())    # 1
print(display.render())        # the screen as '#' and '.' characters
print(matrix.frame().hex())    # 75 bytes, G, R, B per LED
```

The modules:

- `parkingsim.font` – an 8x8 bitmap font for printable ASCII; `glyph(char)`
  returns the eight column bytes, and characters outside `' '`..`'~'` draw as
  a space.
- `parkingsim.ssd1306` – `Display` keeps the frame buffer in memory and offers
  `pixel`, `get_pixel`, `fill`, `rect`, `line`, `hline`, `vline`,
  `draw_char`, `draw_string` and `render`. `config()` and `send_data()` write
  the command and data bytes to an optional `bus` object with a
  `write(address, data)` method. `Command` lists the command opcodes. Drawing
  outside the display raises `IndexError`.
- `parkingsim.ledmatrix` – `LedMatrix` holds the colour of each of the 25 LEDs
  as `Pixel` values, with `set_led`, `clear`, `clear_all`, `set_spot` and
  `draw_sprite`; `write()` hands the GRB `frame()` to an optional `sink`
  callable. `get_index(x, y)` maps a matrix position to its place on the
  serpentine strip and `xy_from_spot(spot)` gives the column and row of a spot.
- `parkingsim.server` – `ParkingLot` tracks which spots are taken (`toggle`,
  `occupied_count`, `show_on_display`, `handle_request`), and
  `serve(lot, host, port)` answers HTTP requests for it until interrupted.
  `main()` is the `parkingsim` command.

## What it does not do

The display and the LED matrix exist only as buffers in memory. The
`parkingsim` command creates them without a bus or a sink, so nothing is drawn
on a physical screen or LED strip; to see the state, use `Display.render()`,
`LedMatrix.frame()` or pass your own `bus` and `sink` when using the library.
There is no network setup of its own and no handling of buttons; the server
simply listens on the given host and port.
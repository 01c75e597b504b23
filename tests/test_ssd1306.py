import pytest

from parkingsim.font import glyph
from parkingsim.ssd1306 import Command, Display


class FakeBus:
    def __init__(self):
        self.writes = []

    def write(self, address, data):
        self.writes.append((address, bytes(data)))


def lit(display):
    return {
        (x, y)
        for x in range(display.width)
        for y in range(display.height)
        if display.get_pixel(x, y)
    }


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def display(bus):
    return Display(128, 64, 0x3C, bus)


def test_new_display_is_blank_with_data_prefix(display):
    assert display.buffer[0] == 0x40
    assert len(display.buffer) == display.pages * display.width + 1
    assert lit(display) == set()


@pytest.mark.parametrize(
    "value, expected",
    [
        (0xAE, "SET_DISP"),
        (0x8D, "SET_CHARGE_PUMP"),
        (0x21, "SET_COL_ADDR"),
        (0x81, "SET_CONTRAST"),
    ],
)
def test_command_lookup_by_opcode(value, expected):
    command = Command(value)
    assert command.name == expected
    assert int(command) == value


def test_command_writes_prefixed_byte(display, bus):
    display.command(Command.SET_CONTRAST)
    assert bus.writes == [(0x3C, bytes([0x80, 0x81]))]
    assert display.buffer[0] == 0x40
    assert lit(display) == set()


def test_config_turns_display_off_then_on(display, bus):
    display.config()
    sent = [data[1] for _, data in bus.writes]
    assert all(data[0] == 0x80 for _, data in bus.writes)
    assert sent[0] == Command.SET_DISP
    assert sent[-1] == Command.SET_DISP | 0x01
    mux = sent.index(Command.SET_MUX_RATIO)
    assert sent[mux + 1] == display.height - 1


def test_send_data_sets_window_then_pushes_buffer(display, bus):
    display.pixel(3, 9, True)
    display.send_data()
    commands = [data[1] for _, data in bus.writes[:-1]]
    assert commands == [Command.SET_COL_ADDR, 0, display.width - 1,
                        Command.SET_PAGE_ADDR, 0, display.pages - 1]
    assert bus.writes[-1] == (0x3C, display.buffer)


def test_display_without_bus_still_draws():
    display = Display()
    display.send_data()
    display.pixel(0, 0, True)
    assert display.get_pixel(0, 0)


def test_pixel_round_trip(display):
    display.pixel(10, 20, True)
    assert display.get_pixel(10, 20)
    assert lit(display) == {(10, 20)}
    display.pixel(10, 20, False)
    assert not display.get_pixel(10, 20)


def test_pixel_vertical_byte_layout(display):
    display.pixel(0, 0, True)
    display.pixel(1, 8, True)
    buf = display.buffer
    assert buf[1] == 0x01
    assert buf[1 + display.pages + 1] == 0x01


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (128, 0), (0, 64)])
def test_pixel_out_of_range(display, x, y):
    with pytest.raises(IndexError):
        display.pixel(x, y, True)


def test_invalid_geometry():
    with pytest.raises(ValueError):
        Display(128, 30)


def test_fill_on_and_off(display):
    display.fill(True)
    assert len(lit(display)) == display.width * display.height
    assert display.buffer[0] == 0x40
    display.fill(False)
    assert lit(display) == set()


def test_hline_and_vline(display):
    display.hline(2, 6, 3, True)
    assert lit(display) == {(x, 3) for x in range(2, 7)}
    display.fill(False)
    display.vline(5, 10, 12, True)
    assert lit(display) == {(5, y) for y in range(10, 13)}


def test_hline_reversed_draws_nothing(display):
    display.hline(6, 2, 3, True)
    assert lit(display) == set()


def test_line_diagonal(display):
    display.line(0, 0, 9, 9, True)
    assert lit(display) == {(i, i) for i in range(10)}


def test_line_is_symmetric_and_hits_endpoints(display):
    display.line(3, 5, 40, 17, True)
    forward = lit(display)
    display.fill(False)
    display.line(40, 17, 3, 5, True)
    backward = lit(display)
    assert (3, 5) in forward and (40, 17) in forward
    assert len(forward) == 40 - 3 + 1
    assert len(backward) == len(forward)


def test_rect_outline_leaves_interior_dark(display):
    display.rect(10, 20, 5, 4, True, False)
    pixels = lit(display)
    assert all(x in (20, 24) or y in (10, 13) for x, y in pixels)
    assert (22, 11) not in pixels


def test_rect_filled_covers_area(display):
    display.rect(10, 20, 5, 4, True, True)
    assert lit(display) == {(x, y) for x in range(20, 25) for y in range(10, 14)}


def test_draw_char_matches_glyph(display):
    display.draw_char("A", 8, 16)
    for i, column in enumerate(glyph("A")):
        for j in range(8):
            assert display.get_pixel(8 + i, 16 + j) == bool(column & (1 << j))


def test_draw_string_wraps_at_right_edge(display):
    display.draw_string("AB", 112, 0)
    reference = Display()
    reference.draw_char("A", 112, 0)
    reference.draw_char("B", 0, 8)
    assert display.buffer == reference.buffer


def test_draw_string_stops_on_last_row(display):
    display.draw_string("AB", 0, 56)
    reference = Display()
    reference.draw_char("A", 0, 56)
    assert display.buffer == reference.buffer


def test_render_shape_and_content(display):
    display.pixel(2, 1, True)
    rows = display.render().split("\n")
    assert len(rows) == display.height
    assert all(len(row) == display.width for row in rows)
    assert rows[1][2] == "#"
    assert rows[0] == "." * display.width
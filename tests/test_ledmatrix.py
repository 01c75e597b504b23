import pytest

from parkingsim.ledmatrix import (
    LED_COUNT,
    SPOT_COLOR,
    LedMatrix,
    Pixel,
    get_index,
    xy_from_spot,
)


def test_get_index_origin_is_strip_end():
    assert get_index(0, 0) == 24


def test_get_index_is_a_permutation():
    positions = [get_index(x, y) for y in range(5) for x in range(5)]
    assert sorted(positions) == list(range(LED_COUNT))


@pytest.mark.parametrize("y", range(5))
def test_get_index_rows_are_contiguous(y):
    row = [get_index(x, y) for x in range(5)]
    assert all(abs(a - b) == 1 for a, b in zip(row, row[1:]))


def test_get_index_serpentine_rows_join():
    # the end of one row on the strip sits next to the start of the next
    for y in range(4):
        current = {get_index(x, y) for x in range(5)}
        following = {get_index(x, y + 1) for x in range(5)}
        assert min(current) - max(following) == 1
        assert [x for x in range(5) if get_index(x, y) == min(current)] == \
            [x for x in range(5) if get_index(x, y + 1) == max(following)]


@pytest.mark.parametrize("x, y", [(-1, 0), (5, 0), (0, 5), (0, -1)])
def test_get_index_rejects_outside(x, y):
    with pytest.raises(ValueError):
        get_index(x, y)


def test_xy_from_spot_corners():
    assert xy_from_spot(1) == (0, 0)
    assert xy_from_spot(25) == (4, 4)


def test_xy_from_spot_round_trip():
    for spot in range(1, 26):
        x, y = xy_from_spot(spot)
        assert y * 5 + x + 1 == spot


@pytest.mark.parametrize("spot", [0, 26, -3])
def test_xy_from_spot_rejects_out_of_range(spot):
    with pytest.raises(ValueError):
        xy_from_spot(spot)


def test_new_matrix_is_dark():
    matrix = LedMatrix()
    assert matrix.frame() == bytes(LED_COUNT * 3)
    assert matrix.pixels == tuple(Pixel() for _ in range(LED_COUNT))


def test_set_led_frame_uses_grb_order():
    matrix = LedMatrix()
    matrix.set_led(3, 1, 2, 3)
    assert matrix.frame()[9:12] == bytes([2, 1, 3])
    assert matrix.pixels[3] == Pixel(1, 2, 3)


def test_set_led_rejects_bad_index():
    with pytest.raises(IndexError):
        LedMatrix().set_led(LED_COUNT, 0, 0, 0)


def test_set_led_rejects_bad_channel():
    with pytest.raises(ValueError):
        LedMatrix().set_led(0, 256, 0, 0)


def test_write_sends_frame_to_sink():
    frames = []
    matrix = LedMatrix(frames.append)
    matrix.set_led(0, 9, 8, 7)
    matrix.write()
    assert frames == [matrix.frame()]


def test_clear_all_sends_dark_frame():
    frames = []
    matrix = LedMatrix(frames.append)
    matrix.set_led(10, 5, 5, 5)
    matrix.clear_all()
    assert frames == [bytes(LED_COUNT * 3)]


def test_set_spot_lights_blue_and_writes():
    frames = []
    matrix = LedMatrix(frames.append)
    matrix.set_spot(1, True)
    assert matrix.pixels[get_index(0, 0)] == Pixel(*SPOT_COLOR)
    assert len(frames) == 1
    matrix.set_spot(1, False)
    assert frames[-1] == bytes(LED_COUNT * 3)


def test_set_spot_rejects_out_of_range():
    with pytest.raises(ValueError):
        LedMatrix().set_spot(26, True)


def test_draw_sprite_uniform_colour():
    matrix = LedMatrix()
    sprite = [[(10, 20, 30)] * 5 for _ in range(5)]
    matrix.draw_sprite(sprite, 1)
    assert matrix.frame() == bytes([20, 10, 30]) * LED_COUNT


def test_draw_sprite_orientation_and_no_write():
    frames = []
    matrix = LedMatrix(frames.append)
    sprite = [[(0, 0, 0)] * 5 for _ in range(5)]
    sprite[1][0] = (7, 8, 9)
    matrix.draw_sprite(sprite, 1.0)
    assert matrix.pixels[get_index(0, 1)] == Pixel(7, 8, 9)
    assert sum(1 for p in matrix.pixels if p != Pixel()) == 1
    assert frames == []


def test_draw_sprite_zero_intensity_is_dark():
    matrix = LedMatrix()
    matrix.draw_sprite([[(200, 100, 50)] * 5 for _ in range(5)], 0)
    assert matrix.frame() == bytes(LED_COUNT * 3)


def test_draw_sprite_rejects_wrong_shape():
    with pytest.raises(ValueError):
        LedMatrix().draw_sprite([[(0, 0, 0)] * 5] * 4, 1)
from c8vm.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT
from c8vm.runtime.display import Display


def lit(display: Display) -> set[tuple[int, int]]:
    return {
        (x, y)
        for y in range(DISPLAY_HEIGHT)
        for x in range(DISPLAY_WIDTH)
        if display.get_pixel(x, y)
    }


def test_draw_on_blank_has_no_collision():
    display = Display()

    assert not display.draw(0, 0, bytes([0xFF]))
    assert lit(display) == {(x, 0) for x in range(8)}


def test_redraw_erases_and_collides():
    display = Display()
    display.draw(10, 5, bytes([0xFF]))

    assert display.draw(10, 5, bytes([0xFF]))
    assert lit(display) == set()


def test_collision_detected_in_any_row():
    display = Display()
    display.draw(0, 1, bytes([0x80]))

    # Only the second row of the sprite overlaps
    assert display.draw(0, 0, bytes([0x01, 0x80, 0x01]))
    assert not display.get_pixel(0, 1)
    assert display.get_pixel(7, 0)
    assert display.get_pixel(7, 2)


def test_partial_overlap_keeps_other_pixels():
    display = Display()
    display.draw(0, 0, bytes([0xF0]))

    assert display.draw(0, 0, bytes([0x18]))
    assert lit(display) == {(0, 0), (1, 0), (2, 0), (4, 0)}


def test_clips_right_edge():
    display = Display()

    assert not display.draw(60, 0, bytes([0xFF]))
    assert lit(display) == {(60, 0), (61, 0), (62, 0), (63, 0)}


def test_clips_bottom_edge():
    display = Display()
    display.draw(0, 30, bytes([0x80, 0x80, 0x80, 0x80]))

    assert lit(display) == {(0, 30), (0, 31)}


def test_origin_off_screen_draws_nothing():
    display = Display()

    assert not display.draw(70, 40, bytes([0xFF]))
    assert lit(display) == set()


def test_wrap_mode():
    display = Display(wrap=True)
    display.draw(60, 31, bytes([0xFF, 0xFF]))

    assert display.get_pixel(0, 31)
    assert display.get_pixel(3, 0)
    assert display.get_pixel(63, 0)
    assert len(lit(display)) == 16


def test_clear():
    display = Display()
    display.draw(5, 5, bytes([0xAA] * 4))
    display.clear()

    assert lit(display) == set()


def test_get_pixel_out_of_range():
    display = Display()
    display.draw(0, 0, bytes([0x80]))

    assert not display.get_pixel(-1, 0)
    assert not display.get_pixel(DISPLAY_WIDTH, 0)
    assert not display.get_pixel(0, DISPLAY_HEIGHT)


def test_text_dump():
    display = Display()
    display.draw(0, 0, bytes([0xC0]))
    first_row = str(display).splitlines()[0]

    assert first_row == '##' + '.' * (DISPLAY_WIDTH - 2)

import pytest

from ecgpulse.trace import TraceDisplay, signal_to_row


def test_window_bottom_maps_to_last_row():
    assert signal_to_row(5.0, 5.0, 9.0, 32) == 31


def test_row_decreases_as_value_rises():
    rows = [signal_to_row(v, 0.0, 100.0, 32) for v in [0.0, 25.0, 50.0, 75.0]]
    assert rows == sorted(rows, reverse=True)
    assert len(set(rows)) == 4


def test_empty_window_rejected():
    with pytest.raises(ValueError):
        signal_to_row(1.0, 2.0, 2.0)


def test_invalid_screen_size_rejected():
    with pytest.raises(ValueError):
        TraceDisplay(width=0)


def test_first_plot_draws_from_origin():
    display = TraceDisplay()
    row = display.plot(11.0, 0.0, 32.0, 72)
    assert row == signal_to_row(11.0, 0.0, 32.0, 32)
    assert display.pixel(0, row)
    assert display.pixel(0, row // 2)
    assert display.column == 1
    assert display.bpm == 72


def test_label_area_is_blanked_on_each_plot():
    display = TraceDisplay()
    display.plot(28.0, 0.0, 32.0, 0)
    high = signal_to_row(28.0, 0.0, 32.0, 32)
    display.plot(11.0, 0.0, 32.0, 0)
    low = signal_to_row(11.0, 0.0, 32.0, 32)
    assert display.pixel(0, high)
    display.plot(11.0, 0.0, 32.0, 0)
    assert not display.pixel(0, high)
    assert display.pixel(1, low)


def test_trace_wraps_and_clears_at_edge():
    display = TraceDisplay()
    row = signal_to_row(11.0, 0.0, 32.0, 32)
    for _ in range(display.width):
        display.plot(11.0, 0.0, 32.0, 0)
    assert display.column == display.width
    assert display.pixel(5, row)
    display.plot(11.0, 0.0, 32.0, 0)
    assert display.column == 1
    assert not any(display.pixel(5, y) for y in range(display.height))
    assert display.pixel(0, row)


def test_out_of_range_rows_are_clipped():
    display = TraceDisplay()
    display.plot(1000.0, 0.0, 32.0, 0)
    lit = [(x, y) for x in range(display.width) for y in range(display.height) if display.pixel(x, y)]
    assert all(0 <= y < display.height for _, y in lit)
    assert not display.pixel(0, -1)


def test_clear_turns_pixels_off_but_keeps_cursor():
    display = TraceDisplay()
    display.plot(11.0, 0.0, 32.0, 0)
    display.plot(11.0, 0.0, 32.0, 0)
    display.clear()
    assert not any(display.pixel(x, y) for x in range(4) for y in range(display.height))
    assert display.column == 2


def test_render_shape_and_label():
    display = TraceDisplay()
    row = display.plot(11.0, 0.0, 32.0, 72)
    lines = display.render().splitlines()
    assert lines[0] == "BPM:72"
    assert len(lines) == display.height + 1
    assert all(len(line) == display.width for line in lines[1:])
    assert lines[1 + row][0] == "#"
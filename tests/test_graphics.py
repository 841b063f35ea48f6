"""Tests for SCREEN / PLOT and the raster canvas."""

import pytest

from linebasic.runtime import GraphicsNotInitialized, RasterCanvas
from linebasic.runtime.graphics import color_intensity
from .conftest import parse, run_program


class RecordingSurface:
    """Drawing surface that records the calls made to it."""

    def __init__(self):
        self.calls = []

    def initialize(self, width, height, scale):
        self.calls.append(("initialize", width, height, scale))

    def set_pixel(self, x, y, intensity):
        self.calls.append(("set_pixel", x, y, intensity))


class TestScreenAndPlot:
    """Tests for the graphics statements."""

    def test_screen_13_initializes_canvas(self, canvas):
        _, context = run_program(parse("SCREEN 13"), canvas)
        assert context.surface is canvas
        assert (canvas.width, canvas.height, canvas.scale) == (320, 200, 2)
        assert (canvas.display_width, canvas.display_height) == (640, 400)

    def test_other_modes_do_nothing(self, canvas):
        _, context = run_program(parse("SCREEN 12"), canvas)
        assert context.surface is None
        assert not canvas.initialized

    def test_plot_fills_scaled_block(self, canvas):
        run_program(parse("SCREEN 13\nPLOT 10 , 20 , 8"), canvas)
        for px, py in [(20, 40), (21, 40), (20, 41), (21, 41)]:
            assert canvas.get_pixel(px, py) == 255
        assert canvas.get_pixel(22, 40) == 0
        assert canvas.get_pixel(20, 42) == 0

    def test_color_is_divided_by_eight(self, canvas):
        run_program(parse("SCREEN 13\nPLOT 0 , 0 , 4"), canvas)
        assert canvas.get_pixel(0, 0) == 128

    def test_coordinates_truncate(self, canvas):
        run_program(parse("SCREEN 13\nPLOT 1.9 , 2.7 , 8"), canvas)
        assert canvas.get_pixel(2, 4) == 255

    def test_offscreen_plot_is_clipped(self, canvas):
        run_program(parse("SCREEN 13\nPLOT 320 , 0 , 8\nPLOT -1 , 5 , 8\nPLOT 1 / 0 , 0 , 8"),
                    canvas)
        assert max(canvas.pixels) == 0

    def test_plot_before_screen(self):
        with pytest.raises(GraphicsNotInitialized) as excinfo:
            run_program(parse("PLOT 1 , 1 , 1"))
        assert excinfo.value.index == 0
        assert excinfo.value.kind == "PLOT"

    def test_plot_after_unsupported_mode(self):
        with pytest.raises(GraphicsNotInitialized):
            run_program(parse("SCREEN 1\nPLOT 1 , 1 , 1"))

    def test_custom_surface(self):
        surface = RecordingSurface()
        run_program(parse("SCREEN 13\nFOR X = 0 TO 1\nPLOT X , 3 , 2\nNEXT X"), surface)
        assert surface.calls == [
            ("initialize", 320, 200, 2),
            ("set_pixel", 0, 3, 0.25),
            ("set_pixel", 1, 3, 0.25),
        ]


class TestRasterCanvas:
    """Tests for the in-memory canvas."""

    @pytest.mark.parametrize("color,intensity", [
        (0.0, 0.0), (8.0, 1.0), (2.0, 0.25), (16.0, 1.0), (-3.0, 0.0), (float("nan"), 0.0),
    ])
    def test_color_intensity(self, color, intensity):
        assert color_intensity(color) == intensity

    def test_starts_uninitialized(self):
        assert not RasterCanvas().initialized

    def test_pgm(self):
        canvas = RasterCanvas()
        canvas.initialize(2, 1, 2)
        canvas.set_pixel(1, 0, 1.0)
        assert canvas.to_pgm() == b"P5\n4 2\n255\n" + bytes([0, 0, 255, 255, 0, 0, 255, 255])

    def test_save_pgm(self, tmp_path):
        canvas = RasterCanvas()
        canvas.initialize()
        path = tmp_path / "out.pgm"
        canvas.save_pgm(str(path))
        data = path.read_bytes()
        assert data.startswith(b"P5\n640 400\n255\n")
        assert len(data) == len(b"P5\n640 400\n255\n") + 640 * 400

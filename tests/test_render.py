import numpy as np
import pytest
from PIL import Image

from histofractal.canvas import Canvas
from histofractal.fractal import make_fractal
from histofractal.render import grey_level, render_fractal, save_bitmap, to_grey_rgb


def test_grey_rgb_orientation():
    """Flat index x*height + y lands on image row y, column x."""
    canvas = Canvas(width=2, height=3)
    intensity = np.zeros(canvas.size)
    intensity[canvas.flat_index(1, 2)] = 1.0
    intensity[canvas.flat_index(0, 1)] = 0.2

    img = to_grey_rgb(intensity, canvas)
    assert img.shape == (3, 2, 3)
    assert img.dtype == np.uint8
    assert tuple(img[2, 1]) == (255, 255, 255)
    assert tuple(img[1, 0]) == (51, 51, 51)
    assert img.sum() == 3 * 255 + 3 * 51


@pytest.mark.parametrize(
    "g, level",
    [(0.0, 0), (1.0, 255), (0.2, 51), (0.37, 94), (-0.1, 0), (1.3, 255)],
)
def test_grey_level_rounds_and_clamps(g, level):
    assert grey_level(g) == level
    img = to_grey_rgb(np.array([g]), Canvas(width=1, height=1))
    assert img[0, 0, 0] == level


def test_grey_rgb_rejects_wrong_length():
    with pytest.raises(ValueError):
        to_grey_rgb(np.zeros(5), Canvas(width=2, height=3))


def test_save_bitmap(tmp_path):
    canvas = Canvas(width=4, height=2)
    intensity = np.linspace(0.0, 1.0, canvas.size)
    out = save_bitmap(intensity, canvas, tmp_path / "nested" / "frac.png")

    assert out.exists()
    with Image.open(out) as im:
        assert im.size == (4, 2)
        assert im.mode == "RGB"
        x, y = 3, 1
        level = grey_level(intensity[canvas.flat_index(x, y)])
        assert im.getpixel((x, y)) == (level, level, level)


def test_render_fractal_pipeline():
    spec = make_fractal("mandelbrot", max_iterations=50, range_x=(-2.0, 1.0), range_y=(-1.5, 1.5))
    result = render_fractal(spec, 10, workers=2)

    assert (result.canvas.width, result.canvas.height) == (10, 10)
    assert result.escape.shape == (100,)
    assert result.intensity.shape == (100,)
    assert result.intensity.min() == 0.0
    assert result.intensity.max() < 1.0
    np.testing.assert_array_equal(result.intensity[result.escape == -1.0], 0.0)

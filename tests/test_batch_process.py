import numpy as np
import pytest

from imagechain import Color, ImageProcessor
from imagechain.cli.batch_process import build_parser, main

from .helper_functions import solid


@pytest.fixture
def gallery(tmp_path):
    folder = tmp_path / "in"
    folder.mkdir()
    ImageProcessor.from_pixels(solid(8, 4, Color(200, 10, 10))).save_as(folder / "a.png")
    ImageProcessor.from_pixels(solid(8, 8, Color(10, 200, 10))).save_as(folder / "b.jpg")
    (folder / "broken.png").write_bytes(b"junk")
    return folder


def test_processes_every_readable_image(gallery, tmp_path):
    out = tmp_path / "out"
    code = main([str(gallery), str(out), "--resize-width", "4", "--grayscale", "--rotate", "cw"])
    assert code == 0

    a = ImageProcessor.from_file(out / "a.png")
    b = ImageProcessor.from_file(out / "b.png")
    assert (a.width, a.height) == (2, 4)
    assert (b.width, b.height) == (4, 4)
    pixels = a.extract()
    assert (pixels[..., 0] == pixels[..., 1]).all()


def test_missing_input_folder(tmp_path):
    assert main([str(tmp_path / "nope"), str(tmp_path / "out")]) == 2


def test_tint_argument_parsing():
    args = build_parser().parse_args(["in", "out", "--tint", "#ff0000:0.25"])
    assert args.tint == (Color(255, 0, 0), 0.25)


def test_bad_tint_argument_exits():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["in", "out", "--tint", "red"])


def test_noise_is_seeded(gallery, tmp_path):
    first, second = tmp_path / "first", tmp_path / "second"
    main([str(gallery), str(first), "--noise", "0.5", "--seed", "3"])
    main([str(gallery), str(second), "--noise", "0.5", "--seed", "3"])
    assert np.array_equal(
        ImageProcessor.from_file(first / "a.png").extract(),
        ImageProcessor.from_file(second / "a.png").extract(),
    )


def test_zero_resize_width_is_reported(gallery, tmp_path):
    out = tmp_path / "out"
    assert main([str(gallery), str(out), "--resize-width", "0"]) == 1
    assert not (out / "a.png").exists()

"""Tests for the sobel_filter command."""

import numpy as np
import pytest
from PIL import Image

import sobel_filter
from sobel_filter import ImageDecodeError, ImageEncodeError, load_grayscale, main, save_grayscale


@pytest.fixture
def seam_png(tmp_path, vertical_seam):
    path = tmp_path / "seam.png"
    Image.fromarray(vertical_seam).save(path)
    return path


def test_load_converts_rgb_to_luma(tmp_path):
    rgb = np.zeros((4, 5, 3), dtype=np.uint8)
    rgb[:, 2:] = 255
    path = tmp_path / "rgb.png"
    Image.fromarray(rgb).save(path)

    arr = load_grayscale(path)
    assert arr.shape == (4, 5)
    assert arr.dtype == np.uint8
    assert (arr[:, :2] == 0).all()
    assert (arr[:, 2:] == 255).all()


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageDecodeError):
        load_grayscale(tmp_path / "nope.png")


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(ImageDecodeError):
        load_grayscale(path)


def test_save_unknown_extension(tmp_path, impulse):
    with pytest.raises(ImageEncodeError):
        save_grayscale(impulse, tmp_path / "out.notaformat")


def test_save_missing_directory(tmp_path, impulse):
    with pytest.raises(ImageEncodeError):
        save_grayscale(impulse, tmp_path / "missing" / "out.png")


@pytest.mark.parametrize("method", ["loop", "vectorized", "parallel"])
def test_main_writes_edges(tmp_path, seam_png, method, capsys):
    out_path = tmp_path / "edges.png"
    code = main([str(seam_png), str(out_path), "--method", method, "--n-jobs", "1"])

    assert code == 0
    edges = np.array(Image.open(out_path))
    assert edges.shape == (4, 6)
    assert (edges[:, [2, 3]] == 127).all()
    assert (edges[:, [0, 1, 4, 5]] == 0).all()
    assert "Saved:" in capsys.readouterr().out


def test_main_missing_input(tmp_path, capsys):
    code = main([str(tmp_path / "nope.png"), str(tmp_path / "out.png")])
    assert code == 1
    assert "Error:" in capsys.readouterr().err
    assert not (tmp_path / "out.png").exists()


def test_main_bad_output_extension(tmp_path, seam_png, capsys):
    code = main([str(seam_png), str(tmp_path / "out.notaformat")])
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_main_requires_two_paths():
    with pytest.raises(SystemExit) as exc_info:
        main(["only_one.png"])
    assert exc_info.value.code == 2


def test_run_filter_unknown_method(impulse):
    with pytest.raises(ValueError):
        sobel_filter.run_filter(impulse, "fft")

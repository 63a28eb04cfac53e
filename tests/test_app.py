import numpy as np
import pytest
from PIL import Image

from texture_memory.app import build, build_parser, calibrate, config_from_args, main
from texture_memory.common.config import SimulationConfig
from texture_memory.common.errors import ImageLoadError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for suffix in ("GRID_SIZE", "SAMPLE_COUNT", "TIMESTEP", "IMAGE", "SEED"):
        monkeypatch.delenv(f"TEXTURE_MEMORY_{suffix}", raising=False)


@pytest.fixture
def sample_png(tmp_path, striped_image):
    path = tmp_path / "leaf.png"
    Image.fromarray(np.ascontiguousarray(striped_image.transpose(1, 0, 2))).save(path)
    return path


def test_build_trains_and_seeds(striped_image):
    config = SimulationConfig(grid_size=6, seed=5)
    setup = build(config, image=striped_image)
    assert len(setup.memory) == 16
    assert setup.engine.state.size == 6
    assert setup.threshold.kernel.sharpness > 0
    same = build(config, image=striped_image)
    assert np.array_equal(setup.engine.current, same.engine.current)


def test_build_missing_image_is_fatal(tmp_path):
    with pytest.raises(ImageLoadError):
        build(SimulationConfig(image_path=str(tmp_path / "nope.png")))


def test_default_calibration_uses_orange_and_yellow():
    threshold = calibrate(SimulationConfig())
    assert threshold.d_near == pytest.approx(0.0)
    assert threshold.kernel(threshold.d_far) == pytest.approx(0.01)


def test_cli_flags_override_config(sample_png):
    args = build_parser().parse_args([str(sample_png), "--grid-size", "12", "--timestep", "0.2", "--seed", "9"])
    config = config_from_args(args)
    assert config.image_path == str(sample_png)
    assert config.grid_size == 12
    assert config.timestep_seconds == 0.2
    assert config.seed == 9
    assert config.sample_count == 10


def test_main_headless_writes_frame(sample_png, tmp_path):
    out = tmp_path / "frame.png"
    code = main([str(sample_png), "--steps", "2", "--grid-size", "6", "--window-size", "60",
                 "--seed", "3", "--save-frame", str(out)])
    assert code == 0
    with Image.open(out) as img:
        assert img.size == (60, 60)


def test_main_reports_fatal_startup_error(tmp_path):
    assert main([str(tmp_path / "missing.png"), "--steps", "1"]) == 1
    assert main(["--grid-size", "0", "--steps", "1"]) == 1


def test_main_reports_unwritable_frame_path(sample_png, tmp_path):
    out = tmp_path / "missing_dir" / "frame.png"
    code = main([str(sample_png), "--steps", "1", "--grid-size", "4", "--save-frame", str(out)])
    assert code == 1
    assert not out.exists()

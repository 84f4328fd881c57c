import pytest

from mazecam_lib.config import ConfigService, Settings, load_settings


def write_cfg(tmp_path, text):
    path = tmp_path / "mazecam.cfg"
    path.write_text(text)
    return str(path)


def test_defaults_without_file():
    assert load_settings() == Settings()


def test_missing_file_falls_back_to_defaults(tmp_path):
    assert load_settings(str(tmp_path / "nope.cfg")) == Settings()


def test_file_values_override_defaults(tmp_path):
    path = write_cfg(
        tmp_path,
        "[Capture]\ndevice = maze.mp4\ndelay_ms = 50\n"
        "[Quadtree]\nmin_node_size = 16\n"
        "[Display]\nheadless = yes\n",
    )
    settings = load_settings(path)
    assert settings.device == "maze.mp4"
    assert settings.delay_ms == 50
    assert settings.min_node_size == 16
    assert settings.headless is True
    assert settings.density_threshold == 0.05
    assert settings.canny_low == 50


def test_bad_number_names_the_key(tmp_path):
    path = write_cfg(tmp_path, "[DeadEnds]\ndensity_threshold = lots\n")
    with pytest.raises(ValueError, match="density_threshold"):
        load_settings(path)


def test_out_of_range_values_are_rejected(tmp_path):
    path = write_cfg(tmp_path, "[Capture]\ncanny_low = 200\ncanny_high = 100\n")
    with pytest.raises(ValueError, match="Canny"):
        load_settings(path)


def test_saved_defaults_load_back(tmp_path):
    path = str(tmp_path / "mazecam.cfg")
    ConfigService(path).save_defaults()
    assert load_settings(path) == Settings()

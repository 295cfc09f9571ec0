from pathlib import Path

import pytest

from wifitui.app import AUTO_REFRESH_TICKS
from wifitui.config import Configuration, load_yaml
from wifitui.exceptions import ConfigError


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestLoadYaml:
    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        configuration = load_yaml(input=tmp_path / "nope.yaml")

        assert configuration == Configuration()
        assert configuration.tick_interval == 0.25
        assert configuration.refresh_ticks == AUTO_REFRESH_TICKS
        assert configuration.device is None

    def test_empty_file_gives_defaults(self, tmp_path) -> None:
        assert load_yaml(input=write(tmp_path, "")) == Configuration()

    def test_values(self, tmp_path) -> None:
        path = write(
            tmp_path,
            "device: wlp3s0\n"
            "tick_interval: 0.5\n"
            "refresh_ticks: 60\n"
            "redraw_interval: 0.1\n"
            "debug: true\n",
        )

        assert load_yaml(input=path) == Configuration(
            device="wlp3s0",
            tick_interval=0.5,
            refresh_ticks=60,
            redraw_interval=0.1,
            debug=True,
        )

    def test_partial_file_keeps_other_defaults(self, tmp_path) -> None:
        configuration = load_yaml(input=write(tmp_path, "refresh_ticks: 10\n"))
        assert configuration.refresh_ticks == 10
        assert configuration.tick_interval == 0.25

    def test_integers_cast_to_float(self, tmp_path) -> None:
        configuration = load_yaml(input=write(tmp_path, "tick_interval: 1\n"))
        assert configuration.tick_interval == 1.0
        assert isinstance(configuration.tick_interval, float)

    @pytest.mark.parametrize(
        "text",
        [
            "tick_interval: 0\n",
            "redraw_interval: -1\n",
            "refresh_ticks: 0\n",
            "refresh_ticks: lots\n",
            "- a\n- b\n",
            "device: [unclosed\n",
        ],
    )
    def test_invalid(self, tmp_path, text) -> None:
        with pytest.raises(ConfigError):
            load_yaml(input=write(tmp_path, text))

import pytest
import yaml

from settings import DEFAULTS, default_config, load_config


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == DEFAULTS
    cfg['limits']['max_input_bytes'] = 1
    assert DEFAULTS['limits']['max_input_bytes'] == 3_000_000


def test_file_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("compare:\n  vertical_separator: 30\nbogus:\n  x: 1\n")
    cfg = load_config(str(path))
    assert cfg['compare']['vertical_separator'] == 30
    assert cfg['compare']['horizontal_separator'] == 5
    assert 'bogus' not in cfg


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == default_config()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("limits: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_config(str(path))


@pytest.mark.parametrize("body,key", [
    ("compare:\n  image_size: 500\n", "compare.image_size"),
    ("compare:\n  histogram_size: [1500, 0]\n", "compare.histogram_size"),
    ("histogram:\n  dpi: high\n", "histogram.dpi"),
    ("histogram:\n  dpi: 0\n", "histogram.dpi"),
    ("histogram:\n  chart_size_cm: -1\n", "histogram.chart_size_cm"),
    ("compare:\n  vertical_separator: '15'\n", "compare.vertical_separator"),
    ("limits:\n  max_input_bytes: true\n", "limits.max_input_bytes"),
    ("logging:\n  level: 10\n", "logging.level"),
])
def test_wrongly_typed_values_name_the_key(tmp_path, body, key):
    path = tmp_path / "config.yaml"
    path.write_text(body)
    with pytest.raises(ValueError, match=key):
        load_config(str(path))


def test_unknown_key_is_ignored(tmp_path, caplog):
    path = tmp_path / "config.yaml"
    path.write_text("histogram:\n  colour: red\n  dpi: 72\n")
    with caplog.at_level("WARNING", logger="settings"):
        cfg = load_config(str(path))
    assert cfg['histogram']['dpi'] == 72
    assert 'colour' not in cfg['histogram']
    assert "histogram.colour" in caplog.text


def test_zero_separator_is_allowed(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("compare:\n  horizontal_separator: 0\n")
    assert load_config(str(path))['compare']['horizontal_separator'] == 0

import json
import pytest

from timepassed.config import load_config, save_config, validate_config, DEFAULT_CONFIG

@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "timepassed_config.json"
    monkeypatch.setenv("TIMEPASSED_CONFIG", str(path))
    return path

def test_defaults_without_file(config_file):
    assert load_config() == DEFAULT_CONFIG

def test_save_and_load(config_file):
    save_config({'theme': 'dark'})
    assert json.loads(config_file.read_text(encoding='utf-8')) == {'locale': 'ro', 'theme': 'dark'}
    assert load_config()['theme'] == 'dark'

def test_corrupt_file_falls_back_to_defaults(config_file):
    config_file.write_text("{kaputt", encoding='utf-8')
    assert load_config() == DEFAULT_CONFIG

def test_invalid_values_fall_back_to_defaults(config_file):
    config_file.write_text(json.dumps({'theme': 'pink'}), encoding='utf-8')
    assert load_config() == DEFAULT_CONFIG

@pytest.mark.parametrize("cfg", [
    {'theme': 'pink'},
    {'locale': 'zz'},
    ['light'],
])
def test_validate_rejects_bad_values(cfg):
    with pytest.raises(ValueError):
        validate_config(cfg)

def test_save_rejects_bad_values(config_file):
    with pytest.raises(ValueError):
        save_config({'theme': 'pink'})
    assert not config_file.exists()

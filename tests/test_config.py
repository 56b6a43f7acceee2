"""
Tests for arcade settings loaded from YAML.

Run with: pytest tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from retroverse.config import CONFIG_ENV_VAR, ArcadeSettings, load_settings


class TestArcadeSettings:
    """Validated settings model."""

    def test_defaults(self):
        settings = ArcadeSettings()
        assert settings.fps == 60
        assert settings.audio_enabled is True
        assert settings.games == {}

    @pytest.mark.parametrize('field,value', [('fps', 0), ('volume', 1.5), ('log_level', 'LOUD')])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            ArcadeSettings(**{field: value})

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            ArcadeSettings(frame_rate=30)

    def test_game_options_are_copies(self):
        settings = ArcadeSettings(games={'pong': {'difficulty': 'hard'}})
        options = settings.game_options('pong')
        options['win_score'] = 3
        assert settings.game_options('pong') == {'difficulty': 'hard'}
        assert settings.game_options('snake') == {}


class TestLoadSettings:
    """YAML loading."""

    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert load_settings() == ArcadeSettings()

    def test_explicit_file(self, tmp_path):
        path = tmp_path / 'arcade.yaml'
        path.write_text(
            "fps: 30\n"
            "volume: 0.5\n"
            "log_level: debug\n"
            "games:\n"
            "  tetris:\n"
            "    base_drop_ms: 600\n"
        )
        settings = load_settings(path)
        assert settings.fps == 30
        assert settings.log_level == 'DEBUG'
        assert settings.game_options('tetris') == {'base_drop_ms': 600}

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / 'env.yaml'
        path.write_text("audio_enabled: false\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_settings().audio_enabled is False

    def test_working_directory_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (tmp_path / 'retroverse.yaml').write_text("fps: 120\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().fps == 120

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_settings(path) == ArcadeSettings()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / 'missing.yaml')

    def test_non_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_settings(path)

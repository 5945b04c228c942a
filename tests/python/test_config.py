"""
Tests for runtime configuration.
"""

import threading

import pytest

import densekit
from densekit import config, get_config, IndexingConfig, DisplayConfig
from densekit._config import DenseKitConfig, set_bounds_check
from densekit.dense import Matrix


class TestConfigDefaults:
    """Test default values and global updates."""

    def test_defaults(self):
        assert config.bounds_check is False
        assert config.display.max_rows == 20
        assert config.to_dict() == {
            "indexing": {"bounds_check": False},
            "display": {"max_rows": 20},
        }

    def test_get_config(self):
        assert get_config() is config
        assert densekit.config is config

    def test_global_update(self):
        set_bounds_check(True)
        assert config.bounds_check is True
        assert config.indexing.bounds_check is True
        config.reset()
        assert config.bounds_check is False

    def test_section_assignment(self):
        config.display = DisplayConfig(max_rows=5)
        assert config.display.max_rows == 5

    def test_repr(self):
        assert repr(config).startswith("DenseKitConfig(")


class TestConfigEnvironment:
    """Test environment variable defaults."""

    def test_bounds_check_from_env(self, monkeypatch):
        monkeypatch.setenv("DENSEKIT_BOUNDS_CHECK", "1")
        assert DenseKitConfig().bounds_check is True
        monkeypatch.setenv("DENSEKIT_BOUNDS_CHECK", "no")
        assert DenseKitConfig().bounds_check is False

    def test_max_rows_from_env(self, monkeypatch):
        monkeypatch.setenv("DENSEKIT_MAX_ROWS", "7")
        assert DenseKitConfig().display.max_rows == 7

    def test_invalid_max_rows(self, monkeypatch):
        monkeypatch.setenv("DENSEKIT_MAX_ROWS", "many")
        with pytest.raises(ValueError, match="DENSEKIT_MAX_ROWS"):
            DenseKitConfig()

    def test_reset_rereads_environment(self, monkeypatch):
        monkeypatch.setenv("DENSEKIT_BOUNDS_CHECK", "true")
        monkeypatch.setenv("DENSEKIT_MAX_ROWS", "3")
        config.display = DisplayConfig(max_rows=50)
        config.reset()
        assert config.bounds_check is True
        assert config.display.max_rows == 3


class TestLocalConfig:
    """Test thread-local overrides."""

    def test_local_override(self):
        with config.local(indexing=IndexingConfig(bounds_check=True)) as cfg:
            assert cfg is config
            assert config.bounds_check is True
        assert config.bounds_check is False

    def test_nested(self):
        with config.local(display=DisplayConfig(max_rows=4)):
            with config.local(display=DisplayConfig(max_rows=2)):
                assert config.display.max_rows == 2
            assert config.display.max_rows == 4
        assert config.display.max_rows == 20

    def test_restored_after_error(self):
        with pytest.raises(IndexError):
            with config.local(indexing=IndexingConfig(bounds_check=True)):
                Matrix.zeros('f64', (1, 1)).item(0, 1)
        assert config.bounds_check is False

    def test_unknown_section(self):
        with pytest.raises(TypeError):
            config.local(threading=None)

    def test_thread_isolation(self):
        seen = []

        def worker():
            seen.append(config.bounds_check)

        with config.local(indexing=IndexingConfig(bounds_check=True)):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()
            assert config.bounds_check is True
        assert seen == [False]


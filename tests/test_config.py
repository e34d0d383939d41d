"""Tests for ConfigManager."""

from pathlib import Path

import pytest

from photo_album.config.config import ConfigManager


class TestConfigManager:
    def test_default_config(self):
        cm = ConfigManager()
        assert cm.get("library.path") == "users.dat"
        assert cm.get("stock.directory") == "data"
        assert cm.get("stock.username") == "stock"
        assert cm.get("search.date_format") == "%Y-%m-%d"

    def test_get_dotted_key(self):
        cm = ConfigManager()
        assert cm.get("logging.level") == "INFO"
        assert cm.get("nonexistent.key") is None
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_set_dotted_key(self):
        cm = ConfigManager()
        cm.set("library.path", "other.dat")
        assert cm.get("library.path") == "other.dat"

    def test_set_creates_nested_keys(self):
        cm = ConfigManager()
        cm.set("new.nested.key", "value")
        assert cm.get("new.nested.key") == "value"

    def test_save_and_load(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        cm = ConfigManager()
        cm.set("stock.username", "demo")
        cm.save(config_path)

        cm2 = ConfigManager(config_path)
        assert cm2.get("stock.username") == "demo"
        # Defaults should still be present
        assert cm2.get("stock.album") == "stock"

    def test_load_merges_with_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("logging:\n  level: DEBUG\n")

        cm = ConfigManager(config_path)
        assert cm.get("logging.level") == "DEBUG"
        assert cm.get("logging.log_to_file") is False
        assert cm.get("library.path") == "users.dat"

    def test_reset(self):
        cm = ConfigManager()
        cm.set("library.path", "x.dat")
        cm.reset()
        assert cm.get("library.path") == "users.dat"

    def test_no_path_raises(self):
        cm = ConfigManager()
        with pytest.raises(ValueError):
            cm.load()
        with pytest.raises(ValueError):
            cm.save()


class TestPathsAndExtensions:
    def test_relative_path_without_config_file(self):
        cm = ConfigManager()
        assert cm.resolve_path("library.path") == Path("users.dat")

    def test_relative_path_follows_config_file(self, tmp_path):
        config_path = tmp_path / "conf" / "config.yaml"
        config_path.parent.mkdir()
        config_path.write_text("library:\n  path: store/users.dat\n")
        cm = ConfigManager(config_path)
        assert cm.resolve_path("library.path") == tmp_path / "conf" / "store" / "users.dat"

    def test_absolute_path_kept(self, tmp_path):
        cm = ConfigManager()
        cm.set("library.path", str(tmp_path / "abs.dat"))
        assert cm.resolve_path("library.path") == tmp_path / "abs.dat"

    def test_missing_path_setting(self):
        assert ConfigManager().resolve_path("library.nothing") is None

    def test_stock_extensions_normalized(self):
        cm = ConfigManager()
        cm.set("stock.extensions", [".JPG", "png", ".Gif"])
        assert cm.stock_extensions() == {"jpg", "png", "gif"}

    def test_default_stock_extensions(self):
        assert ConfigManager().stock_extensions() == {"jpg", "jpeg", "png", "bmp", "gif"}

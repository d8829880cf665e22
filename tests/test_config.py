"""Tests for configuration loading and saving."""

from pathlib import Path

from gutti.config import Config, ConfigModel, load_config, save_config


class TestConfigModel:
    """Test the configuration dataclass."""

    def test_defaults(self):
        config = ConfigModel()

        assert config.data_file == "./data/gutti.txt"
        assert config.bot_name == "Gutti"
        assert config.separator == "_" * 60
        assert config.show_greeting is True
        assert config.log_level == "WARNING"

    def test_user_path_is_expanded(self):
        config = ConfigModel(data_file="~/tasks.txt")
        assert config.data_file == str(Path("~/tasks.txt").expanduser())

    def test_unknown_log_level_falls_back(self):
        assert ConfigModel(log_level="chatty").log_level == "WARNING"
        assert ConfigModel(log_level="debug").log_level == "DEBUG"

    def test_yaml_round_trip(self, tmp_path):
        config = ConfigModel(
            data_file=str(tmp_path / "t.txt"), bot_name="Mittens", show_greeting=False
        )

        restored = ConfigModel.from_yaml(config.to_yaml())

        assert restored == config

    def test_unknown_keys_are_ignored(self):
        config = ConfigModel.from_yaml("bot_name: Tom\ncolour_scheme: tabby\n")
        assert config.bot_name == "Tom"


class TestConfigManager:
    """Test the cached loader."""

    def test_creates_default_file_when_missing(self, tmp_path):
        path = tmp_path / "gutti" / "config.yaml"

        config = load_config(path)

        assert path.exists()
        assert config == ConfigModel()

    def test_loads_existing_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(bot_name="Whiskers"), path)

        assert Config.reload(path).bot_name == "Whiskers"

    def test_malformed_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        assert load_config(path) == ConfigModel()

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("bot_name: [unclosed\n", encoding="utf-8")

        assert load_config(path) == ConfigModel()

    def test_load_is_cached_until_reload(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(bot_name="One"), path)
        first = load_config(path)

        save_config(ConfigModel(bot_name="Two"), path)

        assert load_config(path) is first
        assert Config.get() is first
        assert Config.reload(path).bot_name == "Two"

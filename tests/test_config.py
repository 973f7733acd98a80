# Doot Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest

from doot.config.loader import get_config_path, load_config, parse_config
from doot.config.schema import DootConfig, Mode
from doot.errors import ConfigurationError, ErrorKind


class TestDootConfig:
    """Tests for DootConfig schema."""

    def test_minimal_config(self):
        """Version alone is a valid configuration."""
        config = DootConfig(version="v1")
        assert config.mode == Mode.FILE
        assert config.plans == {}
        assert config.groups == {}

    def test_full_config(self, sample_config: dict):
        config = DootConfig.model_validate(sample_config)

        assert config.mode == Mode.FILE
        assert set(config.groups) == {"bash", "nvim"}
        assert config.groups["bash"]["mac"] == "$HOME"

    def test_mode_enum(self):
        assert Mode.FILE.value == "file"
        assert Mode.LINK.value == "link"

    def test_null_tables_are_empty(self):
        config = DootConfig.model_validate({"version": "v1", "mode": None, "plans": None, "groups": None})
        assert config.mode == Mode.FILE
        assert config.plans == {}
        assert config.groups == {}

    def test_get_resolver(self, config: DootConfig, system_dir: Path):
        assert config.get_resolver("bash", "nux") == str(system_dir / "home")

    def test_unknown_group(self, config: DootConfig):
        with pytest.raises(ConfigurationError, match="Group 'zsh' not found"):
            config.get_group("zsh")

    def test_unknown_resolver(self, config: DootConfig):
        with pytest.raises(ConfigurationError) as exc_info:
            config.get_resolver("nvim", "mac")
        assert str(exc_info.value) == "Resolver 'mac' not found in group 'nvim'"
        assert exc_info.value.kind == ErrorKind.CONFIGURATION

    def test_plan_without_members_covers_all_groups(self, config: DootConfig):
        assert config.get_plan_groups("all") == ["bash", "nvim"]

    def test_plan_with_members(self, config: DootConfig):
        assert config.get_plan_groups("minimal") == ["bash"]

    def test_unknown_plan(self, config: DootConfig):
        with pytest.raises(ConfigurationError, match="Plan 'work' not found"):
            config.get_plan_groups("work")


class TestParseConfig:
    """Tests for parse_config()."""

    def test_minimal_document(self):
        config = parse_config("version: v1\n")
        assert config.version == "v1"
        assert config.mode == Mode.FILE

    def test_link_mode(self):
        assert parse_config("version: v1\nmode: link\n").mode == Mode.LINK

    def test_resolvers_and_plans(self):
        config = parse_config(
            """
version: v1
plans:
  all:
  work: [git, ssh]
groups:
  git:
    nux: ~/
    mac: ~/
  ssh:
    nux: ~/.ssh
"""
        )
        assert config.get_plan_groups("all") == ["git", "ssh"]
        assert config.get_plan_groups("work") == ["git", "ssh"]
        assert config.get_resolver("ssh", "nux") == "~/.ssh"

    @pytest.mark.parametrize("version", ["v2", "1"])
    def test_unsupported_version(self, version: str):
        with pytest.raises(ConfigurationError, match=f"Unsupported config version: {version}"):
            parse_config(f"version: {version}\n")

    def test_missing_version(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration: version"):
            parse_config("mode: file\n")

    def test_invalid_mode(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration: mode"):
            parse_config("version: v1\nmode: hardlink\n")

    def test_invalid_yaml(self):
        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            parse_config("version: [v1\n")

    def test_empty_document(self):
        with pytest.raises(ConfigurationError, match="Configuration file is empty"):
            parse_config("")

    def test_non_mapping_document(self):
        with pytest.raises(ConfigurationError, match="Configuration must be a mapping"):
            parse_config("- v1\n")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_from_file(self, config_file: Path):
        config = load_config(config_file)
        assert config.get_plan_groups("minimal") == ["bash"]

    def test_missing_file(self, temp_dir: Path):
        path = temp_dir / "doot.yaml"

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert str(exc_info.value).startswith(f"Failed to read config file: {path}: ")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_parse_failure_names_file(self, temp_dir: Path):
        path = temp_dir / "doot.yaml"
        path.write_text("version: v9\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert str(exc_info.value) == f"Failed to parse {path}: Unsupported config version: v9"
        assert exc_info.value.root_message == "Unsupported config version: v9"

    def test_default_path(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOOT_CONFIG", raising=False)
        assert get_config_path() == Path("doot.yaml")

    def test_env_override(self, config_file: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOOT_CONFIG", str(config_file))

        assert get_config_path() == config_file
        assert set(load_config().groups) == {"bash", "nvim"}

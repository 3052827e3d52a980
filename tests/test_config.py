"""Tests for render configuration: dataclass, ContextVar and config files."""

from pathlib import Path
from threading import Thread

import pytest

from texmark.config import (
    TexmarkConfig,
    apply_overrides,
    config_context,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from texmark.errors import ConfigError


class TestTexmarkConfigDataclass:
    """Test TexmarkConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = TexmarkConfig()
        assert config.standalone is False
        assert config.document_class == "article"
        assert config.packages == ("hyperref", "graphicx", "ulem")
        assert config.at_command == "ref"
        assert config.image_placement == "h"
        assert config.suppress_on_fatal is True

    def test_immutability(self) -> None:
        config = TexmarkConfig()
        with pytest.raises(AttributeError):
            config.standalone = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = TexmarkConfig.from_dict({"standalone": True, "unknown_key": 1})
        assert config.standalone is True

    def test_from_dict_converts_package_list(self) -> None:
        config = TexmarkConfig.from_dict({"packages": ["amsmath"]})
        assert config.packages == ("amsmath",)


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_config()

    def test_default_config(self) -> None:
        assert get_config() == TexmarkConfig()

    def test_set_and_reset(self) -> None:
        set_config(TexmarkConfig(standalone=True))
        assert get_config().standalone is True
        reset_config()
        assert get_config().standalone is False

    def test_context_manager_restores(self) -> None:
        with config_context(TexmarkConfig(at_command="cref")):
            assert get_config().at_command == "cref"
        assert get_config().at_command == "ref"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), config_context(TexmarkConfig(standalone=True)):
            raise RuntimeError("boom")
        assert get_config().standalone is False

    def test_thread_isolation(self) -> None:
        seen: list[bool] = []

        def worker() -> None:
            seen.append(get_config().standalone)

        set_config(TexmarkConfig(standalone=True))
        thread = Thread(target=worker)
        thread.start()
        thread.join()
        assert seen == [False]


class TestApplyOverrides:
    """CLI overrides on top of loaded config."""

    def test_none_ignored(self) -> None:
        config = TexmarkConfig(standalone=True)
        assert apply_overrides(config, standalone=None, at_command=None) is config

    def test_values_applied(self) -> None:
        config = apply_overrides(TexmarkConfig(), standalone=False, at_command="cref")
        assert config.at_command == "cref"
        assert config.standalone is False


class TestLoadConfig:
    """Config file discovery and validation."""

    def test_pyproject_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.texmark]\nstandalone = true\nat-command = "cref"\n', encoding="utf-8"
        )
        config = load_config(tmp_path)
        assert config.standalone is True
        assert config.at_command == "cref"

    def test_texmark_toml(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text(
            '[texmark]\npackages = ["amsmath", "hyperref"]\n', encoding="utf-8"
        )
        assert load_config(tmp_path).packages == ("amsmath", "hyperref")

    def test_texmark_toml_tool_table(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text(
            '[tool.texmark]\ndocument_class = "book"\n', encoding="utf-8"
        )
        assert load_config(tmp_path).document_class == "book"

    def test_pyproject_without_table_falls_through(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        (tmp_path / ".texmark.toml").write_text("[texmark]\nstandalone = true\n", encoding="utf-8")
        assert load_config(tmp_path).standalone is True

    def test_found_in_parent(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text(
            '[texmark]\nimage-placement = "t"\n', encoding="utf-8"
        )
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert load_config(nested).image_placement == "t"

    def test_nearest_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text("[texmark]\nstandalone = true\n", encoding="utf-8")
        nested = tmp_path / "sub"
        nested.mkdir()
        (nested / ".texmark.toml").write_text("[texmark]\nstandalone = false\n", encoding="utf-8")
        assert load_config(nested).standalone is False

    def test_unknown_key(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text("[texmark]\ncolour = 1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown key `colour`"):
            load_config(tmp_path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text('[texmark]\nstandalone = "yes"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a bool"):
            load_config(tmp_path)

    def test_packages_must_be_strings(self, tmp_path: Path) -> None:
        (tmp_path / ".texmark.toml").write_text("[texmark]\npackages = [1]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="list of strings"):
            load_config(tmp_path)

    def test_table_must_be_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool]\ntexmark = 1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid"):
            load_config(tmp_path)

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

"""
Tests for configuration loading and validation.
"""

import textwrap
from pathlib import Path

import pytest

from src.core.config.loader import ConfigError, find_config_file, load_config
from src.core.models.config import DocsConfig
from src.core.use_cases.config_check import check_config


class TestDocsConfigModel:
    """Defaults and derived paths."""

    def test_defaults(self):
        config = DocsConfig()
        assert config.type == "static"
        assert config.example_languages == ["bash", "javascript"]
        assert config.auth.enabled is False
        assert config.postman.enabled is False

    def test_ledger_path(self):
        config = DocsConfig.model_validate({"output": {"source_dir": "docs/src"}})
        assert config.ledger_path == "docs/src/.filemtimes"

    def test_collection_path_by_type(self):
        assert DocsConfig(type="static").collection_path == "public/docs/collection.json"
        assert DocsConfig(type="integrated").collection_path == "storage/app/docs/collection.json"

    def test_auth_in_alias(self):
        config = DocsConfig.model_validate({"auth": {"enabled": True, "in": "query"}})
        assert config.auth.in_ == "query"

    def test_render_settings(self):
        config = DocsConfig(title="Acme", logo="logo.png", example_languages=["python"])
        assert config.render_settings() == {"languages": ["python"], "logo": "logo.png", "title": "Acme"}


class TestLoadConfig:
    """Reading docs.yml."""

    def test_load_flat(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text("title: Acme\ntype: integrated\n")
        config = load_config(path)
        assert config.title == "Acme"
        assert config.type == "integrated"

    def test_load_wrapped(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text(textwrap.dedent("""\
            docs:
              title: Wrapped
              auth:
                enabled: true
                in: basic
        """))
        config = load_config(path)
        assert config.title == "Wrapped"
        assert config.auth.in_ == "basic"

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text("")
        assert load_config(path) == DocsConfig()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="File not found"):
            load_config(tmp_path / "docs.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text("title: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_invalid_type(self, tmp_path: Path):
        path = tmp_path / "docs.yml"
        path.write_text("type: laravel\n")
        with pytest.raises(ConfigError, match="Invalid docs configuration"):
            load_config(path)

    def test_no_config_anywhere(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError, match="No docs.yml found"):
            load_config()


class TestFindConfigFile:
    def test_finds_in_parent(self, tmp_path: Path):
        (tmp_path / "docs.yml").write_text("title: x\n")
        nested = tmp_path / "app" / "Http"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / "docs.yml").resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None


class TestCheckConfig:
    """Semantic checks on top of schema validation."""

    def _write(self, tmp_path: Path, content: str) -> Path:
        path = tmp_path / "docs.yml"
        path.write_text(textwrap.dedent(content))
        return path

    def test_valid(self, config_file: Path):
        result = check_config(config_file)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_unknown_strategy_warns(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            auth:
              enabled: true
              in: cookie
        """)
        result = check_config(path)
        assert result.valid
        assert any("cookie" in w for w in result.warnings)

    def test_named_strategy_needs_name(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            auth:
              enabled: true
              in: header
              name: ""
        """)
        result = check_config(path)
        assert not result.valid
        assert "auth.name" in result.errors[0]

    def test_unknown_language_warns(self, tmp_path: Path):
        path = self._write(tmp_path, "example_languages: [bash, cobol]\n")
        result = check_config(path)
        assert result.valid
        assert any("cobol" in w for w in result.warnings)

    def test_no_languages_warns(self, tmp_path: Path):
        path = self._write(tmp_path, "example_languages: []\n")
        assert any("No example_languages" in w for w in check_config(path).warnings)

    def test_invalid_file(self, tmp_path: Path):
        path = self._write(tmp_path, "type: nope\n")
        result = check_config(path)
        assert not result.valid
        assert result.to_dict()["title"] is None

    def test_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = check_config()
        assert not result.valid
        assert result.errors == ["No docs.yml found."]

"""
Tests for configuration loading and validation.
"""

import pytest

from guidelint.config import (
    CONFIG_FILENAME,
    ENV_CONFIG,
    ENV_FAIL_ON,
    ConfigError,
    Settings,
    find_config,
    load_settings,
    write_default_config,
)
from guidelint.scanner import CSHARP, SWIFT


def write_config(directory, content, name=CONFIG_FILENAME):
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    """Settings with no file."""

    def test_defaults(self):
        """Defaults match the documented values."""
        settings = Settings()
        assert settings.fail_on == "error"
        assert settings.check_docs
        assert settings.naming.forbidden_prefixes == ["m_", "s_", "g_"]
        assert settings.formatting.max_line_length == 120
        assert "build" in settings.exclude_dirs

    def test_no_file_found(self, tmp_path, monkeypatch):
        """Without a config file the defaults apply."""
        monkeypatch.chdir(tmp_path)
        assert find_config() is None
        assert load_settings() == Settings()

    def test_naming_style_falls_back_to_profile(self):
        """Unset styles come from the language profile."""
        settings = Settings()
        assert settings.naming_style("function", SWIFT) == "camel"
        assert settings.naming_style("function", CSHARP) == "pascal"
        assert settings.naming_style("property", SWIFT) == "any"

    def test_brace_style(self):
        """auto defers to the language; an explicit style wins."""
        assert Settings().brace_style(CSHARP) == "next_line"
        assert Settings(formatting={"brace_style": "same_line"}).brace_style(CSHARP) == "same_line"


class TestRuleSelection:
    """select / ignore / per-rule switches."""

    def test_prefix_matching(self):
        """select and ignore match by rule ID prefix."""
        settings = Settings(select=["N01", "F"], ignore=["F002"])
        assert settings.rule_enabled("N010")
        assert not settings.rule_enabled("N001")
        assert settings.rule_enabled("F001")
        assert not settings.rule_enabled("F002")
        assert not settings.rule_enabled("C001")

    def test_per_rule_switch(self):
        """Per-rule enabled and severity are read back."""
        settings = Settings(rules={"C001": {"enabled": False, "severity": "hint"}})
        assert not settings.rule_enabled("C001")
        assert settings.severity_override("C001") == "hint"
        assert settings.severity_override("C002") is None


class TestValidation:
    """Invalid values are rejected."""

    def test_language_normalized(self):
        """Language names are lowercased; auto means detect."""
        assert Settings(language="Swift").language == "swift"
        assert Settings(language="auto").language is None

    def test_unknown_language(self):
        """An unknown language is rejected."""
        with pytest.raises(ValueError):
            Settings(language="cobol")

    def test_density_range(self):
        """min_density above max_density is rejected."""
        with pytest.raises(ValueError):
            Settings(comments={"min_density": 0.9, "max_density": 0.1})

    def test_bad_todo_pattern(self):
        """todo_pattern must compile."""
        with pytest.raises(ValueError):
            Settings(comments={"todo_pattern": "TODO("})

    def test_unknown_style_kind(self):
        """styles keys must be declaration kinds."""
        with pytest.raises(ValueError):
            Settings(naming={"styles": {"macro": "camel"}})


class TestLoadSettings:
    """File discovery and precedence."""

    def test_explicit_file(self, tmp_path):
        """An explicit path is loaded."""
        path = write_config(tmp_path, "fail_on: warning\nnaming:\n  type_prefix: NYT\n")
        settings = load_settings(path)
        assert settings.fail_on == "warning"
        assert settings.naming.type_prefix == "NYT"

    def test_explicit_file_missing(self, tmp_path):
        """A missing explicit path is a ConfigError."""
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "missing.yaml")

    def test_env_config_path(self, tmp_path, monkeypatch):
        """GUIDELINT_CONFIG names the file."""
        path = write_config(tmp_path, "check_docs: false\n", name="custom.yaml")
        monkeypatch.setenv(ENV_CONFIG, str(path))
        assert not load_settings().check_docs

    def test_env_config_path_missing(self, tmp_path, monkeypatch):
        """A missing GUIDELINT_CONFIG file is a ConfigError."""
        monkeypatch.setenv(ENV_CONFIG, str(tmp_path / "nope.yaml"))
        with pytest.raises(ConfigError):
            load_settings()

    def test_cwd_file_found(self, tmp_path, monkeypatch):
        """.guidelint.yaml in the working directory is found."""
        write_config(tmp_path, "exclude: ['*.kts']\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().exclude == ["*.kts"]

    def test_env_fail_on_beats_file(self, tmp_path, monkeypatch):
        """GUIDELINT_FAIL_ON overrides the file."""
        path = write_config(tmp_path, "fail_on: error\n")
        monkeypatch.setenv(ENV_FAIL_ON, "INFO")
        assert load_settings(path).fail_on == "info"

    def test_overrides_beat_env(self, tmp_path, monkeypatch):
        """Command-line overrides beat the environment."""
        path = write_config(tmp_path, "fail_on: error\n")
        monkeypatch.setenv(ENV_FAIL_ON, "info")
        settings = load_settings(path, {"fail_on": "warning", "language": None})
        assert settings.fail_on == "warning"
        assert settings.language is None

    def test_empty_file(self, tmp_path):
        """An empty file gives the defaults."""
        assert load_settings(write_config(tmp_path, "")) == Settings()

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML is a ConfigError."""
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(write_config(tmp_path, "naming: [\n"))

    def test_not_a_mapping(self, tmp_path):
        """The top level must be a mapping."""
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(write_config(tmp_path, "- a\n- b\n"))

    def test_unknown_key(self, tmp_path):
        """Unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(write_config(tmp_path, "naming:\n  bogus: 1\n"))

    def test_bad_style_value(self, tmp_path):
        """Unknown style names are rejected."""
        with pytest.raises(ConfigError):
            load_settings(write_config(tmp_path, "naming:\n  styles:\n    type: kebab\n"))


class TestWriteDefaultConfig:
    """Starter config file."""

    def test_default_config_loads(self, tmp_path):
        """The written default config loads back."""
        path = write_default_config(tmp_path / "conf" / CONFIG_FILENAME)
        assert path.exists()
        settings = load_settings(path)
        assert settings.severity_override("N012") == "info"
        assert settings.exclude == ["**/Generated/**"]

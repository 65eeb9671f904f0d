"""Tests for the unified config loader."""

from pathlib import Path

import pytest

from vidlink.config.defaults import (
    ATTEMPT_TIMEOUT,
    BUILTIN_CHANNELS,
    DEFAULT_CHANNELS,
    MIN_BODY_LENGTH,
    USER_AGENT,
)
from vidlink.config.loader import (
    ConfigSource,
    ResolverConfig,
    _find_project_config,
    _get_user_config_path,
    _load_yaml_config,
    _parse_channel,
    _resolve_config,
    clear_config_cache,
    get_config,
    validate_config,
)
from vidlink.models.channel import Channel


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A project directory as cwd, with an empty user root."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setenv("VIDLINK_ROOT", str(tmp_path / "home"))
    return tmp_path


def write_config(directory: Path, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "config.yaml"
    path.write_text(text)
    return path


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_config_source_values(self):
        """Test ConfigSource has expected values."""
        assert ConfigSource.ENV.value == "env"
        assert ConfigSource.PROJECT.value == "project"
        assert ConfigSource.USER.value == "user"
        assert ConfigSource.DEFAULT.value == "default"


class TestResolverConfig:
    """Tests for ResolverConfig dataclass."""

    def test_defaults(self):
        config = ResolverConfig()
        assert config.channels == DEFAULT_CHANNELS
        assert config.user_agent == USER_AGENT
        assert config.attempt_timeout == ATTEMPT_TIMEOUT
        assert config.min_body_length == MIN_BODY_LENGTH
        assert config.source == ConfigSource.DEFAULT

    def test_config_repr(self):
        """Test config string representation lists channel names."""
        config = ResolverConfig(channels=(BUILTIN_CHANNELS["direct"],), source=ConfigSource.USER)
        repr_str = repr(config)
        assert "channels=[direct]" in repr_str
        assert "source='user'" in repr_str

    def test_config_is_frozen(self):
        """Test config is immutable."""
        config = ResolverConfig()
        with pytest.raises(AttributeError):
            config.attempt_timeout = 1.0  # type: ignore


class TestLoadYamlConfig:
    """Tests for _load_yaml_config."""

    def test_load_nonexistent_file(self, tmp_path):
        """Test loading a file that doesn't exist returns None."""
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_load_valid_yaml(self, tmp_path):
        path = write_config(tmp_path, "resolver:\n  attempt_timeout: 5\n")
        assert _load_yaml_config(path) == {"resolver": {"attempt_timeout": 5}}

    def test_load_empty_yaml(self, tmp_path):
        """Test loading an empty YAML file returns empty dict."""
        assert _load_yaml_config(write_config(tmp_path, "")) == {}

    def test_load_invalid_yaml_type(self, tmp_path):
        """Test loading YAML that's not a dict returns None."""
        assert _load_yaml_config(write_config(tmp_path, "- item1\n- item2\n")) is None

    def test_load_malformed_yaml(self, tmp_path):
        assert _load_yaml_config(write_config(tmp_path, "resolver: [unclosed\n")) is None


class TestFindProjectConfig:
    """Tests for _find_project_config."""

    def test_finds_config_in_cwd(self, workspace):
        path = write_config(workspace / "project" / ".vidlink", "resolver: {}\n")
        assert _find_project_config() == path

    def test_finds_config_in_parent(self, workspace, monkeypatch):
        path = write_config(workspace / "project" / ".vidlink", "resolver: {}\n")
        nested = workspace / "project" / "src" / "deep"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert _find_project_config() == path

    def test_no_config(self, workspace):
        assert _find_project_config() is None


class TestUserConfigPath:
    def test_respects_root_env(self, workspace):
        assert _get_user_config_path() == (workspace / "home" / "config.yaml").resolve()


class TestParseChannel:
    def test_builtin_by_name(self):
        assert _parse_channel("allorigins") is BUILTIN_CHANNELS["allorigins"]

    def test_builtin_by_mapping_name(self):
        assert _parse_channel({"name": "direct"}) is BUILTIN_CHANNELS["direct"]

    def test_custom_mapping(self):
        channel = _parse_channel(
            {"name": "mine", "template": "https://relay.example/f/{url}", "encode": False}
        )
        assert channel == Channel("mine", "https://relay.example/f/{url}", encode=False)

    @pytest.mark.parametrize(
        "entry",
        [
            "nosuchrelay",
            42,
            {"template": "https://relay.example/?u={url}"},
            {"name": "mine", "template": "https://relay.example/"},
            {"name": "mine", "template": "https://relay.example/?u={url}", "encode": "false"},
        ],
    )
    def test_rejects_malformed(self, entry):
        with pytest.raises(ValueError):
            _parse_channel(entry)


class TestResolveConfig:
    """Tests for priority resolution."""

    def test_defaults_when_nothing_configured(self, workspace):
        config = _resolve_config()
        assert config.source == ConfigSource.DEFAULT
        assert config.config_path is None
        assert config.channels == DEFAULT_CHANNELS

    def test_user_config(self, workspace):
        path = write_config(workspace / "home", "resolver:\n  attempt_timeout: 7.5\n")
        config = _resolve_config()
        assert config.source == ConfigSource.USER
        assert config.config_path == path
        assert config.attempt_timeout == 7.5

    def test_project_config_wins_over_user(self, workspace):
        write_config(workspace / "home", "resolver:\n  attempt_timeout: 7.5\n")
        write_config(
            workspace / "project" / ".vidlink",
            "resolver:\n  channels:\n    - direct\n    - name: mine\n"
            "      template: 'https://relay.example/?u={url}'\n",
        )
        config = _resolve_config()
        assert config.source == ConfigSource.PROJECT
        assert [c.name for c in config.channels] == ["direct", "mine"]
        assert config.attempt_timeout == ATTEMPT_TIMEOUT

    def test_env_overrides_single_keys(self, workspace, monkeypatch):
        write_config(
            workspace / "project" / ".vidlink",
            "resolver:\n  attempt_timeout: 3\n  min_body_length: 900\n",
        )
        monkeypatch.setenv("VIDLINK_CHANNELS", "codetabs, direct")
        monkeypatch.setenv("VIDLINK_ATTEMPT_TIMEOUT", "9")
        config = _resolve_config()
        assert config.source == ConfigSource.ENV
        assert [c.name for c in config.channels] == ["codetabs", "direct"]
        assert config.attempt_timeout == 9.0
        assert config.min_body_length == 900

    def test_invalid_values_keep_defaults(self, workspace):
        write_config(
            workspace / "project" / ".vidlink",
            "resolver:\n  attempt_timeout: -1\n  min_body_length: lots\n  channels: []\n",
        )
        config = _resolve_config()
        assert config.attempt_timeout == ATTEMPT_TIMEOUT
        assert config.min_body_length == MIN_BODY_LENGTH
        assert config.channels == DEFAULT_CHANNELS

    def test_non_string_user_agent_keeps_default(self, workspace):
        write_config(workspace / "project" / ".vidlink", "resolver:\n  user_agent: 123\n")
        assert _resolve_config().user_agent == USER_AGENT

    def test_quoted_encode_flag_rejected_at_load(self, workspace):
        write_config(
            workspace / "project" / ".vidlink",
            "resolver:\n  channels:\n    - name: mine\n"
            "      template: 'https://relay.example/f/{url}'\n      encode: 'false'\n",
        )
        assert _resolve_config().channels == DEFAULT_CHANNELS

    def test_file_without_resolver_section(self, workspace):
        write_config(workspace / "project" / ".vidlink", "other: 1\n")
        assert _resolve_config().source == ConfigSource.DEFAULT


class TestGetConfig:
    def test_cached_until_cleared(self, workspace, monkeypatch):
        first = get_config()
        monkeypatch.setenv("VIDLINK_MIN_BODY_LENGTH", "1234")
        assert get_config() is first
        clear_config_cache()
        assert get_config().min_body_length == 1234


class TestValidateConfig:
    def test_none_is_valid(self):
        result = validate_config(None)
        assert result.is_valid
        assert result.warnings == []

    def test_valid_config(self):
        result = validate_config(
            {
                "resolver": {
                    "channels": ["corsproxy", {"name": "mine", "template": "https://r.example/{url}"}],
                    "attempt_timeout": 10,
                    "min_body_length": 800,
                    "user_agent": "Agent/1.0",
                }
            }
        )
        assert result.is_valid
        assert result.warnings == []

    def test_not_a_mapping(self):
        assert not validate_config(["resolver"]).is_valid  # type: ignore[arg-type]

    def test_missing_section_warns(self):
        result = validate_config({"other": 1})
        assert result.is_valid
        assert any("resolver" in w for w in result.warnings)

    def test_unknown_key_warns(self):
        result = validate_config({"resolver": {"retries": 3}})
        assert result.is_valid
        assert result.warnings == ["Unknown key 'resolver.retries'"]

    def test_channel_errors(self):
        result = validate_config(
            {"resolver": {"channels": ["corsproxy", "nosuchrelay", "corsproxy"]}}
        )
        assert not result.is_valid
        assert any("resolver.channels[1]" in e for e in result.errors)
        assert any("Duplicate" in e for e in result.errors)

    def test_single_channel_warns(self):
        result = validate_config({"resolver": {"channels": ["direct"]}})
        assert result.is_valid
        assert len(result.warnings) == 1

    @pytest.mark.parametrize(
        "section",
        [
            {"attempt_timeout": 0},
            {"attempt_timeout": "soon"},
            {"min_body_length": -5},
            {"user_agent": 12},
            {"user_agent": ""},
            {"channels": [{"name": "mine", "template": "https://r.example/{url}", "encode": "no"}]},
            {"channels": "corsproxy"},
        ],
    )
    def test_invalid_values(self, section):
        assert not validate_config({"resolver": section}).is_valid

"""Tests for configuration loading"""

import pytest

from leanpub_client.config import Config


class TestConfig:
    """Test configuration sources and validation"""

    def test_explicit_api_key(self) -> None:
        config = Config(api_key="abc123")
        assert config.API_KEY == "abc123"
        assert config.BASE_URL == "https://leanpub.com"
        assert config.TIMEOUT == 30.0

    def test_api_key_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LEANPUB_API_KEY", "from-env")
        assert Config().API_KEY == "from-env"

    def test_api_key_from_secrets_file(self, isolated_env, monkeypatch) -> None:
        # Registers the variable with monkeypatch so the value loaded from file is undone
        monkeypatch.setenv("LEANPUB_API_KEY", "placeholder")
        monkeypatch.delenv("LEANPUB_API_KEY")
        (isolated_env / "secrets.env").write_text("LEANPUB_API_KEY=from-file\n")
        assert Config().API_KEY == "from-file"

    def test_missing_api_key(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            Config()
        assert "LEANPUB_API_KEY" in str(exc_info.value)
        assert str(exc_info.value).startswith("Configuration validation failed:")

    def test_blank_api_key(self) -> None:
        with pytest.raises(ValueError):
            Config(api_key="   ")

    def test_yaml_settings(self, isolated_env, monkeypatch) -> None:
        config_dir = isolated_env / "config"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            "base_url: http://localhost:9000/\n"
            "timeout: 5\n"
            "api_key_env: MY_LEANPUB_KEY\n"
            "log_level: debug\n"
        )
        monkeypatch.setenv("MY_LEANPUB_KEY", "yaml-key")

        config = Config()
        assert config.BASE_URL == "http://localhost:9000"
        assert config.TIMEOUT == 5.0
        assert config.API_KEY == "yaml-key"
        assert config.LOG_LEVEL == "DEBUG"

    def test_yaml_custom_env_var_missing(self, isolated_env) -> None:
        path = isolated_env / "custom.yaml"
        path.write_text("api_key_env: MY_LEANPUB_KEY\n")
        with pytest.raises(ValueError) as exc_info:
            Config(config_path=str(path))
        assert "MY_LEANPUB_KEY" in str(exc_info.value)

    def test_environment_overrides_yaml(self, isolated_env, monkeypatch) -> None:
        path = isolated_env / "custom.yaml"
        path.write_text("base_url: http://yaml.example\n")
        monkeypatch.setenv("LEANPUB_BASE_URL", "https://env.example")
        config = Config(api_key="k", config_path=str(path))
        assert config.BASE_URL == "https://env.example"

    def test_yaml_must_be_mapping(self, isolated_env) -> None:
        path = isolated_env / "bad.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            Config(api_key="k", config_path=str(path))

    def test_invalid_timeout(self, monkeypatch) -> None:
        monkeypatch.setenv("LEANPUB_TIMEOUT", "soon")
        with pytest.raises(ValueError) as exc_info:
            Config(api_key="k")
        assert "Invalid timeout" in str(exc_info.value)

    def test_invalid_base_url(self) -> None:
        with pytest.raises(ValueError):
            Config(api_key="k", base_url="leanpub.com")

    def test_str_hides_api_key(self) -> None:
        config = Config(api_key="super-secret")
        assert "super-secret" not in str(config)
        assert "[SET]" in str(config)

    def test_client_config(self) -> None:
        config = Config(api_key="k", timeout=3)
        assert config.get_client_config() == {
            "base_url": "https://leanpub.com",
            "api_key": "k",
            "timeout": 3.0,
        }

    def test_yaml_null_api_key_env_uses_default(self, isolated_env, monkeypatch) -> None:
        path = isolated_env / "custom.yaml"
        path.write_text("api_key_env: null\n")
        monkeypatch.setenv("LEANPUB_API_KEY", "default-key")
        config = Config(config_path=str(path))
        assert config.API_KEY_ENV == "LEANPUB_API_KEY"
        assert config.API_KEY == "default-key"

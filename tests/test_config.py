"""Configuration module unit tests"""

from pathlib import Path

import pytest

from dockyard.config import Config
from dockyard.errors import ConfigException


@pytest.fixture
def temp_config_file(tmp_path):
    """Path for a temporary config file"""
    return tmp_path / "config.toml"


# ========== Test Cases ==========


def test_defaults():
    """Test: Defaults apply without any file"""
    config = Config.default()

    assert str(config.api.base_url) == "http://localhost:8000/"
    assert config.api.api_key == ""
    assert config.api.timeout == 30
    assert config.auth.login_path == "/login"
    assert config.web.port == 5000
    assert config.widget.script_url == ""


def test_load_from_file(temp_config_file):
    """Test: Load config from a TOML file"""
    temp_config_file.write_text(
        """
log_file = "logs/app.log"

[api]
base_url = "https://gateway.example.com"
api_key = "key-123"
timeout = 10

[api.extra_headers]
x-org = "o1"

[auth]
token_file = "~/.dockyard/credentials.json"

[widget]
script_url = "https://cdn.example.com/widget.es.js"
"""
    )

    config = Config.load_from_file(str(temp_config_file))

    assert str(config.api.base_url) == "https://gateway.example.com/"
    assert config.api.api_key == "key-123"
    assert config.api.timeout == 10
    assert config.api.extra_headers == {"x-org": "o1"}
    assert config.log_file == "logs/app.log"
    assert config.token_path() == Path("~/.dockyard/credentials.json").expanduser()
    assert config.widget.script_url.endswith(".es.js")


def test_env_overrides_file(temp_config_file, monkeypatch):
    """Test: Environment variables take precedence over the TOML file"""
    temp_config_file.write_text('[api]\napi_key = "from-file"\n')
    monkeypatch.setenv("DOCKYARD_API__API_KEY", "from-env")
    monkeypatch.setenv("DOCKYARD_WEB__PORT", "8080")

    config = Config.load_from_file(str(temp_config_file))

    assert config.api.api_key == "from-env"
    assert config.web.port == 8080


def test_missing_file():
    """Test: Missing file raises ConfigException"""
    with pytest.raises(ConfigException, match="Configuration file not found"):
        Config.load_from_file("/nonexistent/config.toml")


def test_invalid_values(temp_config_file):
    """Test: Invalid values are reported with their location"""
    temp_config_file.write_text('[web]\nport = 70000\n\n[auth]\nlogin_path = "login"\n')

    with pytest.raises(ConfigException) as exc_info:
        Config.load_from_file(str(temp_config_file))

    message = str(exc_info.value)
    assert "Configuration validation failed" in message
    assert "web -> port" in message
    assert "auth -> login_path" in message


def test_invalid_toml(temp_config_file):
    """Test: Broken TOML syntax raises ConfigException"""
    temp_config_file.write_text("[api\nbase_url = ")

    with pytest.raises(ConfigException):
        Config.load_from_file(str(temp_config_file))

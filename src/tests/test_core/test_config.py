import pytest
import json
import os
from dataclasses import FrozenInstanceError
from pathlib import Path
import yaml
from basecamp.core.config import Config, ClientConfig, DEFAULT_IDENTIFIER
from basecamp.core.exceptions import ConfigurationError

@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before and after each test"""
    saved_vars = {k: v for k, v in os.environ.items() if k.startswith("BASECAMP_")}

    for key in list(saved_vars.keys()):
        del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if key.startswith("BASECAMP_"):
            del os.environ[key]

    for key, value in saved_vars.items():
        os.environ[key] = value

@pytest.fixture
def sample_config():
    """Fixture providing a sample configuration"""
    return {
        "client": {
            "account": "605816632",
            "username": "user@example.com",
            "password": "secret",
            "identifier": "Test Suite",
            "retries": 2,
            "timeout": 5
        },
        "logging": {
            "level": "DEBUG"
        }
    }

@pytest.fixture
def config_file(tmp_path, sample_config):
    """Fixture creating a temporary JSON config file"""
    config_path = tmp_path / "basecamp.json"
    with open(config_path, "w") as f:
        json.dump(sample_config, f)
    return config_path

def test_client_config_defaults():
    """Test ClientConfig default values"""
    config = ClientConfig(account="605816632", username="u", password="p")
    assert config.identifier == DEFAULT_IDENTIFIER
    assert config.version == 1
    assert config.debug is False
    assert config.fatal is False
    assert config.retries == 0
    assert config.timeout == 10
    assert config.base_url == "https://basecamp.com"
    assert config.retry_delay == 0.0

def test_client_config_derived_values():
    """Test userinfo and base path computation"""
    config = ClientConfig(account="605816632", username="u", password="p", version=1)
    assert config.userinfo == "u:p"
    assert config.base_path == "/605816632/api/v1"
    assert config.base_segments == ("605816632", "api", "v1")

def test_client_config_accepts_integer_account():
    """Test numeric account ids are coerced to strings"""
    config = ClientConfig(account=605816632, username="u", password="p")
    assert config.account == "605816632"

@pytest.mark.parametrize("field", ["account", "username", "password"])
@pytest.mark.parametrize("value", [None, "", "   "])
def test_client_config_requires_credentials(field, value):
    """Test required fields are validated at construction"""
    values = {"account": "1", "username": "u", "password": "p"}
    values[field] = value
    with pytest.raises(ConfigurationError):
        ClientConfig(**values)

@pytest.mark.parametrize("overrides", [
    {"version": 0},
    {"version": "1"},
    {"retries": -1},
    {"retries": True},
    {"timeout": 0},
    {"timeout": -5},
    {"retry_delay": -1},
])
def test_client_config_rejects_invalid_knobs(overrides):
    """Test numeric knob validation"""
    with pytest.raises(ConfigurationError):
        ClientConfig(account="1", username="u", password="p", **overrides)

def test_client_config_is_frozen():
    """Test immutability after construction"""
    config = ClientConfig(account="1", username="u", password="p")
    with pytest.raises(FrozenInstanceError):
        config.account = "2"

def test_client_config_redacted():
    """Test password masking"""
    config = ClientConfig(account="1", username="u", password="hunter2")
    assert config.redacted()["password"] == "***"
    assert "hunter2" not in repr(config)

def test_config_defaults():
    """Test default configuration values"""
    config = Config()
    assert config.get("client.retries") == 0
    assert config.get("client.timeout") == 10
    assert config.get("client.base_url") == "https://basecamp.com"
    assert config.get("logging.level") == "INFO"
    assert config.get("logging.file") is None
    assert config.get("nonexistent.key", default="default") == "default"

def test_config_loading(config_file):
    """Test configuration loading from JSON file"""
    config = Config(config_file)
    assert config.get("client.identifier") == "Test Suite"
    assert config.get("client.retries") == 2
    assert config.get("client.timeout") == 5
    assert config.get("logging.level") == "DEBUG"
    # untouched defaults survive the merge
    assert config.get("client.fatal") is False

def test_config_loading_yaml(tmp_path, sample_config):
    """Test configuration loading from YAML file"""
    path = tmp_path / "basecamp.yaml"
    path.write_text(yaml.safe_dump(sample_config))
    config = Config(path)
    assert config.get("client.account") == "605816632"
    assert config.get("client.retries") == 2

def test_environment_variables():
    """Test environment variable overrides"""
    os.environ["BASECAMP_CLIENT_RETRIES"] = "4"
    os.environ["BASECAMP_CLIENT_FATAL"] = "true"
    os.environ["BASECAMP_CLIENT_RETRY_DELAY"] = "0.5"
    os.environ["BASECAMP_LOGGING_LEVEL"] = "DEBUG"

    config = Config()

    assert config.get("client.retries") == 4
    assert config.get("client.fatal") is True
    assert config.get("client.retry_delay") == 0.5
    assert config.get("logging.level") == "DEBUG"

def test_environment_credentials_stay_strings():
    """Test credentials are never type-converted"""
    os.environ["BASECAMP_CLIENT_ACCOUNT"] = "0605816632"
    os.environ["BASECAMP_CLIENT_USERNAME"] = "u"
    os.environ["BASECAMP_CLIENT_PASSWORD"] = "1234"

    client_config = Config().client_config()
    assert client_config.account == "0605816632"
    assert client_config.password == "1234"

def test_client_config_from_settings(config_file):
    """Test building a ClientConfig from settings with overrides"""
    client_config = Config(config_file).client_config(fatal=True)
    assert client_config.account == "605816632"
    assert client_config.identifier == "Test Suite"
    assert client_config.retries == 2
    assert client_config.fatal is True

def test_client_config_from_settings_missing_credentials():
    """Test missing credentials are reported"""
    with pytest.raises(ConfigurationError) as exc_info:
        Config().client_config(account="1")
    assert exc_info.value.details["missing"] == ["username", "password"]

def test_client_config_from_settings_unknown_key():
    """Test unknown client settings are rejected"""
    config = Config()
    config.set("client.colour", "blue")
    with pytest.raises(ConfigurationError):
        config.client_config(account="1", username="u", password="p")

def test_config_validation():
    """Test configuration validation rules"""
    with pytest.raises(ConfigurationError):
        Config().validate({"client": {"retries": -1}})

    with pytest.raises(ConfigurationError):
        Config().validate({"client": {"timeout": 0}})

    with pytest.raises(ConfigurationError):
        Config().validate({"client": {"version": 0}})

def test_invalid_config_file():
    """Test handling of missing and malformed files"""
    with pytest.raises(ConfigurationError):
        Config(Path("nonexistent_config.json"))

def test_malformed_config_file(tmp_path):
    """Test handling of a file that is not a mapping"""
    path = tmp_path / "bad.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ConfigurationError):
        Config(path)

def test_nested_config_access():
    """Test accessing nested configuration values"""
    config = Config()
    config.set("deep.nested.value", 42)
    assert config.get("deep.nested.value") == 42

    config.update({"another": {"nested": {"key": "value"}}})
    assert config.get("another.nested.key") == "value"

@pytest.mark.parametrize("filename", ["saved.json", "saved.yaml"])
def test_config_serialization(sample_config, tmp_path, filename):
    """Test configuration save and reload"""
    config = Config()
    config.update(sample_config)

    save_path = tmp_path / filename
    config.save(save_path)

    loaded_config = Config(save_path)
    assert loaded_config.get("client.identifier") == "Test Suite"
    assert loaded_config.get("client.retries") == 2

def test_client_config_keeps_credential_whitespace():
    """Test username and password are stored exactly as given"""
    config = ClientConfig(account=" 1 ", username=" u ", password="  pw  ")
    assert config.account == "1"
    assert config.username == " u "
    assert config.password == "  pw  "

def test_unknown_environment_client_setting_ignored(caplog):
    """Test stray BASECAMP_CLIENT_* variables do not block construction"""
    os.environ["BASECAMP_CLIENT_FOO"] = "bar"

    with caplog.at_level("WARNING", logger="basecamp.core.config"):
        config = Config()
    client_config = config.client_config(account="1", username="u", password="p")

    assert config.get("client.foo") is None
    assert client_config.account == "1"
    assert "BASECAMP_CLIENT_FOO" in caplog.text

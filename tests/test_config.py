"""
Tests for mockweb configuration

Tests MockWebConfig including:
- Defaults
- Loading from dictionaries and YAML files
- Environment overrides
"""

import pytest

from mockweb import MockWebConfig


@pytest.fixture
def sample_yaml_config():
    """Sample YAML configuration."""
    return """
mockweb:
  host: "localhost"
  log_level: debug
  take_request_timeout_ms: 1000
  connection_close: true
  unknown_setting: ignored
"""


class TestMockWebConfig:
    """Test MockWebConfig dataclass."""

    def test_default_config(self):
        config = MockWebConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 0
        assert config.log_level == "warning"
        assert config.take_request_timeout_ms == 3000
        assert config.assert_timeout_ms == 500
        assert config.connection_close is False

    def test_from_dict_ignores_unknown_keys(self):
        config = MockWebConfig.from_dict({'port': '8080', 'start_timeout': '2.5', 'nope': 1})

        assert config.port == 8080
        assert config.start_timeout == 2.5

    def test_from_dict_none(self):
        assert MockWebConfig.from_dict(None) == MockWebConfig()

    def test_from_yaml(self, sample_yaml_config, tmp_path):
        path = tmp_path / "mockweb.yaml"
        path.write_text(sample_yaml_config)

        config = MockWebConfig.from_yaml(str(path))

        assert config.host == "localhost"
        assert config.log_level == "debug"
        assert config.take_request_timeout_ms == 1000
        assert config.connection_close is True

    def test_from_yaml_without_section(self, tmp_path):
        path = tmp_path / "flat.yaml"
        path.write_text("dispatch_timeout: 0.5\n")

        assert MockWebConfig.from_yaml(str(path)).dispatch_timeout == 0.5

    def test_from_env(self):
        env = {
            'MOCKWEB_PORT': '9090',
            'MOCKWEB_CONNECTION_CLOSE': 'yes',
            'MOCKWEB_FIXTURES_DIR': '/fixtures',
            'OTHER': 'x'
        }

        config = MockWebConfig.from_env(env)

        assert config.port == 9090
        assert config.connection_close is True
        assert config.fixtures_dir == '/fixtures'
        assert config.host == '127.0.0.1'

    def test_load_yaml_then_env(self, sample_yaml_config, tmp_path):
        path = tmp_path / "mockweb.yaml"
        path.write_text(sample_yaml_config)
        env = {'MOCKWEB_CONFIG': str(path), 'MOCKWEB_LOG_LEVEL': 'error'}

        config = MockWebConfig.load(env)

        assert config.host == "localhost"
        assert config.log_level == "error"

    def test_to_dict(self):
        data = MockWebConfig(port=1234).to_dict()

        assert data['port'] == 1234
        assert set(data) >= {'host', 'log_level', 'fixtures_dir'}

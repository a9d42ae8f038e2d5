"""
mockweb Configuration

Dataclass-based settings for the mock web server and its helpers, loadable
from a YAML file and from MOCKWEB_* environment variables.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml


ENV_PREFIX = "MOCKWEB_"
CONFIG_FILE_ENV = "MOCKWEB_CONFIG"


@dataclass
class MockWebConfig:
    """Configuration for mock web server behavior."""

    # Server options
    host: str = "127.0.0.1"
    port: int = 0  # 0 = ephemeral port
    log_level: str = "warning"

    # Bounded waits, in seconds
    start_timeout: float = 5.0
    shutdown_timeout: float = 5.0
    dispatch_timeout: float = 5.0  # QueueDispatcher wait for an enqueued response

    # Request draining, in milliseconds
    take_request_timeout_ms: int = 3000
    assert_timeout_ms: int = 500

    # Fixture files for set_json_file_as_body
    fixtures_dir: str = "tests/resources"

    # Add "Connection: Close" to every response
    connection_close: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'MockWebConfig':
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            if key in known:
                values[key] = _coerce(known[key].type, value)
        return cls(**values)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'MockWebConfig':
        """Load config from YAML file."""
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        # Allow the settings to live under a top-level "mockweb" key
        if isinstance(data, dict) and isinstance(data.get('mockweb'), dict):
            data = data['mockweb']

        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional['MockWebConfig'] = None
    ) -> 'MockWebConfig':
        """
        Apply MOCKWEB_* environment variables on top of a base config.

        Args:
            environ: Environment mapping (defaults to os.environ)
            base: Config to override (defaults to MockWebConfig())

        Returns:
            New MockWebConfig
        """
        env = os.environ if environ is None else environ
        values = (base or cls()).to_dict()

        for name in values:
            env_key = f"{ENV_PREFIX}{name.upper()}"
            if env_key in env:
                values[name] = env[env_key]

        return cls.from_dict(values)

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> 'MockWebConfig':
        """Load YAML named by MOCKWEB_CONFIG (if set), then apply env overrides."""
        env = os.environ if environ is None else environ
        config_file = env.get(CONFIG_FILE_ENV)
        base = cls.from_yaml(config_file) if config_file else cls()
        return cls.from_env(env, base=base)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(type_name: Any, value: Any) -> Any:
    """Coerce a raw YAML/env value to the declared field type."""
    if value is None:
        return value

    type_name = getattr(type_name, '__name__', type_name)
    if type_name == 'bool':
        if isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(value)
    if type_name == 'int':
        return int(value)
    if type_name == 'float':
        return float(value)
    return str(value)

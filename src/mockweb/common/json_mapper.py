"""
mockweb JSON Mapper

Configurable JSON serialization shared by the response helpers and the
request body helpers.
"""

import dataclasses
import json
from typing import Any, Callable, Dict, Optional


class JsonMapper:
    """
    Serializes objects to JSON and converts parsed JSON into typed values.

    Dataclass instances are serialized through ``dataclasses.asdict``. Output
    is compact (no spaces after separators) unless overridden.

    Example:
        mapper = JsonMapper()
        mapper.write_value_as_string(TestObject("test"))  # '{"value":"test"}'
        mapper.convert_value({"value": "test"}, TestObject)
    """

    def __init__(self, **dumps_kwargs: Any):
        self.dumps_kwargs: Dict[str, Any] = {'separators': (',', ':')}
        self.dumps_kwargs.update(dumps_kwargs)

    def write_value_as_string(self, value: Any) -> str:
        return json.dumps(value, default=self._default, **self.dumps_kwargs)

    def read_tree(self, content: str) -> Any:
        return json.loads(content)

    def convert_value(self, value: Any, into: Optional[Callable[..., Any]] = None) -> Any:
        """
        Convert a parsed JSON value into ``into``.

        Dataclasses and other classes receive dict values as keyword
        arguments; anything else is called with the value itself.
        """
        if into is None:
            return value

        if dataclasses.is_dataclass(into) and isinstance(value, dict):
            names = {f.name for f in dataclasses.fields(into)}
            return into(**{k: v for k, v in value.items() if k in names})

        if isinstance(into, type) and isinstance(value, into):
            return value

        if isinstance(into, type) and isinstance(value, dict) and into not in (dict, object):
            return into(**value)

        return into(value)

    @staticmethod
    def _default(value: Any) -> Any:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return dataclasses.asdict(value)
        if hasattr(value, 'to_dict'):
            return value.to_dict()
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonMapperConfigurer:
    """Process-wide default JsonMapper used by the test helpers."""

    mapper: JsonMapper = JsonMapper()

    @classmethod
    def reset(cls) -> None:
        cls.mapper = JsonMapper()


def default_mapper() -> JsonMapper:
    return JsonMapperConfigurer.mapper

"""
mockweb Common Utilities

Shared configuration, JSON mapping and helpers used across mockweb modules.
"""

from .config import MockWebConfig
from .json_mapper import JsonMapper, JsonMapperConfigurer, default_mapper
from .utils import resolve_json_pointer, split_json_pointer, read_fixture

__all__ = [
    'MockWebConfig',
    'JsonMapper',
    'JsonMapperConfigurer',
    'default_mapper',
    'resolve_json_pointer',
    'split_json_pointer',
    'read_fixture',
]

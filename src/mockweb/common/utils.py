"""
mockweb Common Utilities

Shared helpers for JSON bodies and fixture files.
"""

from pathlib import Path
from typing import Any, List, Optional, Union


def split_json_pointer(pointer: str) -> List[str]:
    """
    Split an RFC 6901 JSON Pointer into unescaped reference tokens.

    Both "" and "/" address the document root.
    """
    if pointer in ("", "/"):
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer '{pointer}': must start with '/'")

    return [token.replace("~1", "/").replace("~0", "~") for token in pointer[1:].split("/")]


def resolve_json_pointer(document: Any, pointer: str) -> Any:
    """
    Return the node addressed by a JSON Pointer.

    Raises:
        KeyError: If a referenced member or index does not exist
    """
    node = document
    for token in split_json_pointer(pointer):
        if isinstance(node, dict):
            if token not in node:
                raise KeyError(f"No node at JSON pointer '{pointer}' (missing '{token}')")
            node = node[token]
        elif isinstance(node, list):
            if not token.isdigit() or int(token) >= len(node):
                raise KeyError(f"No node at JSON pointer '{pointer}' (bad index '{token}')")
            node = node[int(token)]
        else:
            raise KeyError(f"No node at JSON pointer '{pointer}' ('{token}' below a scalar)")
    return node


def resolve_fixture_path(file_name: str, base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Locate a fixture file.

    Absolute paths are used as-is; relative names are resolved against
    ``base_dir`` (leading slashes are ignored, as with classpath resources).
    """
    path = Path(file_name)
    if path.is_absolute() and path.exists():
        return path

    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return base / file_name.lstrip("/")


def read_fixture(file_name: str, base_dir: Optional[Union[str, Path]] = None) -> str:
    """Read a fixture file as UTF-8 text."""
    path = resolve_fixture_path(file_name, base_dir)
    if not path.exists():
        raise FileNotFoundError(f"Fixture file not found: {path}")
    return path.read_text(encoding='utf-8')

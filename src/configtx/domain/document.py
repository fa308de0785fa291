"""
Dotted-path access into configuration documents.

A path such as ``canary.accounts.prod.bucket`` walks nested dicts by key.
Inside a list a segment is either an integer index or the ``name`` of a
dict entry, so named entries (accounts, providers) can be addressed
without knowing their position.
"""

from typing import Any

SEPARATOR = "."


def split_path(path: str) -> list[str]:
    """Split a dotted path; the empty path addresses the document root."""
    if not path:
        return []
    segments = path.split(SEPARATOR)
    if any(not s for s in segments):
        raise ValueError(f"Invalid path '{path}': empty segment")
    return segments


def _index_in(items: list[Any], segment: str, path: str) -> int:
    if segment.lstrip("-").isdigit():
        index = int(segment)
        if -len(items) <= index < len(items):
            return index % len(items)
        raise KeyError(f"Index {index} out of range at '{path}'")
    for i, item in enumerate(items):
        if isinstance(item, dict) and item.get("name") == segment:
            return i
    raise KeyError(f"No entry named '{segment}' at '{path}'")


def _child(node: Any, segment: str, path: str) -> Any:
    if isinstance(node, dict):
        if segment not in node:
            raise KeyError(f"Missing key '{segment}' at '{path}'")
        return node[segment]
    if isinstance(node, list):
        return node[_index_in(node, segment, path)]
    raise KeyError(f"Cannot descend into {type(node).__name__} at '{path}'")


def get_path(document: dict[str, Any], path: str) -> Any:
    """
    Read the value at path.

    Raises:
        KeyError: If any segment does not resolve
    """
    node: Any = document
    for segment in split_path(path):
        node = _child(node, segment, path)
    return node


def _parent(document: dict[str, Any], path: str, create: bool) -> tuple[Any, str]:
    segments = split_path(path)
    if not segments:
        raise ValueError("The document root has no parent; replace the document instead")
    node: Any = document
    for segment in segments[:-1]:
        if create and isinstance(node, dict) and segment not in node:
            node[segment] = {}
        node = _child(node, segment, path)
    return node, segments[-1]


def set_path(document: dict[str, Any], path: str, value: Any) -> None:
    """Set the value at path, creating intermediate mappings as needed."""
    parent, last = _parent(document, path, create=True)
    if isinstance(parent, dict):
        parent[last] = value
    elif isinstance(parent, list):
        parent[_index_in(parent, last, path)] = value
    else:
        raise KeyError(f"Cannot assign into {type(parent).__name__} at '{path}'")


def delete_path(document: dict[str, Any], path: str) -> Any:
    """
    Remove the value at path and return it.

    Raises:
        KeyError: If the path does not resolve
    """
    parent, last = _parent(document, path, create=False)
    if isinstance(parent, dict):
        if last not in parent:
            raise KeyError(f"Missing key '{last}' at '{path}'")
        return parent.pop(last)
    if isinstance(parent, list):
        return parent.pop(_index_in(parent, last, path))
    raise KeyError(f"Cannot delete from {type(parent).__name__} at '{path}'")


def append_path(document: dict[str, Any], path: str, value: Any) -> None:
    """
    Append value to the list at path, creating an empty list if absent.

    Raises:
        TypeError: If the existing value is not a list
        ValueError: If a named entry with the same name already exists
    """
    try:
        items = get_path(document, path)
    except KeyError:
        items = []
        set_path(document, path, items)
    if not isinstance(items, list):
        raise TypeError(f"Value at '{path}' is {type(items).__name__}, not a list")
    name = value.get("name") if isinstance(value, dict) else None
    if name is not None and any(
        isinstance(i, dict) and i.get("name") == name for i in items
    ):
        raise ValueError(f"An entry named '{name}' already exists at '{path}'")
    items.append(value)

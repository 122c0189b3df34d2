"""Dot-path helpers: nested objects <-> flat ``{"a.b.c": value}`` maps."""

from __future__ import annotations

from typing import Any

FlatValueMap = dict[str, Any]

_MISSING = object()


def flatten(obj: dict[str, Any], prefix: str = "") -> FlatValueMap:
    """Flatten nested dicts into dot-path keys.

    Only plain dicts are descended into; lists, scalars and ``None`` are
    leaves, so ``{"a": [1, 2]}`` stays ``{"a": [1, 2]}``. An empty nested
    dict contributes no keys.

    >>> flatten({"vision": {"rightEye": {"uncorrected": "20/40"}}})
    {'vision.rightEye.uncorrected': '20/40'}
    """
    if not isinstance(obj, dict):
        msg = f"flatten() expects a dict, got {type(obj).__name__}"
        raise TypeError(msg)

    flat: FlatValueMap = {}
    for key, value in obj.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat


def has_nested_objects(obj: dict[str, Any]) -> bool:
    return any(isinstance(value, dict) for value in obj.values())


def unflatten(flat: FlatValueMap) -> dict[str, Any]:
    """Inverse of :func:`flatten`.

    Raises ``ValueError`` when two paths disagree about the shape, e.g.
    ``"a"`` holding a scalar while ``"a.b"`` is also present.
    """
    root: dict[str, Any] = {}
    for path, value in flat.items():
        segments = path.split(".")
        node = root
        for depth, segment in enumerate(segments[:-1]):
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                prefix = ".".join(segments[: depth + 1])
                msg = f"Path {path!r} conflicts with leaf {prefix!r}"
                raise ValueError(msg)
            node = child
        leaf = segments[-1]
        if isinstance(node.get(leaf), dict) and not isinstance(value, dict):
            msg = f"Path {path!r} conflicts with nested paths below it"
            raise ValueError(msg)
        node[leaf] = value
    return root


def get_path(obj: dict[str, Any], path: str, default: Any = None) -> Any:
    """Read the value stored at dot-path *path*, or *default* if absent."""
    node: Any = obj
    for segment in path.split("."):
        if not isinstance(node, dict):
            return default
        node = node.get(segment, _MISSING)
        if node is _MISSING:
            return default
    return node

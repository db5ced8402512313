"""Resolution of value specs against the record chain.

Wherever a codec's shape depends on another field (array length, string size,
presence condition) it takes a *value spec*:

- a literal (returned unchanged), e.g. ``4``
- a callable, invoked with the current record, e.g. ``lambda r: r["len"] * 2``
- a path string resolved against the current record:
    - ``"len"`` or ``"header.len"``: key lookup, dotted paths descend
    - ``"../len"``: ascend one record first (repeatable, ``"../../len"``)
    - ``"/len"``: start from the outermost record
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Union

from ..config import get_config
from ..exceptions import NoParentRecordError, PathResolutionError
from .context import Scope

ValueSpec = Union[int, float, bool, str, Callable[[Any], Any], None]


def resolve(scope: Scope | None, spec: Any) -> Any:
    """Resolve a value spec against the current scope.

    Args:
        scope: Scope of the record currently being processed (None at the root)
        spec: Literal, callable or path string

    Returns:
        The resolved value

    Raises:
        NoParentRecordError: If an ascend path goes above the outermost record
        PathResolutionError: If a path names a missing key or there is no record

    Example:
        >>> scope = Scope({"size": 2}, None)
        >>> resolve(Scope({"n": 1}, scope), "../size")
        2
    """
    if isinstance(spec, str):
        return resolve_path(scope, spec)
    if callable(spec):
        return spec(scope.record if scope is not None else None)
    return spec


def resolve_path(scope: Scope | None, path: str) -> Any:
    """Resolve a path string; see the module docstring for the syntax."""
    config = get_config()
    remainder = path

    if remainder.startswith(config.root_marker):
        if scope is None:
            raise PathResolutionError(f"Cannot resolve {path!r}: no record in scope")
        scope = scope.root
        remainder = remainder[len(config.root_marker) :]
    else:
        while remainder.startswith(config.parent_marker):
            if scope is None or scope.parent is None:
                raise NoParentRecordError(
                    f"Cannot resolve {path!r}: cannot access nonexistent parent record"
                )
            scope = scope.parent
            remainder = remainder[len(config.parent_marker) :]

    if scope is None:
        raise PathResolutionError(f"Cannot resolve {path!r}: no record in scope")

    return descend(scope.record, remainder, config.path_separator, path)


def descend(value: Any, key_path: str, separator: str = ".", full_path: str | None = None) -> Any:
    """Walk a dotted key path through nested mappings or objects.

    Mappings are indexed by key; other objects (e.g. pydantic models) are
    read by attribute.
    """
    for key in key_path.split(separator):
        if isinstance(value, Mapping):
            if key not in value:
                raise PathResolutionError(
                    f"Cannot resolve {full_path or key_path!r}: no field {key!r} "
                    f"(available: {sorted(value)})"
                )
            value = value[key]
        elif hasattr(value, key):
            value = getattr(value, key)
        else:
            raise PathResolutionError(
                f"Cannot resolve {full_path or key_path!r}: "
                f"{type(value).__name__} has no field {key!r}"
            )
    return value

"""Grouping and rollup primitives over lists of dict records.

Grouping builds a nested mapping (``key1 -> key2 -> ... -> leaf``) whose
iteration order is the order in which each key was first seen. Flattening
turns such a tree back into flat records, one per observed key tuple, which
is the shape chart and table components consume.

Records are not validated: a missing field groups under ``None`` and all NaN
keys share a single group. Keys are compared as dict keys, so an absent
field and an explicit ``None`` land in the same group, as do values that
compare equal across types (``True``, ``1`` and ``1.0``).
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Mapping, Sequence, Union

Record = Mapping[str, Any]
KeyFunc = Callable[[Record], Any]
Key = Union[str, KeyFunc]

_NAN = float("nan")


def _key_func(key: Key) -> KeyFunc:
    if callable(key):
        return key
    return lambda record: record.get(key)


def _intern(value: Any) -> Any:
    # NaN != NaN, so map every NaN onto one object for dict lookups
    if isinstance(value, float) and math.isnan(value):
        return _NAN
    return value


def _group(records: list[Record], funcs: Sequence[KeyFunc], reduce: Callable[[list[Record]], Any]) -> Any:
    if not funcs:
        return reduce(records)

    head, rest = funcs[0], funcs[1:]
    buckets: dict[Any, list[Record]] = {}
    for record in records:
        buckets.setdefault(_intern(head(record)), []).append(record)

    return {key: _group(members, rest, reduce) for key, members in buckets.items()}


def group_records(data: Iterable[Record], keys: Sequence[Key]) -> Any:
    """Partition records into a nested mapping of member lists.

    Args:
        data: Records to group.
        keys: Field names or ``record -> value`` callables, outermost first.

    Returns:
        Nested dict with one level per key; leaves are lists of records in
        input order. With no keys the whole dataset is returned as a list.
    """
    return _group(list(data), [_key_func(k) for k in keys], list)


def rollup(
    data: Iterable[Record],
    reduce: Callable[[list[Record]], Any],
    keys: Sequence[Key],
) -> Any:
    """Group records like `group_records` and reduce each leaf group.

    Args:
        data: Records to group.
        reduce: Called once per leaf group with its member records.
        keys: Field names or ``record -> value`` callables, outermost first.

    Returns:
        Nested dict whose leaves are the reduced values.
    """
    return _group(list(data), [_key_func(k) for k in keys], reduce)


def flatten_rollup(
    tree: Any,
    key_fields: Sequence[str],
    value_key: str | None = None,
) -> list[dict[str, Any]]:
    """Flatten a grouping tree into one record per leaf.

    Args:
        tree: Nested mapping produced by `rollup` or `group_records`.
        key_fields: Output field name for each tree level, outermost first.
        value_key: Field that receives the leaf value. When ``None`` the leaf
            must be a mapping and its items are merged into the record.

    Returns:
        List of dicts ``{key_fields[0]: k1, ..., value_key: leaf}`` in tree
        iteration order.
    """
    rows: list[dict[str, Any]] = []
    depth = len(key_fields)

    def _walk(node: Any, level: int, prefix: dict[str, Any]) -> None:
        if level == depth:
            row = dict(prefix)
            if value_key is None:
                row.update(node)
            else:
                row[value_key] = node
            rows.append(row)
            return
        for key, child in node.items():
            _walk(child, level + 1, {**prefix, key_fields[level]: key})

    _walk(tree, 0, {})
    return rows


def rollup_count(
    data: Iterable[Record],
    keys: Sequence[str],
    count_key: str = "count",
) -> list[dict[str, Any]]:
    """Count records per observed combination of key values.

    Args:
        data: Records to count.
        keys: Field names to group by, outermost first.
        count_key: Output field name for the count.

    Returns:
        One record per observed key tuple, e.g.
        ``{"race_ethnicity": "Asian", "denied": 1, "count": 12}``.
        Combinations absent from the input never appear.
    """
    return flatten_rollup(rollup(data, len, keys), keys, count_key)


def rollup_count1(data: Iterable[Record], key: str, count_key: str = "count") -> list[dict[str, Any]]:
    """One-level `rollup_count`."""
    return rollup_count(data, [key], count_key)


def rollup_count2(
    data: Iterable[Record],
    key1: str,
    key2: str,
    count_key: str = "count",
) -> list[dict[str, Any]]:
    """Two-level `rollup_count`: groups by `key1`, then `key2` within each group."""
    return rollup_count(data, [key1, key2], count_key)


def rollup_count3(
    data: Iterable[Record],
    key1: str,
    key2: str,
    key3: str,
    count_key: str = "count",
) -> list[dict[str, Any]]:
    """Three-level `rollup_count`."""
    return rollup_count(data, [key1, key2, key3], count_key)

"""
Computed Fields
---------------

A field in a record is either a plain value, stored and returned
as-is, or a :class:`Computed` value that is derived from the record
every time it is read and never stored back.

>>> posts = Collection("posts", [{"title": "Foo", "slug": lambda post: post["title"].lower()}])
>>> posts.get(1)
{'id': 1, 'title': 'Foo', 'slug': 'foo'}
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping


@dataclass(frozen=True)
class Computed:
    """A field whose value is the result of ``function(record)``."""

    function: Callable[[Dict[str, Any]], Any]

    def __call__(self, record: Dict[str, Any]) -> Any:
        return self.function(record)


def wrap(value: Any) -> Any:
    """
    Tags plain callables as computed fields. Anything else is
    copied, so the store never shares objects with the caller.
    """
    if isinstance(value, (Computed, type)):
        return value
    if callable(value):
        return Computed(value)
    return copy.deepcopy(value)


def wrap_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: wrap(value) for key, value in record.items()}


def evaluate(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Formats a raw record for output.

    Computed fields are given the raw record (with the
    literal values only) and replaced with their result.
    Literal values are copies of the stored ones.
    """
    raw = copy.deepcopy({key: value for key, value in record.items() if not isinstance(value, Computed)})
    return {
        key: value(dict(raw)) if isinstance(value, Computed) else raw[key]
        for key, value in record.items()
    }

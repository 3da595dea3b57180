"""
Collection
----------

Stores many records of one entity, keyed by an identifier that
is assigned by the store.

Identifiers come from an ``index`` function that is handed the
current head (the last identifier issued, ``0`` when empty) and
returns the next one. The head only ever moves forwards, so
identifiers are never reused, even after a record is removed.
"""

import copy
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from mockserver import logger
from mockserver.errors import ConfigurationError, NotFoundError
from .computed import Computed, evaluate, wrap, wrap_record
from .model import Model


def increment(head: int) -> int:
    """The default index: counts up from one."""
    return head + 1


class Collection(Model):
    """
    A collection of records.

    >>> authors = Collection("authors", [{"name": "Jane Doe"}])
    >>> authors.add({"name": "John Doe"})
    {'id': 2, 'name': 'John Doe'}
    """

    data: Dict[Any, Dict[str, Any]]
    """The raw records, keyed by identifier, in insertion order."""

    def __init__(self, name: str, data: Sequence[Mapping[str, Any]],
                 index: Callable[[Any], Any] = increment):
        """
        :param name: The name of the entity.
        :param data: The records to seed the collection with.
        :param index: Generates the next identifier from the current head.
        :raises ConfigurationError: If the data is not a list of mappings.
        """
        if not isinstance(data, (list, tuple)):
            raise ConfigurationError(f"Inputs to `Collection` must be a list, not {type(data).__name__}.")
        if not all(isinstance(record, Mapping) for record in data):
            raise ConfigurationError(f"Every record seeded into `{name}` must be a mapping.")

        self.name = name
        self.index = index
        self.head = 0
        self.data = {}
        for record in data:
            self.head = self.index(self.head)
            self.data[self.head] = self._clean(record)

        self.backup = copy.deepcopy(self.data)
        self.backup_head = self.head

    @staticmethod
    def _clean(record: Mapping[str, Any]) -> Dict[str, Any]:
        """The identifier lives in the key, never in the stored record."""
        return wrap_record({key: value for key, value in record.items() if key != "id"})

    def get(self, id: Any) -> Optional[Dict[str, Any]]:
        """
        Gets a single record, with its identifier and computed fields.

        :returns: The formatted record, or None if there is no such record.
        """
        if id not in self.data:
            return None
        return evaluate({"id": id, **self.data[id]})

    def all(self) -> List[Dict[str, Any]]:
        return [self.get(id) for id in self.data]

    def add(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Adds a record, assigning it the next identifier.

        Computed fields that the existing records have, but the
        new record does not provide, are copied onto the new record.
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"New `{self.name}` record must be a mapping, not {type(record).__name__}.")

        template = next(iter(self.data.values()), None) or next(iter(self.backup.values()), {})
        data = self._clean(record)
        for key, value in template.items():
            if isinstance(value, Computed) and key not in data:
                data[key] = value

        self.head = self.index(self.head)
        self.data[self.head] = data
        logger.debug("Added record %s to %s", self.head, self.name)
        return self.get(self.head)

    def update(self, id: Any, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Merges the given fields into an existing record.
        Fields that aren't mentioned are left untouched.

        :raises NotFoundError: If there is no such record.
        """
        if id not in self.data:
            raise NotFoundError(f"Specified id `{id}` not in `{self.name}`.")
        for key, value in record.items():
            if key != "id":
                self.data[id][key] = wrap(value)
        return self.get(id)

    def remove(self, id: Any):
        """Removes a record, if it exists."""
        self.data.pop(id, None)

    def reset(self):
        super().reset()
        self.head = self.backup_head

    def __contains__(self, id) -> bool:
        return id in self.data

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

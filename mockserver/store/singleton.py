"""
Singleton
---------

Stores a single record with no identifier, such as
the profile of the logged in user.
"""

import copy
from typing import Any, Dict, Mapping

from mockserver.errors import ConfigurationError
from .computed import evaluate, wrap, wrap_record
from .model import Model


class Singleton(Model):
    """
    A single record.

    >>> profile = Singleton("profile", {"username": "admin"})
    >>> profile.update({"username": "test"})
    {'username': 'test'}
    """

    data: Dict[str, Any]

    def __init__(self, name: str, data: Mapping[str, Any]):
        """
        :raises ConfigurationError: If the data is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Inputs to `Singleton` must be a mapping, not {type(data).__name__}.")

        self.name = name
        self.data = wrap_record(data)
        self.backup = copy.deepcopy(self.data)

    def get(self) -> Dict[str, Any]:
        """Gets the record with its computed fields evaluated."""
        return evaluate(self.data)

    def all(self) -> Dict[str, Any]:
        return self.get()

    def update(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Merges the given fields into the record."""
        for key, value in record.items():
            self.data[key] = wrap(value)
        return self.json()

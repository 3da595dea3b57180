"""
This module hosts the base class for all stores.
A store must implement all abstract functions to be usable.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any


class Model(ABC):
    """
    The abstract store interface.

    Each store keeps a deep copy of the data it was seeded with,
    so that :meth:`reset` always restores the same state no matter
    how the live data was mutated.
    """

    name: str
    data: Any
    backup: Any

    @abstractmethod
    def all(self):
        """Gets every record in the store, formatted for output."""

    def json(self):
        """Returns a plain data structure with all the data in the store."""
        return self.all()

    def reset(self):
        """Restores the store to the state it was seeded with."""
        self.data = copy.deepcopy(self.backup)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"

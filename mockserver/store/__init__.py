"""
Handles all the in-memory persistence for the mock server.

Each named entity in the seed data becomes a store: a
:class:`Collection` when the seed is a list of records,
and a :class:`Singleton` when it is a single mapping.
"""

from .computed import Computed
from .model import Model
from .collection import Collection
from .singleton import Singleton

"""
Server
------

The mock server: a set of in-memory stores and the endpoints that serve them.

A server is described by two factories, ``data`` returning the seed data
and ``api`` returning the endpoints. Either subclass :class:`Server` and
override them:

.. code-block:: python

    class Blog(Server):

        def data(self):
            return {
                "profile": {"username": "admin"},
                "posts": [{"title": "Foo", "author_id": 1}],
                "authors": [{"name": "Jane Doe"}],
            }

        def api(self):
            return {
                "/profile": self.singleton("profile"),
                "/posts": self.collection("posts"),
                "/posts/:id": self.model("posts"),
            }

    server = Blog("blog")

or pass them in, as ``Server("blog", data=seed, api=routes)``, where both
are called with the server.

Then install it on a client double and reset it between tests:

.. code-block:: python

    client = MagicMock()
    server.init(client)
    response = await client.get("/posts/1")
"""

from typing import Any, Callable, Dict, Mapping, Optional

from mockserver import logger
from mockserver import binder
from mockserver.config import default_name
from mockserver.dispatcher import Dispatcher
from mockserver.errors import ConfigurationError
from mockserver.routing import EndpointTable, HandlerSet
from mockserver.store import Collection, Model, Singleton
from mockserver.store.collection import increment


class Server:
    """
    An in-memory REST server.

    :ivar db: The stores, keyed by model name.
    :ivar endpoints: The handler sets, keyed by endpoint pattern.
    """

    db: Dict[str, Model]
    endpoints: EndpointTable
    dispatcher: Optional[Dispatcher] = None

    def __init__(self, name: Optional[str] = None, *,
                 data: Optional[Callable[["Server"], Mapping[str, Any]]] = None,
                 api: Optional[Callable[["Server"], Mapping[str, Any]]] = None,
                 index: Optional[Callable[[Any], Any]] = None):
        """
        :param name: The name of the server.
        :param data: Returns the seed data, overriding :meth:`data`.
        :param api: Returns the endpoints, overriding :meth:`api`.
        :param index: Generates collection ids, overriding :meth:`index`.
        """
        self.name = name or default_name
        self._data = data
        self._api = api
        self._index = index

        self.db = self.seed()
        self.endpoints = EndpointTable(self._api(self) if self._api is not None else self.api())

    @staticmethod
    def index(head: int) -> int:
        """
        Generates the id of the next record in a collection from the
        current head, which is ``0`` for an empty collection. Can be
        overridden to use other kinds of id.
        """
        return increment(head)

    def data(self) -> Mapping[str, Any]:
        """
        Returns the initial state of the database. Lists become
        collections, and mappings become singletons.
        """
        return {}

    def api(self) -> Mapping[str, Any]:
        """
        Returns the endpoints of the server, mapping each endpoint
        pattern to a handler set, or a mapping of verbs to handlers.
        """
        return {}

    def seed(self) -> Dict[str, Model]:
        """
        Builds a fresh set of stores from the seed data.

        :raises ConfigurationError: If a seed entry is neither a list nor a mapping.
        """
        data = self._data(self) if self._data is not None else self.data()
        index = self._index or self.index

        db: Dict[str, Model] = {}
        for name, value in data.items():
            if isinstance(value, (list, tuple)):
                db[name] = Collection(name, value, index)
            elif isinstance(value, Mapping):
                db[name] = Singleton(name, value)
            else:
                raise ConfigurationError(f"Seed data for `{name}` must be a list or a mapping.")
        return db

    def get(self, model: str, id: Any) -> Any:
        """
        Gets a record from a collection, or the data of a singleton.
        Handy for computed fields.

        :returns: The formatted record, or None if there is no such record.
        """
        store = self.db[model]
        return store.get() if isinstance(store, Singleton) else store.get(id)

    def all(self, model: str) -> Any:
        """Gets every record of a model."""
        return self.db[model].all()

    def model(self, options) -> HandlerSet:
        """Builds handlers for a single record endpoint. See :func:`mockserver.binder.model`."""
        return binder.model(self, options)

    def collection(self, options) -> HandlerSet:
        """Builds handlers for a collection endpoint. See :func:`mockserver.binder.collection`."""
        return binder.collection(self, options)

    def singleton(self, options) -> HandlerSet:
        """Builds handlers for a singleton endpoint. See :func:`mockserver.binder.singleton`."""
        return binder.singleton(self, options)

    def reset(self, model: Optional[str] = None):
        """
        Resets the database to its seeded state.

        :param model: Only reset this model.
        :raises ConfigurationError: If the model isn't in the database.
        """
        fresh = self.seed()

        if model is None:
            self.db = fresh
        elif model in fresh:
            self.db[model] = fresh[model]
        else:
            raise ConfigurationError(f"Specified model `{model}` not in mock server database.")

        logger.debug("Reset %s on %s", model or "all models", self.name)

    def dump(self) -> Dict[str, Any]:
        """Dumps the current state of every store."""
        return {name: store.json() for name, store in self.db.items()}

    def init(self, client) -> Dispatcher:
        """
        Installs the server on a client double, so that its ``get``,
        ``post``, ``put`` and ``delete`` calls are served from this server.
        Call it once, before the tests run.
        """
        self.dispatcher = Dispatcher(self.endpoints)
        self.dispatcher.install(client)
        logger.info("Serving %s with %s endpoints", self.name, len(self.endpoints))
        return self.dispatcher

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"

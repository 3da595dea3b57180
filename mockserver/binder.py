"""
Resource Binders
----------------

Turns declarative options into handler sets backed by the server's stores.

.. code-block:: python

    def api(self):
        return {
            "/posts": self.collection({"model": "posts", "exclude": ["author"]}),
            "/posts/:id": self.model("posts"),
            "/posts/:id/author": self.model({"model": "authors", "relation": "posts", "key": "author_id"}),
            "/profile": self.singleton("profile"),
        }

With a ``relation`` and ``key``, the id in the url belongs to the
relation, and ``key`` is the field that links the two: on a model
endpoint it is the field on the relation pointing at the model, on a
collection endpoint it is the field on each model record pointing
back at the relation.

The handlers look their stores up on every call, so they keep
working after the server has been reset.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from marshmallow import ValidationError

from mockserver.errors import ConfigurationError, MissingError
from mockserver.routing import HandlerSet
from mockserver.serializer import ResourceOptionsSchema, SingletonOptionsSchema
from mockserver.store import Collection, Singleton

Options = Union[str, Mapping[str, Any]]


def omit(record: Optional[Dict[str, Any]], exclude: Iterable[str]) -> Optional[Dict[str, Any]]:
    """Strips the excluded fields from a record."""
    if record is None:
        return None
    return {key: value for key, value in record.items() if key not in exclude}


def load_options(server, options: Options, schema=ResourceOptionsSchema, store_type=Collection) -> Dict[str, Any]:
    """
    Validates binder options against the server's stores.

    :raises ConfigurationError: If the options are malformed, or name
        a model or relation the server doesn't have.
    """
    try:
        loaded = schema().load(options)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid endpoint options {options!r}: {error.messages}") from error

    for name in (loaded["model"], loaded.get("relation")):
        if name is None:
            continue
        if name not in server.db:
            raise ConfigurationError(f"Specified model `{name}` not in mock server database.")
        if not isinstance(server.db[name], store_type if name == loaded["model"] else Collection):
            raise ConfigurationError(f"Specified model `{name}` is not a {store_type.__name__.lower()}.")

    return loaded


def model(server, options: Options) -> HandlerSet:
    """
    Builds the handlers for a single record endpoint (``/posts/:id``).

    :param server: The server owning the stores.
    :param options: The model name, or a mapping with ``model``,
        and optionally ``exclude``, ``relation`` and ``key``.
    """
    options = load_options(server, options)
    name, exclude = options["model"], options["exclude"]
    relation, key = options["relation"], options["key"]

    def target(id):
        """Maps the url id onto an id in the model."""
        if id is not None and relation:
            parent = server.db[relation].get(id)
            return None if parent is None else parent.get(key)
        return id

    def get(id):
        real_id = target(id)
        if real_id not in server.db[name]:
            return None
        return omit(server.db[name].get(real_id), exclude)

    def put(data, id):
        store = server.db[name]

        # re-link the relation to another record
        if id is not None and relation:
            if id not in server.db[relation] or not isinstance(data, Mapping) or data.get("id") not in store:
                return None
            server.db[relation].update(id, {key: data["id"]})
            return omit(store.get(data["id"]), exclude)

        if id not in store:
            return None
        # a put without a body changes nothing
        return omit(store.update(id, data or {}), exclude)

    def post(data, id):
        if not (id is not None and relation and isinstance(data, Mapping)):
            return None
        if id not in server.db[relation]:
            raise MissingError(id)

        store = server.db[name]
        result = store.update(data["id"], data) if "id" in data else store.add(data)
        server.db[relation].update(id, {key: result["id"]})
        return omit(result, exclude)

    def delete(id):
        # unlink, leaving the record in place
        if id is not None and relation:
            if id not in server.db[relation]:
                raise MissingError(id)
            server.db[relation].update(id, {key: None})
            return None

        server.db[name].remove(id)
        return None

    return HandlerSet(get=get, post=post, put=put, delete=delete)


def collection(server, options: Options) -> HandlerSet:
    """
    Builds the handlers for a collection endpoint (``/posts``, ``/posts/:id/history``).

    Batches posted or put to the endpoint are all-or-nothing: every id they
    reference is checked before any record is written.

    :param server: The server owning the stores.
    :param options: The model name, or a mapping with ``model``,
        and optionally ``exclude``, ``relation`` and ``key``.
    :raises TypeError: From the handlers, when a posted body (or an item
        of a posted or put list) is missing or not a mapping. This is a
        usage error in the test, so it carries no status and reaches the
        caller as is.
    """
    options = load_options(server, options)
    name, exclude = options["model"], options["exclude"]
    relation, key = options["relation"], options["key"]

    def nested(id) -> bool:
        return id is not None and bool(relation)

    def check(items: List[Mapping[str, Any]], id, require_id=False):
        if nested(id) and id not in server.db[relation]:
            raise MissingError(id)
        for item in items:
            if not isinstance(item, Mapping):
                raise TypeError(f"Records sent to `{name}` must be mappings, not {type(item).__name__}.")
            if ("id" in item or require_id) and item.get("id") not in server.db[name]:
                raise MissingError(item.get("id"))

    def save(item: Mapping[str, Any], id) -> Dict[str, Any]:
        item = dict(item)
        if nested(id):
            item[key] = id
        store = server.db[name]
        return omit(store.update(item["id"], item) if "id" in item else store.add(item), exclude)

    def get(id):
        records = server.db[name].all()
        if nested(id):
            records = [record for record in records if record.get(key) == id]
        return [omit(record, exclude) for record in records]

    def post(data, id):
        items = data if isinstance(data, list) else [data]
        check(items, id)
        results = [save(item, id) for item in items]
        return results if isinstance(data, list) else results[0]

    def put(data, id):
        if not (nested(id) and isinstance(data, list)):
            return None
        check(data, id, require_id=True)
        return [save(item, id) for item in data]

    return HandlerSet(get=get, post=post, put=put)


def singleton(server, options: Options) -> HandlerSet:
    """
    Builds the handlers for a singleton endpoint (``/profile``).

    Deleting a singleton restores its seeded state rather than emptying it.

    :param server: The server owning the stores.
    :param options: The model name, or a mapping with ``model`` and optionally ``exclude``.
    """
    options = load_options(server, options, schema=SingletonOptionsSchema, store_type=Singleton)
    name, exclude = options["model"], options["exclude"]

    def get(id=None):
        return omit(server.db[name].json(), exclude)

    def put(data, id=None):
        return omit(server.db[name].update(data or {}), exclude)

    def delete(id=None):
        server.db[name].reset()

    return HandlerSet(get=get, put=put, delete=delete)

"""
Routing
-------

Matches request urls to the handlers that serve them.

Urls are reduced to an *endpoint pattern* by swapping the first
numeric path segment for the ``:id`` placeholder, so that
``/posts/1/author`` is served by the handlers registered under
``/posts/:id/author`` with the id ``1``.
"""

import re
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from mockserver.config import id_placeholder
from mockserver.errors import ConfigurationError, NotFoundError

ID_REGEX = re.compile(r"/(\d+)")

VERBS = ("get", "post", "put", "delete")


def normalize(url: str) -> Tuple[Optional[int], str]:
    """
    Parses the id out of a url and returns it along with its endpoint pattern.

    Only the first run of digits following a ``/`` is treated as an id.
    Urls with more than one numeric segment must be registered literally.

    >>> normalize("/posts/1/author")
    (1, '/posts/:id/author')
    >>> normalize("/posts")
    (None, '/posts')
    """
    match = ID_REGEX.search(url)
    if match is None:
        return None, url
    endpoint = url[:match.start()] + "/" + id_placeholder + url[match.end():]
    return int(match.group(1)), endpoint


@dataclass
class HandlerSet:
    """
    The request handlers bound to one endpoint.

    ``get`` and ``delete`` are called with the id from the url,
    ``post`` and ``put`` with the request data and then the id.
    The id is None when the url has no numeric segment.
    """

    get: Optional[Callable[[Any], Any]] = None
    post: Optional[Callable[[Any, Any], Any]] = None
    put: Optional[Callable[[Any, Any], Any]] = None
    delete: Optional[Callable[[Any], Any]] = None

    @classmethod
    def coerce(cls, value: Any) -> Optional["HandlerSet"]:
        """
        Builds a handler set from a mapping of verbs to callables,
        or from any object with verb attributes.

        :raises ConfigurationError: If a mapping has keys that are not verbs,
            or a handler isn't callable.
        """
        if value is None or isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            unknown = set(value) - set(VERBS)
            if unknown:
                raise ConfigurationError(f"Handler sets only support {', '.join(VERBS)}, not {', '.join(sorted(unknown))}.")
            handlers = dict(value)
        else:
            handlers = {verb: getattr(value, verb, None) for verb in VERBS}

        for verb, handler in handlers.items():
            if handler is not None and not callable(handler):
                raise ConfigurationError(f"The {verb} handler must be callable.")

        return cls(**handlers)

    def for_verb(self, verb: str) -> Optional[Callable]:
        return getattr(self, verb, None)

    def verbs(self):
        return [field.name for field in fields(self) if getattr(self, field.name) is not None]


class EndpointTable:
    """
    Maps endpoint patterns to their handler sets.

    An endpoint may be registered as None, in which
    case it is treated as if it weren't registered.
    """

    def __init__(self, endpoints: Optional[Mapping[str, Any]] = None):
        self._endpoints: Dict[str, Optional[HandlerSet]] = {}
        for pattern, handlers in (endpoints or {}).items():
            self.register(pattern, handlers)

    def register(self, pattern: str, handlers: Any):
        if not isinstance(pattern, str):
            raise ConfigurationError(f"Endpoint patterns must be strings, not {type(pattern).__name__}.")
        self._endpoints[pattern] = HandlerSet.coerce(handlers)

    def lookup(self, endpoint: str, url: Optional[str] = None) -> HandlerSet:
        """
        Gets the handlers for an endpoint pattern.

        :param url: The url as requested, for the error message.
        :raises NotFoundError: If nothing is registered at the endpoint.
        """
        handlers = self._endpoints.get(endpoint)
        if handlers is None:
            raise NotFoundError.for_url(url if url is not None else endpoint)
        return handlers

    def resolve(self, verb: str, endpoint: str, url: Optional[str] = None) -> Callable:
        """
        Gets the handler for the verb at an endpoint pattern.

        :raises NotFoundError: If the endpoint isn't registered or doesn't support the verb.
        """
        handler = self.lookup(endpoint, url).for_verb(verb)
        if handler is None:
            raise NotFoundError.for_verb(verb, url if url is not None else endpoint)
        return handler

    def __contains__(self, endpoint: str) -> bool:
        return self._endpoints.get(endpoint) is not None

    def __iter__(self):
        return iter(self._endpoints)

    def __len__(self):
        return len(self._endpoints)

"""
Dispatcher
----------

Stands in for the transport of an HTTP client. Every intercepted call
goes through the same steps: the url is prefixed with the active base
url and parsed into an id and an endpoint pattern, the handler for the
verb is looked up, called, and its result wrapped in a :class:`Response`.

The verb functions are coroutines, so failures surface when the call is
awaited, never when it is made.

.. note:: The base url set by :meth:`Dispatcher.request` is shared by
    every call made through the dispatcher. Two such calls that are in
    flight at once, without awaiting each other, may see each other's
    base url.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Dict, Mapping, Optional
from unittest.mock import Mock

from mockserver import logger
from mockserver.config import base_url_keys
from mockserver.errors import MissingError, RequestError
from mockserver.routing import EndpointTable, VERBS, normalize


@dataclass
class Response:
    """The response to a successful request."""

    status: int
    data: Any = None


STATUSES = {
    "get": HTTPStatus.OK,
    "post": HTTPStatus.CREATED,
    "put": HTTPStatus.OK,
    "delete": HTTPStatus.NO_CONTENT,
}


def find_base_url(config: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Gets the base url from a client config, if it has one."""
    for key in base_url_keys:
        if config and key in config:
            return config[key]
    return None


def intercept(client, name: str, function: Callable):
    """
    Routes calls to ``client.<name>`` through the given function.
    Mocks keep their call recording, and only have their side effect replaced.
    """
    target = getattr(client, name, None)
    if isinstance(target, Mock):
        target.side_effect = function
    else:
        setattr(client, name, function)


class Dispatcher:
    """
    Serves the requests made through a client double.

    >>> client = MagicMock()
    >>> Dispatcher(server.endpoints).install(client)
    >>> response = await client.get("/posts/1")
    """

    def __init__(self, endpoints: EndpointTable, base_url: str = ""):
        self.endpoints = endpoints
        self.base_url = base_url
        self.client = None

    @property
    def routes(self) -> Dict[str, Callable]:
        """The interceptors, keyed by verb."""
        return {verb: getattr(self, verb) for verb in VERBS}

    def install(self, client):
        """Installs the interceptors on the client."""
        self.client = client
        for verb, interceptor in self.routes.items():
            intercept(client, verb, interceptor)
        intercept(client, "create", self.create)
        intercept(client, "request", self.request)
        if isinstance(client, Mock):
            client.side_effect = self.request
        logger.debug("Installed interceptors on %r", client)
        return client

    async def dispatch(self, verb: str, url: str, data: Any = None) -> Response:
        """
        Serves a single request.

        :raises NotFoundError: If no handler serves the verb at the url.
        :raises MissingError: If a ``get`` handler finds nothing.
        :raises RequestError: If the handler raises one.
        """
        id, endpoint = normalize(self.base_url + url)
        logger.debug("%s %s -> %s (id=%s)", verb.upper(), url, endpoint, id)

        try:
            handler = self.endpoints.resolve(verb, endpoint, url)
            if verb in ("get", "delete"):
                result = handler(id)
            else:
                result = handler(data, id)

            if verb == "get" and result is None:
                raise MissingError(id if id is not None else url)
        except RequestError as error:
            logger.debug("%s %s rejected: %s", verb.upper(), url, error)
            raise

        return Response(status=STATUSES[verb], data=result)

    async def get(self, url: str, data: Any = None, **kwargs) -> Response:
        return await self.dispatch("get", url)

    async def post(self, url: str, data: Any = None, **kwargs) -> Response:
        return await self.dispatch("post", url, kwargs.get("json", data))

    async def put(self, url: str, data: Any = None, **kwargs) -> Response:
        return await self.dispatch("put", url, kwargs.get("json", data))

    async def delete(self, url: str, data: Any = None, **kwargs) -> Response:
        return await self.dispatch("delete", url)

    def create(self, config: Optional[Mapping[str, Any]] = None, **kwargs):
        """
        Imitates creating a client instance. A base url in
        the config applies to every later call.
        """
        base_url = find_base_url({**(config or {}), **kwargs})
        if base_url is not None:
            self.base_url = base_url
        return self.client

    async def request(self, config: Optional[Mapping[str, Any]] = None, **kwargs) -> Response:
        """
        Serves a request described by a config mapping with the
        ``method``, ``url`` and ``data`` keys, and optionally a base url
        that applies to this request only.
        """
        params = {"method": "get", "data": None, **(config or {}), **kwargs}
        verb = str(params["method"]).lower()
        if verb not in VERBS:
            raise ValueError(f"Unsupported method {params['method']!r}.")
        method = getattr(self, verb)

        before = self.base_url
        base_url = find_base_url(params)
        if base_url is not None:
            self.base_url = base_url
        try:
            return await method(params["url"], params["data"])
        finally:
            self.base_url = before

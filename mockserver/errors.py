"""
Errors
------

The failures the mock server can report.

Request errors are the aiohttp HTTP exceptions a real backend would
raise, carrying a JSend body. The dispatcher raises them from the
intercepted call, so the caller sees them when awaiting it. Custom
handlers may raise them too (see :class:`ForbiddenError` and
:class:`ServerError`) and they reach the caller untouched.

Configuration errors are mistakes in the test setup. They are raised
immediately, outside of any request.
"""

from typing import Any, Optional

from aiohttp import web

from mockserver.serializer import JSendSchema, JSendStatus


class ConfigurationError(Exception):
    """
    Raised when a server is set up incorrectly, such as seeding a
    collection with something that isn't a list, or resetting a
    model that doesn't exist.
    """


class RequestError(web.HTTPError):
    """
    The base for every error delivered to the caller of an intercepted request.

    Exposes the ``status`` and ``message`` of the failure, and
    stores a JSend document describing it as the body ``text``.
    """

    default_message = "The request failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(text=self.body(), content_type="application/json")

    @property
    def status(self) -> int:
        return self.status_code

    def jsend(self):
        """Builds the JSend document for the error."""
        if self.status_code >= 500:
            return {"status": JSendStatus.ERROR, "message": self.message, "code": self.status_code}
        return {"status": JSendStatus.FAIL, "data": {"message": self.message}}

    def body(self) -> str:
        """
        Serializes the JSend document for the error.

        :raises ValidationError: If :meth:`jsend` builds a malformed document.
        """
        schema = JSendSchema()
        document = schema.load(schema.dump(self.jsend()))
        return schema.dumps(document)

    def __str__(self):
        return f"{self.status_code}: {self.message}"

    def __repr__(self):
        return f"<{type(self).__name__} status={self.status_code} message={self.message!r}>"


class NotFoundError(RequestError, web.HTTPNotFound):
    """
    Raised when a url has no endpoint, when an endpoint doesn't
    handle the requested verb, or when a record to update is absent.
    """

    default_message = "Not found."

    @classmethod
    def for_url(cls, url: str) -> "NotFoundError":
        return cls(f"URL `{url}` not in API.")

    @classmethod
    def for_verb(cls, verb: str, url: str) -> "NotFoundError":
        return cls(f"URL `{url}` does not support {verb.upper()}.")


class MissingError(NotFoundError):
    """
    Raised when the url resolves to an endpoint but the
    identified resource does not exist.
    """

    def __init__(self, identifier: Any = None, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message if message is not None else f"Could not find resource `{identifier}`.")


class ForbiddenError(RequestError, web.HTTPForbidden):
    """Raised by custom handlers to simulate a refused request."""

    default_message = "Not authorized to access this resource."

    @classmethod
    def for_url(cls, url: str) -> "ForbiddenError":
        return cls(f"Not authorized to access `{url}`.")


class ServerError(RequestError, web.HTTPInternalServerError):
    """Raised by custom handlers to simulate a failing backend."""

    default_message = "Internal server error."

import pytest

from mockserver.errors import ConfigurationError, NotFoundError
from mockserver.routing import EndpointTable, HandlerSet, normalize


class TestNormalize:

    def test_collection_url(self):
        """Assert that a url without a numeric segment is its own endpoint."""
        assert normalize("/posts") == (None, "/posts")

    def test_model_url(self):
        """Assert that the numeric segment is swapped for the placeholder."""
        assert normalize("/posts/12") == (12, "/posts/:id")

    def test_nested_url(self):
        assert normalize("/posts/1/author") == (1, "/posts/:id/author")

    def test_only_first_id(self):
        """Assert that only the first numeric segment is parsed."""
        assert normalize("/posts/1/comments/2") == (1, "/posts/:id/comments/2")

    def test_digits_inside_segment(self):
        """Assert that digits not directly after a slash are left alone."""
        assert normalize("/v2/posts") == (None, "/v2/posts")

    def test_base_url(self):
        assert normalize("/api/posts/3") == (3, "/api/posts/:id")


class TestHandlerSet:

    @staticmethod
    def handler(id):
        return id

    def test_coerce_mapping(self):
        handlers = HandlerSet.coerce({"get": self.handler})
        assert handlers.get is self.handler
        assert handlers.post is None
        assert handlers.verbs() == ["get"]

    def test_coerce_object(self):
        """Assert that any object with verb attributes can be used."""

        class Handlers:
            delete = staticmethod(self.handler)

        handlers = HandlerSet.coerce(Handlers())
        assert handlers.delete is self.handler
        assert handlers.verbs() == ["delete"]

    def test_coerce_none(self):
        assert HandlerSet.coerce(None) is None

    def test_unknown_verb(self):
        """Assert that a mapping with keys that aren't verbs is rejected."""
        with pytest.raises(ConfigurationError):
            HandlerSet.coerce({"patch": self.handler})

    def test_not_callable(self):
        with pytest.raises(ConfigurationError):
            HandlerSet.coerce({"get": "nope"})


class TestEndpointTable:

    @staticmethod
    def handler(id):
        return id

    def test_resolve(self):
        table = EndpointTable({"/posts/:id": {"get": self.handler}})
        assert table.resolve("get", "/posts/:id") is self.handler
        assert "/posts/:id" in table

    def test_resolve_unregistered(self):
        table = EndpointTable()
        with pytest.raises(NotFoundError) as error:
            table.resolve("get", "/posts", "/posts")
        assert error.value.status == 404
        assert error.value.message == "URL `/posts` not in API."

    def test_resolve_null_endpoint(self):
        """Assert that an endpoint registered as None is not served."""
        table = EndpointTable({"/posts": None})
        assert "/posts" not in table
        with pytest.raises(NotFoundError):
            table.resolve("get", "/posts")

    def test_resolve_missing_verb(self):
        table = EndpointTable({"/posts": {"get": self.handler}})
        with pytest.raises(NotFoundError) as error:
            table.resolve("delete", "/posts", "/posts")
        assert "DELETE" in error.value.message

    def test_bad_pattern(self):
        with pytest.raises(ConfigurationError):
            EndpointTable({1: {"get": self.handler}})

from unittest.mock import MagicMock

import pytest
from faker import Faker
from faker.providers import internet, lorem, person

from mockserver import Server, ForbiddenError, ServerError

pytest_plugins = 'aiohttp.pytest_plugin'

fake = Faker()
fake.add_provider(internet)
fake.add_provider(lorem)
fake.add_provider(person)


class Blog(Server):
    """A small blog with posts, authors, comments and an edit history."""

    def data(self):
        def get_author(post):
            return self.get("authors", post.get("author_id"))

        def get_comments(post):
            return [comment for comment in self.all("comments") if comment["post_id"] == post["id"]]

        return {
            "profile": {
                "username": "admin",
            },
            "posts": [
                {"title": "Foo", "body": "foo bar", "author_id": 1, "author": get_author, "comments": get_comments},
                {"title": "Bar", "body": "bar baz", "author_id": 1, "author": get_author, "comments": get_comments},
            ],
            "history": [
                {"delta": "foo", "post_id": 1},
                {"delta": "bar", "post_id": 1},
            ],
            "authors": [
                {"name": "Jane Doe", "email": "jane@doe.com"},
                {"name": "John Doe", "email": "john@doe.com"},
            ],
            "comments": [
                {"user": "jack", "body": "foo comment", "post_id": 1},
                {"user": "jill", "body": "bar comment", "post_id": 1},
            ],
        }

    def api(self):
        def archive(data, id):
            return self.db["posts"].update(id, {"archived": True})

        def forbidden(id):
            raise ForbiddenError()

        def private(id):
            raise ForbiddenError.for_url("/errors/private")

        def broken(id):
            raise ServerError()

        return {
            "/profile": self.singleton("profile"),

            "/posts": self.collection({"model": "posts", "exclude": ["author", "comments"]}),
            "/posts/:id": self.model({"model": "posts", "exclude": ["author_id", "comments"]}),
            "/posts/:id/author": self.model({"model": "authors", "relation": "posts", "key": "author_id"}),
            "/posts/:id/history": self.collection({"model": "history", "relation": "posts", "key": "post_id"}),
            "/posts/:id/comments": self.collection({"model": "comments", "relation": "posts", "key": "post_id"}),
            "/posts/:id/archive": {"post": archive},

            "/authors": self.collection("authors"),
            "/authors/:id": self.model("authors"),
            "/authors/:id/posts": self.collection({
                "model": "posts",
                "relation": "authors",
                "key": "author_id",
                "exclude": ["author", "comments"],
            }),

            "/errors/missing": None,
            "/errors/forbidden": {"get": forbidden},
            "/errors/private": {"get": private},
            "/errors/server": {"get": broken},
        }


@pytest.fixture(scope="session")
def server() -> Blog:
    return Blog("blog")


@pytest.fixture(scope="session")
def client(server) -> MagicMock:
    """A client double served by the blog."""
    client = MagicMock()
    server.init(client)
    return client


@pytest.fixture(autouse=True)
def reset_server(server):
    """Every test starts from the seeded data."""
    server.reset()
    yield


@pytest.fixture
def random_record_factory():
    def create_record():
        return {"name": fake.name(), "email": fake.email(), "bio": fake.sentence()}

    return create_record

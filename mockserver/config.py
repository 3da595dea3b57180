import os

server_mode = os.getenv("MOCKSERVER_MODE", "development")
"""The operational mode of the mock server."""

default_name = os.getenv("MOCKSERVER_NAME", "mock-server")
"""The name given to servers constructed without one."""

id_placeholder = ":id"
"""The token that replaces the numeric id segment in an endpoint pattern."""

base_url_keys = ("base_url", "baseUrl", "baseURL")
"""The keys a client config may use to carry a base url override."""

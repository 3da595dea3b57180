"""
The main package for the mock server.
"""

import logging

from mockserver.config import server_mode

logger = logging.getLogger(__name__)
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s %(name)-12s %(levelname)-8s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.DEBUG if server_mode == "development" else logging.INFO)

from mockserver.dispatcher import Dispatcher, Response  # noqa: E402
from mockserver.errors import (  # noqa: E402
    ConfigurationError, RequestError, NotFoundError, MissingError, ForbiddenError, ServerError
)
from mockserver.routing import HandlerSet  # noqa: E402
from mockserver.server import Server  # noqa: E402
from mockserver.store import Collection, Singleton, Computed  # noqa: E402
from mockserver.version import __version__  # noqa: E402

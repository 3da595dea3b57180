"""
.. autoclasstree:: mockserver.serializer

The serializer package houses the schemas for data going in and out of
the mock server: the JSend body carried by request errors, and the options
accepted by the resource binders.
"""

from .jsend import JSendSchema, JSendStatus
from .options import ResourceOptionsSchema, SingletonOptionsSchema

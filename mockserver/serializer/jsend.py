"""
JSend Schema
------------

Programmatically defines the JSend specification, used as
the body of every request error raised by the mock server.
"""

from enum import Enum

from marshmallow import Schema, fields, validates_schema, ValidationError


class JSendStatus(str, Enum):
    """Enumerates the JSend status states a request error can take."""

    FAIL = "fail"
    """There was a user error with the request, or supplied data."""

    ERROR = "error"
    """There was a system error with the request."""


class JSendSchema(Schema):
    """
    A Schema that encapsulates the logic of the `JSend Format`_.

    .. _`JSend Format`: https://labs.omniti.com/labs/jsend
    """
    status = fields.Enum(JSendStatus, by_value=True, required=True)
    data = fields.Raw(allow_none=True)
    message = fields.String()
    code = fields.Integer()

    @validates_schema
    def assert_fields(self, data, **kwargs):
        """
        Asserts that, according to the specification:

        - the ``data`` field carries a ``message`` when the status is :attr:`~JSendStatus.FAIL`
        - the ``message`` field is included when the status is :attr:`~JSendStatus.ERROR`
        """
        if data["status"] == JSendStatus.FAIL:
            if not isinstance(data.get("data"), dict) or "message" not in data["data"]:
                raise ValidationError("All failures must return user-friendly error message.")
        if data["status"] == JSendStatus.ERROR:
            if "message" not in data:
                raise ValidationError(f"When the status is {data['status'].value}, the message fields must be populated.")

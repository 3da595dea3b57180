"""
Binder Options
--------------

Validates the declarative options handed to the resource binders
(``model``, ``collection`` and ``singleton``). A bare string is
shorthand for ``{"model": <string>}``.
"""

from marshmallow import Schema, fields, pre_load, validates_schema, ValidationError


class SingletonOptionsSchema(Schema):
    """Options for a singleton endpoint."""

    model = fields.String(required=True)
    exclude = fields.List(fields.String(), load_default=list)

    @pre_load
    def expand_shorthand(self, data, **kwargs):
        """Expands ``"authors"`` into ``{"model": "authors"}``."""
        if isinstance(data, str):
            return {"model": data}
        return data


class ResourceOptionsSchema(SingletonOptionsSchema):
    """
    Options for a model or collection endpoint.

    ``relation`` names the store that the path id belongs to, and
    ``key`` the field linking the two. They only make sense together.
    """

    relation = fields.String(load_default=None)
    key = fields.String(load_default=None)

    @validates_schema
    def assert_relation(self, data, **kwargs):
        if (data.get("relation") is None) != (data.get("key") is None):
            raise ValidationError("The relation and key options must be given together.")

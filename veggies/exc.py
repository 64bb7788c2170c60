"""
Exceptions for veggies.
"""


class VeggiesException(Exception):
    """
    The base class for ALL exceptions.

    Catch this if you wish to catch any custom exception raised inside the lib.
    """


class SchemaError(VeggiesException):
    """
    Raised when there is an error in a schema declaration.
    """


class NoSuchTableError(SchemaError):
    """
    Raised when a relationship references a type name that is not registered.
    """


class NoSuchColumnError(SchemaError):
    """
    Raised when a non-existing column is requested.
    """


class UnresolvableNamespaceError(SchemaError):
    """
    Raised when a related type name needs to be inferred, but the declaring table's qualified name
    has no ``Result`` segment to infer it from.
    """


class MissingPrimitiveError(SchemaError):
    """
    Raised when a declarator is used but the schema primitive it wraps was never provided.
    """


class ColumnValidationError(VeggiesException):
    """
    Raised when a column fails validation.
    """

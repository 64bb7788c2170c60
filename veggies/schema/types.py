import abc
import datetime
import typing

from veggies.exc import ColumnValidationError, SchemaError

#: A registry of upper-case type tag -> column type class.
_type_tags = {}  # type: typing.Dict[str, typing.Type[ColumnType]]


def register_type(*tags: str):
    """
    Registers a :class:`.ColumnType` under one or more type tags.

    .. code-block:: python3

        @register_type("JSON")
        class Json(ColumnType):
            def sql(self):
                return "JSON"

    """

    def decorator(type_: 'typing.Type[ColumnType]'):
        for tag in tags:
            _type_tags[tag.upper()] = type_

        return type_

    return decorator


def get_type(tag: 'typing.Union[str, ColumnType]', **kwargs) -> 'ColumnType':
    """
    Gets a new :class:`.ColumnType` for a type tag.

    Tags are case-insensitive, so ``int`` and ``INT`` are the same type. A tag that is not
    registered gives a :class:`.Custom` type that keeps the tag as-is.

    :param tag: The type tag, e.g. ``VARCHAR``. If this is already a :class:`.ColumnType` it is \
        returned as-is.
    :param kwargs: Any arguments for the type, e.g. ``size`` for a ``VARCHAR``.
    """
    if isinstance(tag, ColumnType):
        return tag

    if not isinstance(tag, str) or not tag.strip():
        raise SchemaError("Invalid column type {!r}".format(tag))

    try:
        type_ = _type_tags[" ".join(tag.upper().split())]
    except KeyError:
        return Custom(tag)

    return type_.create_default(**kwargs)


class ColumnType(abc.ABC):
    """
    Implements some underlying mechanisms for a :class:`.Column`.

    The only method that is required to be implemented on children is :meth:`.ColumnType.sql`,
    which is the canonical name of the type.

    Types are looked up by tag with :func:`.get_type`; new types are added with
    :func:`.register_type`.
    """
    __slots__ = ("column",)

    def __init__(self):
        #: The column this type object is associated with.
        self.column = None

    def __repr__(self):
        return "<{} sql='{}'>".format(type(self).__name__, self.sql())

    @abc.abstractmethod
    def sql(self) -> str:
        """
        :return: The str name of this type.
        """

    def validate_set(self, value: typing.Any) -> bool:
        """
        Validates that a value is valid for this type.
        This is used to check client-side column defaults.

        :param value: The value to check.
        :return: A bool indicating if this is valid or not.
        """
        return True

    def validate(self, value: typing.Any):
        """
        Validates a value, raising if it is invalid. None is always valid.
        """
        if value is None:
            return

        if not self.validate_set(value):
            raise ColumnValidationError("Value {} failed to validate in type {}"
                                        .format(value, type(self).__name__))

    @classmethod
    def create_default(cls, **kwargs) -> 'ColumnType':
        """
        Creates the default object for this type in the event that a type is passed to a column,
        instead of an instance.

        Keyword arguments this type does not understand are ignored.
        """
        return cls()


@register_type("VARCHAR", "STRING")
class String(ColumnType):
    """
    Represents a VARCHAR() type.
    """
    __slots__ = ("size",)

    def __init__(self, size: int = -1):
        super().__init__()
        #: The max size of this String.
        self.size = size

    @classmethod
    def create_default(cls, size: int = None, **kwargs):
        if size is None:
            return cls()

        return cls(size=size)

    def sql(self):
        # unbounded varchar if there's no size
        if self.size >= 0:
            return "VARCHAR({})".format(self.size)
        else:
            return "VARCHAR"

    def validate_set(self, value: typing.Any):
        if not isinstance(value, str):
            return False

        if self.size < 0:
            return True

        if len(value) > self.size:
            raise ColumnValidationError("Value {} is more than {} chars long".format(value,
                                                                                     self.size))

        return True


@register_type("TEXT")
class Text(String):
    """
    Represents a TEXT type.
    TEXT type columns are very similar to String type objects, except that they have no size limit.
    """
    __slots__ = ()

    def __init__(self):
        # unlimited size
        super().__init__(size=-1)

    @classmethod
    def create_default(cls, **kwargs):
        return cls()

    def sql(self):
        return "TEXT"


@register_type("BOOLEAN", "BOOL")
class Boolean(ColumnType):
    """
    Represents a BOOL type.
    """
    __slots__ = ()

    def sql(self):
        return "BOOLEAN"

    def validate_set(self, value: typing.Any):
        return value in [True, False]


@register_type("INTEGER", "INT")
class Integer(ColumnType):
    """
    Represents an INTEGER type.

    .. warning::
        This represents a 32-bit integer (-2**31 to 2**31-1)
    """
    __slots__ = ()

    def sql(self):
        return "INTEGER"

    def validate_set(self, value: typing.Any):
        """
        Checks if this int is in range for the type.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ColumnValidationError("Value {} is not an int".format(value))

        return -2147483648 <= value <= 2147483647


@register_type("INTEGER UNSIGNED", "INT UNSIGNED")
class UnsignedInteger(Integer):
    """
    Represents an INTEGER UNSIGNED type.
    """
    __slots__ = ()

    def sql(self):
        return "INTEGER UNSIGNED"

    def validate_set(self, value: typing.Any):
        super().validate_set(value)
        return 0 <= value <= 4294967295


@register_type("SMALLINT")
class SmallInt(Integer):
    """
    Represents a SMALLINT type.
    """
    __slots__ = ()

    def sql(self):
        return "SMALLINT"

    def validate_set(self, value: typing.Any):
        super().validate_set(value)
        return -32768 <= value <= 32767


@register_type("BIGINT")
class BigInt(Integer):
    """
    Represents a BIGINT type.
    """
    __slots__ = ()

    def sql(self):
        return "BIGINT"

    def validate_set(self, value):
        super().validate_set(value)
        return -9223372036854775808 <= value <= 9223372036854775807


@register_type("TIMESTAMP", "DATETIME")
class Timestamp(ColumnType):
    """
    Represents a TIMESTAMP type.
    """
    __slots__ = ()

    def sql(self):
        return "TIMESTAMP"

    def validate_set(self, value):
        return isinstance(value, datetime.datetime)


class Custom(ColumnType):
    """
    Represents a type with no registered class, e.g. ``DATE`` or ``int-unsigned``.

    The tag is kept exactly as given, and any value is valid.
    """
    __slots__ = ("tag",)

    def __init__(self, tag: str):
        super().__init__()
        #: The type tag, as declared.
        self.tag = tag

    def sql(self):
        return self.tag

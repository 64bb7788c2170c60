import logging
import typing

from veggies.exc import SchemaError
from veggies.schema import relationship as md_relationship, table as md_table, \
    types as md_types
from veggies.sentinels import NO_DEFAULT

logger = logging.getLogger(__name__)

#: Column info keys that map onto :class:`.Column` arguments.
_COLUMN_ARGS = ("nullable", "default", "autoincrement", "index", "unique")


class Column(object):
    """
    Represents a column in a table.

    Columns are usually created from a column info mapping by the :meth:`.Table.column` and
    :meth:`.Table.primary_column` primitives:

    .. code-block:: python3

        artist.column("stage_name", {"type": "VARCHAR", "size": 25, "nullable": True})
        print(artist.stage_name)  # <Column table=artists name=stage_name type=VARCHAR(25)>

    """

    def __init__(self, type_: 'typing.Union[md_types.ColumnType, typing.Type[md_types.ColumnType]]',
                 *,
                 primary_key: bool = False,
                 nullable: bool = True,
                 default: typing.Any = NO_DEFAULT,
                 autoincrement: bool = False,
                 index: bool = True,
                 unique: bool = False,
                 foreign_key: 'md_relationship.ForeignKey' = None,
                 info: dict = None):
        """
        :param type_:
            The :class:`.ColumnType` that represents the type of this column.

        :param primary_key:
            Is this column part of the table's Primary Key?

        :param nullable:
            Can this column be NULL?

        :param default:
            The client-side default for this column. This is validated against the column type.

        :param autoincrement:
            Should this column auto-increment?

        :param index:
            Should this column be indexed?

        :param unique:
            Is this column unique?

        :param foreign_key:
            The :class:`.ForeignKey` associated with this column.

        :param info:
            The column info mapping this column was declared with.
        """
        #: The name of the column.
        #: This is set when the column is added to a table.
        self.name = None  # type: str

        #: The :class:`.Table` this Column is associated with.
        self.table = None  # type: md_table.Table

        #: The :class:`.ColumnType` that represents the type of this column.
        self.type = type_  # type: md_types.ColumnType
        if not isinstance(self.type, md_types.ColumnType):
            # assume we need to create the "default" type
            self.type = self.type.create_default()  # type: md_types.ColumnType
        # update our own object on the column
        self.type.column = self

        #: The default for this column.
        self.default = default
        if default is not NO_DEFAULT:
            self.type.validate(default)

        #: If this Column is a primary key.
        self.primary_key = primary_key

        #: If this Column is nullable.
        self.nullable = nullable

        #: If this Column is to autoincrement.
        self.autoincrement = autoincrement

        #: If this Column is indexed.
        self.indexed = index

        #: If this Column is unique.
        self.unique = unique

        #: The foreign key associated with this column.
        self.foreign_key = foreign_key  # type: md_relationship.ForeignKey
        if self.foreign_key is not None:
            self.foreign_key.column = self

        #: The column info mapping this column was declared with.
        self.info = dict(info or {})

    @classmethod
    def from_info(cls, info: dict, *, primary_key: bool = False) -> 'Column':
        """
        Creates a new column from a column info mapping.

        The ``type`` key is required; ``size`` is passed to the type. The keys ``nullable``,
        ``default``, ``autoincrement``, ``index`` and ``unique`` are passed to the column. Every key
        is kept in :attr:`.Column.info`.

        :param info: The column info mapping.
        :param primary_key: Is this column part of the primary key?
        """
        try:
            tag = info["type"]
        except KeyError:
            raise SchemaError("Column info {} has no type".format(info)) from None

        type_ = md_types.get_type(tag, size=info.get("size"))
        kwargs = {key: info[key] for key in _COLUMN_ARGS if key in info}
        if primary_key:
            # primary keys can never be null
            kwargs["nullable"] = False

        return cls(type_, primary_key=primary_key, info=info, **kwargs)

    def __repr__(self):
        return "<Column table={} name={} type={}>".format(self.table_name, self.name,
                                                          self.type.sql())

    def __set_name__(self, owner: 'md_table.Table', name: str):
        """
        Called to update the table and the name of this Column.

        :param owner: The :class:`.Table` this Column is on.
        :param name: The str name of this column.
        """
        logger.debug("Column created with name {} on {}".format(name, owner))
        self.name = name
        self.table = owner

    @property
    def table_name(self) -> typing.Optional[str]:
        """
        The name of this column's table, if it has one.
        """
        if self.table is None:
            return None

        return self.table.table_name

    @property
    def fullname(self) -> str:
        """
        Gets the full name for this column, in ``table.column`` format.
        """
        return "{}.{}".format(self.table_name, self.name)

    @property
    def foreign_column(self) -> 'Column':
        """
        :return: The foreign :class:`.Column` this is associated with, or None otherwise.
        """
        if self.foreign_key is None:
            return None

        return self.foreign_key.foreign_column

"""
Table objects.
"""

import logging
import typing
from collections import OrderedDict

import inflection
from cached_property import cached_property

from veggies import naming
from veggies.exc import NoSuchColumnError, NoSuchTableError, SchemaError
from veggies.schema import column as md_column, index as md_index, \
    relationship as md_relationship

logger = logging.getLogger(__name__)

#: Automatic table naming, version 1: decamelized and pluralized (``ArtistAlbum`` ->
#: ``artist_albums``).
AUTOTABLE_V1 = 1

#: Automatic table naming, singular: decamelized only (``ArtistAlbum`` -> ``artist_album``).
AUTOTABLE_SINGULAR = "singular"


def generate_table_name(local_name: str, mode: typing.Any) -> typing.Optional[str]:
    """
    Generates a table name from a table's local name.

    :param local_name: The local name of the table, e.g. ``ArtistAlbum``.
    :param mode: The automatic naming mode. One of :data:`.AUTOTABLE_V1`, \
        :data:`.AUTOTABLE_SINGULAR` or None.
    :return: The table name, or None if automatic naming is off.
    """
    if mode is None or mode is False:
        return None

    name = inflection.underscore(local_name.replace(".", "_"))
    if mode == AUTOTABLE_SINGULAR:
        return name

    if mode in (AUTOTABLE_V1, "v1"):
        return inflection.pluralize(name)

    raise SchemaError("Unknown autotable mode {!r}".format(mode))


class TableMetadata(object):
    """
    The root class for table metadata.
    This stores a registry of tables, keyed by qualified name, and is responsible for resolving
    relationships between them.

    .. code-block:: python3

        meta = TableMetadata()
        artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
        ...
        meta.setup_tables()

    """

    def __init__(self):
        #: A registry of qualified name -> table object for this metadata.
        self.tables = OrderedDict()  # type: typing.Dict[str, Table]

    def __repr__(self):
        return "<TableMetadata tables={}>".format(list(self.tables))

    def declare(self, qualified_name: str, *,
                autotable: typing.Any = None,
                experimental: typing.Iterable[str] = (),
                table_name: str = None) -> 'Table':
        """
        Declares a new table and registers it in this metadata.

        Declaring the same qualified name twice replaces the first table.

        :param qualified_name: The qualified name of the table, e.g. ``MyApp.Result.Artist``.
        :param autotable: The automatic table naming mode. See :func:`.generate_table_name`.
        :param experimental: A list of experimental features to enable. These are stored on \
            :attr:`.Table.options`.
        :param table_name: An explicit table name. This wins over ``autotable``.
        :return: The new :class:`.Table`.
        """
        tbl = Table(qualified_name, autotable=autotable, experimental=experimental,
                    table_name=table_name)
        return self.register_table(tbl)

    def register_table(self, tbl: 'Table', *,
                       autosetup_tables: bool = False) -> 'Table':
        """
        Registers a new table object.

        :param tbl: The table to register.
        :param autosetup_tables: Should tables be setup again?
        """
        if tbl.qualified_name in self.tables:
            logger.debug("Replacing table {}".format(tbl.qualified_name))

        tbl.metadata = self
        self.tables[tbl.qualified_name] = tbl
        logger.debug("Registered new table {}".format(tbl.qualified_name))

        if autosetup_tables:
            self.setup_tables()

        return tbl

    def get_table(self, name: str) -> 'typing.Optional[Table]':
        """
        Gets a table from the current metadata.

        :param name: The qualified name of the table, or its table name.
        :return: A :class:`.Table` object, or None if there is no such table.
        """
        try:
            return self.tables[name]
        except KeyError:
            # we can load this from the table name instead
            for table in self.tables.values():
                if table.table_name == name:
                    return table
            else:
                return None

    def resolve_table(self, name: str) -> 'Table':
        """
        Gets a table from the current metadata, raising if it does not exist.

        :param name: The qualified name of the table, or its table name.
        """
        table = self.get_table(name)
        if table is None:
            raise NoSuchTableError("No such table '{}' exists".format(name))

        return table

    def setup_tables(self):
        """
        Sets up the tables for usage.

        This checks every table is named and resolves every relationship.
        """
        self.check_table_names()
        self.resolve_relationships()

    def check_table_names(self):
        """
        Checks that every table has a table name.
        """
        for tbl in self.tables.values():
            if tbl.table_name is None:
                raise SchemaError("Table {} has no table name - set one with table() or use "
                                  "autotable".format(tbl.qualified_name))

    def resolve_relationships(self):
        """
        Resolves the related table of every relationship, linking foreign keys on the way.
        """
        for tbl in self.tables.values():
            for relationship in tbl.iter_relationships():
                relationship.resolve(self)


class Table(object):
    """
    The schema description of one table.

    A table is usually created by :meth:`.TableMetadata.declare`, then filled in using its
    declaration primitives:

    .. code-block:: python3

        artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
        artist.primary_column("artist_id", {"type": "INTEGER", "autoincrement": True})
        artist.column("name", {"type": "TEXT"})
        artist.has_many("albums", "MyApp.Result.Album", "artist_id")

    Columns and relationships can be accessed as attributes afterwards:

    .. code-block:: python3

        print(artist.name)  # <Column table=artists name=name type=TEXT>

    """

    def __init__(self, qualified_name: str, *,
                 autotable: typing.Any = None,
                 experimental: typing.Iterable[str] = (),
                 table_name: str = None):
        #: The qualified name of this table.
        self.qualified_name = qualified_name

        #: The :class:`.TableMetadata` this table is registered in.
        self.metadata = None  # type: TableMetadata

        #: The options this table was declared with.
        self.options = {
            "autotable": autotable,
            "experimental": tuple(experimental),
        }

        #: A dict of columns for this table.
        self._columns = OrderedDict()  # type: typing.Dict[str, md_column.Column]

        #: A dict of relationships for this table.
        self._relationships = \
            OrderedDict()  # type: typing.Dict[str, md_relationship.Relationship]

        #: A dict of unique constraints for this table.
        self._unique_constraints = \
            OrderedDict()  # type: typing.Dict[str, md_index.UniqueConstraint]

        #: The primary key for this table.
        self._primary_key = None  # type: PrimaryKey

        if table_name is None:
            table_name = generate_table_name(self.local_name, autotable)
        self._table_name = table_name

    def __getattr__(self, item):
        if item.startswith("_"):
            raise AttributeError("'{}' object has no attribute {}".format(self.qualified_name,
                                                                          item))

        col = self.get_column(item)
        if col is not None:
            return col

        relationship = self.get_relationship(item)
        if relationship is not None:
            return relationship

        constraint = self.get_unique_constraint(item)
        if constraint is not None:
            return constraint

        raise AttributeError("'{}' object has no attribute {}".format(self.qualified_name, item))

    def __repr__(self):
        return "<Table object='{}' name='{}'>".format(self.qualified_name, self.table_name)

    @cached_property
    def base_prefix(self) -> typing.Optional[str]:
        """
        The base prefix of this table's qualified name, or None if it has no ``Result`` segment.
        """
        return naming.base_prefix(self.qualified_name)

    @cached_property
    def local_name(self) -> str:
        """
        The local name of this table, i.e. the part of the qualified name after the base prefix.

        Without a base prefix, this is the last dotted segment.
        """
        local = naming.local_name(self.qualified_name)
        if local is None:
            local = self.qualified_name.rpartition(".")[2]

        return local

    @property
    def table_name(self) -> typing.Optional[str]:
        """
        The name of this table, or None if it has not been named yet.
        """
        return self._table_name

    @property
    def primary_key(self) -> 'PrimaryKey':
        """
        :getter: The :class:`.PrimaryKey` for this table, or None.
        :setter: A new :class:`.PrimaryKey` for this table.
        """
        return self._primary_key

    @primary_key.setter
    def primary_key(self, key: 'PrimaryKey'):
        key.table = self
        self._primary_key = key

    # primitives
    def table(self, name: str):
        """
        Sets the name of this table.
        """
        logger.debug("Table {} named {}".format(self.qualified_name, name))
        self._table_name = name

    def add_column(self, name: str, column: 'md_column.Column') -> 'md_column.Column':
        """
        Adds a :class:`.Column` to this table, replacing any column with the same name.

        Replacing a primary key column updates the primary key: the new column takes its place if
        it is a primary column, otherwise it is dropped from the key.
        """
        old = self._columns.get(name)
        if old is not None:
            logger.debug("Replacing column {} on {}".format(name, self.qualified_name))
            self._replace_key_column(old, column)

        column.__set_name__(self, name)
        self._columns[name] = column
        return column

    def _replace_key_column(self, old: 'md_column.Column', new: 'md_column.Column'):
        pk = self._primary_key
        if pk is None or not any(col is old for col in pk.columns):
            return

        if new.primary_key:
            pk.columns = [new if col is old else col for col in pk.columns]
        else:
            pk.columns = [col for col in pk.columns if col is not old]
            if not pk.columns:
                self._primary_key = None

        logger.debug("Calculated new primary key {}".format(self._primary_key))

    def column(self, name: str, info: 'typing.Union[dict, md_column.Column]') \
            -> 'md_column.Column':
        """
        Declares a column from a column info mapping.

        :param name: The name of the column.
        :param info: The column info mapping, e.g. ``{"type": "VARCHAR", "size": 25}``. \
            See :meth:`.Column.from_info`.
        """
        if not isinstance(info, md_column.Column):
            info = md_column.Column.from_info(info or {})

        return self.add_column(name, info)

    def primary_column(self, name: str, info: dict) -> 'md_column.Column':
        """
        Declares a column and adds it to this table's primary key.

        Calling this more than once makes a composite primary key.
        """
        column = self.add_column(name, md_column.Column.from_info(info or {}, primary_key=True))
        if self._primary_key is None:
            self.primary_key = PrimaryKey(column)
        elif not any(col is column for col in self._primary_key.columns):
            self._primary_key.columns.append(column)

        logger.debug("Calculated new primary key {}".format(self._primary_key))
        return column

    def set_primary_key(self, *names: str) -> 'PrimaryKey':
        """
        Sets the primary key of this table to already declared columns.

        :param names: The names of the columns.
        """
        columns = []
        for name in names:
            column = self.get_column(name)
            if column is None:
                raise NoSuchColumnError("No such column '{}' exists on table '{}'"
                                        .format(name, self.qualified_name))
            column.primary_key = True
            column.nullable = False
            columns.append(column)

        self.primary_key = PrimaryKey(*columns)
        return self._primary_key

    def _add_relationship(self, name: str,
                          relationship: 'md_relationship.Relationship') \
            -> 'md_relationship.Relationship':
        if name in self._relationships:
            logger.debug("Replacing relationship {} on {}".format(name, self.qualified_name))

        relationship.__set_name__(self, name)
        self._relationships[name] = relationship
        logger.debug("Declared {} on {}".format(relationship, self.qualified_name))
        return relationship

    def has_many(self, name: str, related: str, foreign_key: str,
                 attrs: dict = None) -> 'md_relationship.Relationship':
        """
        Declares a one to many relationship.

        :param name: The accessor name of the relationship.
        :param related: The qualified name of the related table.
        :param foreign_key: The column on the related table that refers to this table.
        :param attrs: Any extra relationship attributes.
        """
        rel = md_relationship.Relationship(md_relationship.HAS_MANY, related, foreign_key,
                                           attrs=attrs)
        return self._add_relationship(name, rel)

    def belongs_to(self, name: str, related: str, foreign_key: str = None,
                   attrs: dict = None) -> 'md_relationship.Relationship':
        """
        Declares a many to one relationship.

        :param name: The accessor name of the relationship.
        :param related: The qualified name of the related table.
        :param foreign_key: The column on this table that refers to the related table. Defaults \
            to the accessor name.
        :param attrs: Any extra relationship attributes.
        """
        if foreign_key is None:
            foreign_key = name

        rel = md_relationship.Relationship(md_relationship.BELONGS_TO, related, foreign_key,
                                           attrs=attrs)
        return self._add_relationship(name, rel)

    def add_unique_constraint(self, name: 'typing.Union[str, typing.Sequence[str]]',
                              columns: typing.Sequence[str] = None) \
            -> 'md_index.UniqueConstraint':
        """
        Adds a unique constraint to this table.

        .. code-block:: python3

            table.add_unique_constraint("artist_name", ["name"])
            table.add_unique_constraint(["name"])  # named <table name>_name

        :param name: The name of the constraint, or the list of columns if no name is given.
        :param columns: The list of column names.
        """
        if columns is None:
            name, columns = None, name

        if isinstance(columns, str):
            columns = [columns]

        constraint = md_index.UniqueConstraint(*columns)
        constraint.__set_name__(self, name)
        self._unique_constraints[constraint.name] = constraint
        return constraint

    # lookups
    def iter_columns(self) -> 'typing.Generator[md_column.Column, None, None]':
        """
        :return: A generator that yields :class:`.Column` objects for this table.
        """
        for col in self._columns.values():
            yield col

    def get_column(self, column_name: str) -> 'typing.Optional[md_column.Column]':
        """
        Gets a column by name.

        :param column_name: The column name to lookup.
        :return: The :class:`.Column` associated with that name, or None if no column was found.
        """
        return self._columns.get(column_name)

    def iter_relationships(self) \
            -> 'typing.Generator[md_relationship.Relationship, None, None]':
        """
        :return: A generator that yields :class:`.Relationship` objects for this table.
        """
        for rel in self._relationships.values():
            yield rel

    def get_relationship(self, relationship_name: str) \
            -> 'typing.Optional[md_relationship.Relationship]':
        """
        Gets a relationship by name.

        :param relationship_name: The accessor name of the relationship.
        :return: The :class:`.Relationship` associated with that name, or None.
        """
        return self._relationships.get(relationship_name)

    def iter_unique_constraints(self) \
            -> 'typing.Generator[md_index.UniqueConstraint, None, None]':
        """
        :return: A generator that yields :class:`.UniqueConstraint` objects for this table.
        """
        for constraint in self._unique_constraints.values():
            yield constraint

    def get_unique_constraint(self, name: str) -> 'typing.Optional[md_index.UniqueConstraint]':
        """
        Gets a unique constraint by name.
        """
        return self._unique_constraints.get(name)


class PrimaryKey(object):
    """
    Represents the primary key of a table.

    A primary key can be on any 1 to N columns in a table. It is built up by
    :meth:`.Table.primary_column`, or set in one go with :meth:`.Table.set_primary_key`.
    """

    def __init__(self, *cols: 'md_column.Column'):
        #: A list of :class:`.Column` that this primary key encompasses.
        self.columns = list(cols)  # type: typing.List[md_column.Column]

        #: The table this primary key is bound to.
        self.table = None  # type: Table

    def __repr__(self):
        return "<PrimaryKey table='{}' columns='{}'>".format(self.table, self.columns)

    @property
    def column_names(self) -> typing.List[str]:
        """
        The names of the columns in this primary key.
        """
        return [col.name for col in self.columns]

"""
Relationship helpers.
"""
import logging
import typing

from veggies.exc import NoSuchColumnError, SchemaError
from veggies.schema import column as md_column, table as md_table

logger = logging.getLogger(__name__)

#: A one to many relationship; the foreign key column lives on the related table.
HAS_MANY = "has_many"

#: A many to one relationship; the foreign key column lives on the owner table.
BELONGS_TO = "belongs_to"


class ForeignKey(object):
    """
    Represents a foreign key object in a column. This links a column to the primary key column of
    another table.

    Foreign keys are created when a :class:`.Relationship` is resolved; the ``belongs_to`` side of a
    relationship gets a foreign key on its key column.
    """

    def __init__(self, foreign_column: 'md_column.Column'):
        """
        :param foreign_column: The :class:`.Column` this key references.
        """
        #: The :class:`.Column` object this FK references.
        self.foreign_column = foreign_column

        #: The :class:`.Column` object this FK is associated with.
        self.column = None  # type: md_column.Column

    def __repr__(self):
        return "<ForeignKey owner='{}' foreign='{}'>".format(self.column, self.foreign_column)


class Relationship(object):
    """
    Represents a relationship to another table.

    A relationship has an owner table, an accessor name, the qualified name of the related table and
    the name of the foreign key column that joins the two.

    .. code-block:: python3

        # one artist has many albums; albums.artist_id points at the artist
        artist.has_many("albums", "MyApp.Result.Album", "artist_id")

        # an album belongs to one artist; the artist_id column is on this table
        album.belongs_to("artist", "MyApp.Result.Artist", "artist_id")

    The related table is only looked up when the metadata's tables are set up, so tables can be
    declared in any order.
    """

    def __init__(self, kind: str, related: str, foreign_key: str, *,
                 attrs: dict = None):
        """
        :param kind: The kind of relationship, either ``has_many`` or ``belongs_to``.
        :param related: The qualified name of the related table.
        :param foreign_key: The name of the foreign key column.
        :param attrs: Any extra attributes for this relationship. These are stored, not used.
        """
        if kind not in (HAS_MANY, BELONGS_TO):
            raise SchemaError("Unknown relationship kind '{}'".format(kind))

        #: The kind of this relationship.
        self.kind = kind

        #: The qualified name of the related table.
        self.related = related

        #: The name of the foreign key column.
        self.foreign_key = foreign_key

        #: The extra attributes for this relationship.
        self.attrs = dict(attrs or {})

        #: The owner table for this relationship.
        self.owner_table = None  # type: md_table.Table

        #: The accessor name of this relationship.
        self.name = None  # type: str

        #: The related :class:`.Table`, once resolved.
        self.foreign_table = None  # type: md_table.Table

    def __set_name__(self, owner: 'md_table.Table', name: str):
        self.owner_table = owner
        self.name = name

    def __repr__(self):
        return "<Relationship {} '{}' -> '{}' on '{}'>".format(self.kind, self.name, self.related,
                                                                self.foreign_key)

    def __eq__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented

        return (self.kind, self.name, self.related, self.foreign_key, self.attrs) == \
               (other.kind, other.name, other.related, other.foreign_key, other.attrs)

    def __hash__(self):
        return hash((self.kind, self.name, self.related, self.foreign_key))

    @property
    def resolved(self) -> bool:
        """
        If this relationship has been resolved.
        """
        return self.foreign_table is not None

    @property
    def key_table(self) -> 'md_table.Table':
        """
        Gets the table that holds the foreign key column.
        """
        if self.kind == BELONGS_TO:
            return self.owner_table

        return self.foreign_table

    @property
    def our_column(self) -> 'md_column.Column':
        """
        Gets the local column this relationship joins on.
        """
        if self.kind == BELONGS_TO:
            return self.owner_table.get_column(self.foreign_key)

        pk = self.owner_table.primary_key
        if pk is None or len(pk.columns) != 1:
            raise SchemaError("Table '{}' needs a single column primary key for {}"
                              .format(self.owner_table.qualified_name, self))

        return pk.columns[0]

    @property
    def foreign_column(self) -> 'md_column.Column':
        """
        Gets the foreign column this relationship joins on.
        """
        if self.kind == BELONGS_TO:
            return self.foreign_table.primary_key.columns[0]

        return self.foreign_table.get_column(self.foreign_key)

    @property
    def join_columns(self) -> typing.Tuple['md_column.Column', 'md_column.Column']:
        """
        Gets the "join" columns of this relationship, i.e the columns that link the two tables.
        """
        return self.our_column, self.foreign_column

    def resolve(self, metadata: 'md_table.TableMetadata'):
        """
        Resolves the related table of this relationship.

        On a ``belongs_to`` relationship, this also links the key column to the related table's
        primary key with a :class:`.ForeignKey`.

        :param metadata: The :class:`.TableMetadata` to look the related table up in.
        """
        self.foreign_table = metadata.resolve_table(self.related)

        key_column = self.key_table.get_column(self.foreign_key)
        if key_column is None:
            raise NoSuchColumnError("No such column '{}' exists on table '{}' (from relationship "
                                    "{})".format(self.foreign_key, self.key_table.qualified_name,
                                                 self))

        if self.kind == BELONGS_TO:
            pk = self.foreign_table.primary_key
            if pk is None or len(pk.columns) != 1:
                raise SchemaError("Table '{}' needs a single column primary key to be referenced "
                                  "by {}".format(self.foreign_table.qualified_name, self))

            key_column.foreign_key = ForeignKey(pk.columns[0])
            key_column.foreign_key.column = key_column
        else:
            pk = self.owner_table.primary_key
            if pk is None or len(pk.columns) != 1:
                raise SchemaError("Table '{}' needs a single column primary key to own {}"
                                  .format(self.owner_table.qualified_name, self))

        logger.debug("Resolved {} to {}".format(self, self.foreign_table))
        return self.foreign_table

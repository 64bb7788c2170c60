"""
Unique constraints.
"""

import logging
import typing

from veggies.schema import column as md_column, table as md_table

logger = logging.getLogger(__name__)


class UniqueConstraint(object):
    """
    Represents a unique constraint over one or more columns in a table.

    .. code-block:: python3

        artist.add_unique_constraint("artist_name", ["name"])
        # the name is generated when not given
        artist.add_unique_constraint(["name", "stage_name"])  # artists_name_stage_name

    """
    def __init__(self, *columns: str,
                 table: 'md_table.Table' = None):
        """
        :param columns: The names of the columns this constraint is on.
        :param table: The :class:`.Table` for this constraint. Can be None if the constraint is \
            added to a table later.
        """
        self.columns = columns
        self.table = table
        self.name = None  # type: str

    def __repr__(self):
        return "<UniqueConstraint table={} columns={} name={}>".format(self.table_name,
                                                                      self.columns, self.name)

    def __set_name__(self, owner: 'md_table.Table', name: typing.Optional[str]):
        """
        Called to update the table and name of this constraint.

        :param owner: The :class:`.Table` this constraint is on.
        :param name: The str name of this constraint, or None to generate one.
        """
        self.table = owner
        if name is None:
            name = "_".join((self.table_name or self.table.local_name.lower(),) + self.columns)
        self.name = name
        logger.debug("Unique constraint created with name {} on {}".format(name, owner))

    @property
    def table_name(self) -> str:
        """
        The name of this constraint's table.
        """
        if self.table is None:
            return None

        return self.table.table_name

    def get_columns(self) -> 'typing.Generator[md_column.Column, None, None]':
        """
        :return: A generator that yields the :class:`.Column` objects this constraint covers.
        """
        for name in self.columns:
            yield self.table.get_column(name)


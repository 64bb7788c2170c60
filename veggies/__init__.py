"""
Main package for veggies - short, convention-driven declarators for table schemas.

.. currentmodule:: veggies

.. autosummary::
    :toctree:

    declarators
    naming
    schema

    exc
"""

__author__ = "Laura Dickinson"
__copyright__ = "Copyright (C) 2017 Laura Dickinson"

__licence__ = "MIT"
__status__ = "Development"

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    # package is not installed
    pass

from veggies.declarators import Veggies, result, veggies
from veggies.exc import *
from veggies.naming import base_prefix, local_name, split_qualified_name, \
    to_foreign_key_column, to_related_type_name, to_singular
# schema
from veggies.schema.column import Column
from veggies.schema.index import UniqueConstraint
from veggies.schema.relationship import ForeignKey, Relationship
from veggies.schema.table import AUTOTABLE_SINGULAR, AUTOTABLE_V1, PrimaryKey, Table, \
    TableMetadata
from veggies.schema.types import BigInt, Boolean, ColumnType, Integer, SmallInt, String, \
    Text, Timestamp, UnsignedInteger, get_type, register_type

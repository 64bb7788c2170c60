"""
py.test configuration
"""
import pytest

from veggies.schema.table import TableMetadata


@pytest.fixture()
def meta() -> TableMetadata:
    return TableMetadata()


class RecordingTable(object):
    """
    A stand-in for a table that records every primitive call.
    """

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        self.calls = []

    def _record(name):
        def primitive(self, *args, **kwargs):
            self.calls.append((name, args, kwargs))

        return primitive

    primary_column = _record("primary_column")
    column = _record("column")
    has_many = _record("has_many")
    belongs_to = _record("belongs_to")
    add_unique_constraint = _record("add_unique_constraint")

    del _record


@pytest.fixture()
def recorder():
    return RecordingTable

"""
Naming convention inference.

Every declarator that takes a single accessor name works out the rest of the declaration from
that name and from the qualified name of the declaring table:

.. code-block:: python3

    >>> to_foreign_key_column("order")
    'order_id'
    >>> to_related_type_name("MyApp.Result.", "stage_name")
    'MyApp.Result.StageName'
    >>> split_qualified_name("MyApp.Result.Artist")
    ('MyApp.Result.', 'Artist')

All of these are pure functions.
"""
import re
import typing

import inflection

#: The suffix that marks a column as a foreign key column.
FOREIGN_KEY_SUFFIX = "_id"

#: The namespace segment that separates the base prefix from a table's local name.
RESULT_MARKER = "Result"

_camel_re = re.compile(r"_(.)")


def to_foreign_key_column(name: str) -> str:
    """
    Gets the foreign key column name for an accessor name.

    :param name: The accessor name, e.g. ``order``.
    :return: The name with ``_id`` appended, unless it already ends in ``_id``.
    """
    if name.endswith(FOREIGN_KEY_SUFFIX):
        return name

    return name + FOREIGN_KEY_SUFFIX


def to_related_type_name(base_prefix: str, name: str) -> str:
    """
    Camel-cases an accessor name and appends it to a base prefix.

    ``stage_name`` becomes ``StageName``. Malformed identifiers (leading underscores, digits) are
    not special-cased.

    :param base_prefix: The base prefix, e.g. ``MyApp.Result.``.
    :param name: The snake_case accessor name, or its singular.
    """
    camel = name[:1].upper() + name[1:]
    camel = _camel_re.sub(lambda match: match.group(1).upper(), camel)
    return base_prefix + camel


def to_singular(name: str) -> str:
    """
    Singularizes an English plural noun, e.g. ``albums`` -> ``album``.

    This is best effort; irregular words are whatever :mod:`inflection` makes of them.
    """
    return inflection.singularize(name)


def split_qualified_name(qualified_name: str, marker: str = RESULT_MARKER) \
        -> typing.Optional[typing.Tuple[str, str]]:
    """
    Splits a qualified type name into its base prefix and its local name.

    The base prefix is everything up to and including the last ``marker`` segment.

    :param qualified_name: The qualified name, e.g. ``MyApp.Result.Artist``.
    :param marker: The marker segment.
    :return: A tuple of ``(base_prefix, local_name)``, or None if there is no marker segment.
    """
    match = re.match(r"^(.+\.{}\.)(.+)$".format(re.escape(marker)), qualified_name)
    if match is None:
        return None

    return match.group(1), match.group(2)


def base_prefix(qualified_name: str, marker: str = RESULT_MARKER) -> typing.Optional[str]:
    """
    :return: The base prefix of ``qualified_name``, or None if it has no marker segment.
    """
    split = split_qualified_name(qualified_name, marker)
    if split is None:
        return None

    return split[0]


def local_name(qualified_name: str, marker: str = RESULT_MARKER) -> typing.Optional[str]:
    """
    :return: The local name of ``qualified_name``, or None if it has no marker segment.
    """
    split = split_qualified_name(qualified_name, marker)
    if split is None:
        return None

    return split[1]

"""
The short-named declarators.

.. code-block:: python3

    from veggies import TableMetadata, result

    meta = TableMetadata()

    @result(meta, "MyApp.Result.Artist")
    def Artist(v):
        v.pcol("artist_id")     # INT primary column, with auto increment
        v.col("name")           # TEXT column
        v.vcol("stage_name", {  # VARCHAR column, with standard column settings
            "size": 25,
            "nullable": True,
        })

        # Same as `v.has_many("albums", "MyApp.Result.Album", "artist_id")`
        v.owns("albums")

Every helper of the underlying :class:`.Table` (``table``, ``column``, ``has_many``, ...) is
available on the builder too.
"""
import logging
import typing

from veggies import naming
from veggies.exc import MissingPrimitiveError, UnresolvableNamespaceError
from veggies.schema import table as md_table
from veggies.utils import Proxy, merge_info

logger = logging.getLogger(__name__)

#: The table primitives a :class:`.Veggies` builder wraps.
PRIMITIVES = ("primary_column", "column", "has_many", "belongs_to", "add_unique_constraint")

#: The column info defaults for ``pcol``.
PRIMARY_COLUMN_INFO = {"type": "int", "autoincrement": True}

#: The column info for the key column that a single-argument ``owned_by`` declares.
FOREIGN_KEY_COLUMN_INFO = {"type": "INTEGER"}


def _typed_column(name: str, type_tag: str):
    def declarator(self, col_name: str, info: dict = None):
        return self._primitive("column")(col_name, merge_info({"type": type_tag}, info))

    declarator.__name__ = name
    declarator.__qualname__ = "Veggies." + name
    declarator.__doc__ = """
        Declares a column, with ``{}`` as the default type.

        :param col_name: The name of the column.
        :param info: The column info; any ``type`` here wins over the default.
        """.format(type_tag)
    return declarator


class Veggies(Proxy):
    """
    The declaration builder for one table.

    The builder wraps the declaration primitives of a table, which are passed in explicitly.
    Usually, :func:`.veggies` or :func:`.result` create one from a freshly declared
    :class:`.Table`.
    """

    def __init__(self, qualified_name: str, *,
                 table: 'md_table.Table' = None,
                 primary_column: typing.Callable = None,
                 column: typing.Callable = None,
                 has_many: typing.Callable = None,
                 belongs_to: typing.Callable = None,
                 add_unique_constraint: typing.Callable = None):
        """
        :param qualified_name: The qualified name of the table being declared.
        :param table: The :class:`.Table` to proxy any other attribute access to.
        :param primary_column: The "declare primary column" primitive.
        :param column: The "declare column" primitive.
        :param has_many: The "declare one to many relationship" primitive.
        :param belongs_to: The "declare many to one relationship" primitive.
        :param add_unique_constraint: The "add unique constraint" primitive.
        """
        super().__init__(table)

        #: The qualified name of the table being declared.
        self.qualified_name = qualified_name

        self._primitives = {
            "primary_column": primary_column,
            "column": column,
            "has_many": has_many,
            "belongs_to": belongs_to,
            "add_unique_constraint": add_unique_constraint,
        }

    def __repr__(self):
        return "<Veggies '{}'>".format(self.qualified_name)

    @classmethod
    def from_table(cls, table: 'md_table.Table') -> 'Veggies':
        """
        Creates a builder that wraps the primitives of a :class:`.Table`.
        """
        primitives = {name: getattr(table, name, None) for name in PRIMITIVES}
        return cls(table.qualified_name, table=table, **primitives)

    @property
    def result_table(self) -> 'md_table.Table':
        """
        The :class:`.Table` this builder declares into, if any.
        """
        return self.obb

    def _primitive(self, name: str) -> typing.Callable:
        primitive = self._primitives[name]
        if primitive is None:
            raise MissingPrimitiveError("No '{}' primitive was provided for {}"
                                        .format(name, self.qualified_name))

        return primitive

    def _split_name(self) -> typing.Tuple[str, str]:
        split = naming.split_qualified_name(self.qualified_name)
        if split is None:
            raise UnresolvableNamespaceError("Cannot infer related names for '{}' - it has no "
                                             "'.{}.' segment".format(self.qualified_name,
                                                                     naming.RESULT_MARKER))

        return split

    def pcol(self, col_name: str, info: dict = None):
        """
        Declares a primary column, with ``int`` as the default type and auto increment on.

        .. code-block:: python3

            v.pcol("prod_id")
            # is the same as
            v.primary_column("prod_id", {"type": "int", "autoincrement": True})

        Either default can be overridden:

        .. code-block:: python3

            v.pcol("prod_id", {"type": "int-unsigned", "autoincrement": False})

        """
        return self._primitive("primary_column")(col_name, merge_info(PRIMARY_COLUMN_INFO, info))

    col = _typed_column("col", "TEXT")
    tcol = _typed_column("tcol", "TEXT")
    icol = _typed_column("icol", "INTEGER")
    ucol = _typed_column("ucol", "INTEGER UNSIGNED")
    vcol = _typed_column("vcol", "VARCHAR")

    def owned_by(self, name: str, *args, **kwargs):
        """
        Declares a many to one relationship.

        With more than one argument, this is exactly ``belongs_to``. With only an accessor name,
        the key column and the related table are inferred:

        .. code-block:: python3

            # in MyApp.Result.Product
            v.owned_by("order")
            # is the same as
            v.icol("order_id")
            v.belongs_to("order", "MyApp.Result.Order", "order_id")

        """
        belongs_to = self._primitive("belongs_to")
        if args or kwargs:
            return belongs_to(name, *args, **kwargs)

        column = self._primitive("column")
        prefix, _ = self._split_name()
        id_col = naming.to_foreign_key_column(name)
        related = naming.to_related_type_name(prefix, name)

        logger.debug("Inferred belongs_to {} -> {} on {}".format(name, related, id_col))
        column(id_col, dict(FOREIGN_KEY_COLUMN_INFO))
        return belongs_to(name, related, id_col)

    def owns(self, name: str, *args, **kwargs):
        """
        Declares a one to many relationship.

        With more than one argument, this is exactly ``has_many``. With only an accessor name, the
        name is singularized to find the related table, and this table's own name gives the key
        column on the related table:

        .. code-block:: python3

            # in MyApp.Result.Order
            v.owns("products")
            # is the same as
            v.has_many("products", "MyApp.Result.Product", "order_id")

        """
        has_many = self._primitive("has_many")
        if args or kwargs:
            return has_many(name, *args, **kwargs)

        prefix, local = self._split_name()
        singular = naming.to_singular(name)
        related = naming.to_related_type_name(prefix, singular)
        id_col = naming.to_foreign_key_column(local.lower())

        logger.debug("Inferred has_many {} -> {} on {}".format(name, related, id_col))
        return has_many(name, related, id_col)

    def uniquely(self, *args, **kwargs):
        """
        Adds a unique constraint. This is exactly ``add_unique_constraint``.

        .. code-block:: python3

            v.uniquely("constraint_name", ["column1", "column2"])

        """
        return self._primitive("add_unique_constraint")(*args, **kwargs)


def veggies(metadata: 'md_table.TableMetadata', qualified_name: str, **options) -> Veggies:
    """
    Declares a table in some metadata, and returns a :class:`.Veggies` builder for it.

    All options are passed to :meth:`.TableMetadata.declare`. ``autotable`` defaults to
    :data:`.AUTOTABLE_V1` when it is not given (or is None); pass False to turn it off.

    .. code-block:: python3

        v = veggies(meta, "MyApp.Result.Artist", autotable="singular")

    :param metadata: The :class:`.TableMetadata` to declare the table in.
    :param qualified_name: The qualified name of the table.
    """
    if options.get("autotable") is None:
        options["autotable"] = md_table.AUTOTABLE_V1

    table = metadata.declare(qualified_name, **options)
    return Veggies.from_table(table)


def result(metadata: 'md_table.TableMetadata', qualified_name: str, **options):
    """
    Decorator form of :func:`.veggies`.

    The decorated function is called once with the builder, and the decorator returns the declared
    :class:`.Table`.

    .. code-block:: python3

        @result(meta, "MyApp.Result.Product")
        def Product(v):
            v.pcol("product_id")
            v.owned_by("order")

        print(Product)  # <Table object='MyApp.Result.Product' name='products'>

    """

    def decorator(func: typing.Callable[[Veggies], typing.Any]) -> 'md_table.Table':
        builder = veggies(metadata, qualified_name, **options)
        func(builder)
        return builder.result_table

    return decorator

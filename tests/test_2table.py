"""
Tests the table primitives and the metadata registry.
"""
import pytest

from veggies.exc import NoSuchColumnError, NoSuchTableError, SchemaError
from veggies.schema.relationship import BELONGS_TO, HAS_MANY, Relationship
from veggies.schema.table import AUTOTABLE_SINGULAR, AUTOTABLE_V1, TableMetadata, \
    generate_table_name


@pytest.mark.parametrize("local, mode, name", [
    ("Artist", AUTOTABLE_V1, "artists"),
    ("ArtistAlbum", AUTOTABLE_V1, "artist_albums"),
    ("Category", AUTOTABLE_V1, "categories"),
    ("Artist", AUTOTABLE_SINGULAR, "artist"),
    ("ArtistAlbum", AUTOTABLE_SINGULAR, "artist_album"),
    ("Artist", None, None),
    ("Artist", False, None),
])
def test_generate_table_name(local, mode, name):
    assert generate_table_name(local, mode) == name


def test_generate_table_name_unknown_mode():
    with pytest.raises(SchemaError):
        generate_table_name("Artist", "v2")


def test_declare(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1,
                          experimental=["signatures"])
    assert artist.metadata is meta
    assert meta.get_table("MyApp.Result.Artist") is artist
    assert meta.get_table("artists") is artist
    assert meta.get_table("MyApp.Result.Nope") is None
    assert artist.table_name == "artists"
    assert artist.local_name == "Artist"
    assert artist.base_prefix == "MyApp.Result."
    assert artist.options == {"autotable": AUTOTABLE_V1, "experimental": ("signatures",)}


def test_declare_explicit_name(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1, table_name="artist")
    assert artist.table_name == "artist"


def test_declare_without_marker(meta: TableMetadata):
    tbl = meta.declare("MyApp.Artist", autotable=AUTOTABLE_SINGULAR)
    assert tbl.base_prefix is None
    assert tbl.local_name == "Artist"
    assert tbl.table_name == "artist"


def test_declare_twice_replaces(meta: TableMetadata):
    first = meta.declare("MyApp.Result.Artist")
    second = meta.declare("MyApp.Result.Artist")
    assert first is not second
    assert meta.get_table("MyApp.Result.Artist") is second


def test_table_primitive(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    assert tbl.table_name is None
    tbl.table("artist_table")
    assert tbl.table_name == "artist_table"


def test_columns(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    name = tbl.column("name", {"type": "TEXT"})
    assert tbl.get_column("name") is name
    assert tbl.name is name
    assert name.table is tbl
    assert name.name == "name"
    assert name.fullname == "artists.name"
    assert list(tbl.iter_columns()) == [name]

    with pytest.raises(AttributeError):
        tbl.nope


def test_column_replaced(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    tbl.column("name", {"type": "TEXT"})
    tbl.column("name", {"type": "VARCHAR", "size": 10})
    assert tbl.name.type.sql() == "VARCHAR(10)"
    assert len(list(tbl.iter_columns())) == 1


def test_primary_column(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    pk = tbl.primary_column("artist_id", {"type": "int", "autoincrement": True})
    assert tbl.primary_key.columns == [pk]
    assert tbl.primary_key.table is tbl
    assert pk.primary_key is True


def test_composite_primary_key(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.ArtistAlbum")
    tbl.primary_column("artist_id", {"type": "INTEGER"})
    tbl.primary_column("album_id", {"type": "INTEGER"})
    assert tbl.primary_key.column_names == ["artist_id", "album_id"]


def test_set_primary_key(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.ArtistAlbum")
    tbl.column("artist_id", {"type": "INTEGER"})
    tbl.column("album_id", {"type": "INTEGER"})
    tbl.set_primary_key("artist_id", "album_id")
    assert tbl.primary_key.column_names == ["artist_id", "album_id"]
    assert tbl.artist_id.nullable is False

    with pytest.raises(NoSuchColumnError):
        tbl.set_primary_key("nope")


def test_relationships(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    albums = tbl.has_many("albums", "MyApp.Result.Album", "artist_id")
    label = tbl.belongs_to("label", "MyApp.Result.Label", "label_id", {"join_type": "left"})
    assert albums.kind == HAS_MANY
    assert albums.owner_table is tbl
    assert label.kind == BELONGS_TO
    assert label.attrs == {"join_type": "left"}
    assert tbl.albums is albums
    assert list(tbl.iter_relationships()) == [albums, label]


def test_belongs_to_default_key(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Album")
    rel = tbl.belongs_to("artist", "MyApp.Result.Artist")
    assert rel.foreign_key == "artist"


def test_unknown_relationship_kind():
    with pytest.raises(SchemaError):
        Relationship("has_few", "MyApp.Result.Album", "artist_id")


def test_unique_constraints(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    tbl.column("name", {"type": "TEXT"})
    tbl.column("stage_name", {"type": "VARCHAR"})

    named = tbl.add_unique_constraint("artist_name", ["name"])
    assert named.name == "artist_name"
    assert named.columns == ("name",)
    assert list(named.get_columns()) == [tbl.name]

    generated = tbl.add_unique_constraint(["name", "stage_name"])
    assert generated.name == "artists_name_stage_name"
    assert tbl.get_unique_constraint("artists_name_stage_name") is generated
    assert list(tbl.iter_unique_constraints()) == [named, generated]


def test_setup_tables(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    artist.primary_column("artist_id", {"type": "int", "autoincrement": True})
    artist.has_many("albums", "MyApp.Result.Album", "artist_id")

    album = meta.declare("MyApp.Result.Album", autotable=AUTOTABLE_V1)
    album.primary_column("album_id", {"type": "int", "autoincrement": True})
    album.column("artist_id", {"type": "INTEGER"})
    album.belongs_to("artist", "MyApp.Result.Artist", "artist_id")

    meta.setup_tables()

    assert artist.albums.resolved
    assert artist.albums.foreign_table is album
    assert artist.albums.join_columns == (artist.artist_id, album.artist_id)
    assert album.artist.foreign_table is artist
    assert album.artist_id.foreign_column is artist.artist_id
    assert album.artist_id.foreign_key.column is album.artist_id


def test_setup_tables_no_such_table(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    artist.has_many("albums", "MyApp.Result.Album", "artist_id")

    with pytest.raises(NoSuchTableError):
        meta.setup_tables()


def test_setup_tables_no_such_column(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    artist.primary_column("artist_id", {"type": "int"})
    artist.has_many("albums", "MyApp.Result.Album", "artist_id")
    meta.declare("MyApp.Result.Album", autotable=AUTOTABLE_V1)

    with pytest.raises(NoSuchColumnError):
        meta.setup_tables()


def test_setup_tables_unnamed(meta: TableMetadata):
    meta.declare("MyApp.Result.Artist")

    with pytest.raises(SchemaError):
        meta.setup_tables()


def test_resolve_table(meta: TableMetadata):
    with pytest.raises(NoSuchTableError):
        meta.resolve_table("MyApp.Result.Artist")


def test_primary_column_replaced_by_column(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    tbl.primary_column("artist_id", {"type": "int"})
    tbl.primary_column("id", {"type": "int"})
    tbl.column("id", {"type": "TEXT"})

    assert tbl.primary_key.column_names == ["artist_id"]
    assert all(col is tbl.get_column(col.name) for col in tbl.primary_key.columns)


def test_only_primary_column_replaced(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.Artist")
    tbl.primary_column("id", {"type": "int"})
    tbl.column("id", {"type": "TEXT"})
    assert tbl.primary_key is None


def test_primary_column_redeclared(meta: TableMetadata):
    tbl = meta.declare("MyApp.Result.ArtistAlbum")
    tbl.primary_column("artist_id", {"type": "int"})
    tbl.primary_column("album_id", {"type": "int"})
    tbl.primary_column("artist_id", {"type": "INTEGER UNSIGNED"})

    assert tbl.primary_key.column_names == ["artist_id", "album_id"]
    assert tbl.primary_key.columns[0] is tbl.artist_id
    assert tbl.artist_id.type.sql() == "INTEGER UNSIGNED"


def test_foreign_key_uses_replaced_primary_column(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    artist.primary_column("id", {"type": "int"})
    artist.primary_column("id", {"type": "BIGINT"})

    album = meta.declare("MyApp.Result.Album", autotable=AUTOTABLE_V1)
    album.primary_column("album_id", {"type": "int"})
    album.column("artist_id", {"type": "BIGINT"})
    album.belongs_to("artist", "MyApp.Result.Artist", "artist_id")

    meta.setup_tables()
    assert album.artist_id.foreign_column is artist.id


def test_setup_tables_has_many_without_primary_key(meta: TableMetadata):
    artist = meta.declare("MyApp.Result.Artist", autotable=AUTOTABLE_V1)
    artist.has_many("albums", "MyApp.Result.Album", "artist_id")

    album = meta.declare("MyApp.Result.Album", autotable=AUTOTABLE_V1)
    album.column("artist_id", {"type": "INTEGER"})

    with pytest.raises(SchemaError):
        meta.setup_tables()

    with pytest.raises(SchemaError):
        artist.albums.our_column

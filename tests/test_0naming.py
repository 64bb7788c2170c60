"""
Tests the naming inference functions.
"""
import pytest

from veggies.naming import base_prefix, local_name, split_qualified_name, \
    to_foreign_key_column, to_related_type_name, to_singular


@pytest.mark.parametrize("name", ["order", "artist", "stage_name", "idx"])
def test_foreign_key_column_appends_suffix(name):
    assert to_foreign_key_column(name) == name + "_id"


@pytest.mark.parametrize("name", ["order_id", "artist_id", "_id"])
def test_foreign_key_column_keeps_suffix(name):
    assert to_foreign_key_column(name) == name


@pytest.mark.parametrize("name", ["order", "order_id", "valid", "stage_name"])
def test_foreign_key_column_idempotent(name):
    once = to_foreign_key_column(name)
    assert to_foreign_key_column(once) == once


def test_related_type_name():
    assert to_related_type_name("App::Result::", "stage_name") == "App::Result::StageName"
    assert to_related_type_name("MyApp.Result.", "order") == "MyApp.Result.Order"
    assert to_related_type_name("MyApp.Result.", "album_track_listing") == \
        "MyApp.Result.AlbumTrackListing"


def test_singular():
    assert to_singular("albums") == "album"
    assert to_singular("products") == "product"
    assert to_singular("categories") == "category"
    assert to_singular("people") == "person"


def test_split_qualified_name():
    assert split_qualified_name("MyApp.Result.Artist") == ("MyApp.Result.", "Artist")
    assert base_prefix("MyApp.Schema.Result.Artist") == "MyApp.Schema.Result."
    assert local_name("MyApp.Schema.Result.Artist") == "Artist"


def test_split_qualified_name_uses_last_marker():
    assert split_qualified_name("A.Result.B.Result.C") == ("A.Result.B.Result.", "C")


def test_split_qualified_name_custom_marker():
    assert split_qualified_name("MyApp.Models.Artist", marker="Models") == \
        ("MyApp.Models.", "Artist")


@pytest.mark.parametrize("name", ["MyApp.Artist", "Result.Artist", "MyApp.Result.",
                                  "MyApp.Results.Artist"])
def test_split_qualified_name_no_marker(name):
    assert split_qualified_name(name) is None
    assert base_prefix(name) is None
    assert local_name(name) is None

"""
Tests for the Fixture Loader

Covers path normalization, plain concatenation with the base path, raw byte
loading and the not-found error.
"""

import os
from pathlib import Path

import pytest

from morphotest import FixtureLoader, FixtureNotFoundException, normalize_fixture_path
from tests.fixtures import FIXTURES_DIR


class TestNormalizeFixturePath:
    """Test relative path normalization."""

    def test_adds_single_leading_separator(self):
        assert normalize_fixture_path("sub/a.txt") == os.sep + "sub" + os.sep + "a.txt"

    def test_collapses_multiple_leading_slashes(self):
        assert normalize_fixture_path("///sub/a.txt") == normalize_fixture_path("sub/a.txt")

    def test_empty_path(self):
        assert normalize_fixture_path("") == os.sep


class TestFixtureLoader:
    """Test FixtureLoader resolution and loading."""

    def test_resolve_concatenates_base_and_relative_path(self):
        loader = FixtureLoader("/fixtures")
        assert loader.resolve("sub/a.txt") == "/fixtures" + os.sep + "sub" + os.sep + "a.txt"

    def test_resolve_does_not_canonicalize(self):
        loader = FixtureLoader("/fixtures")
        assert loader.resolve("../etc/x") == "/fixtures" + os.sep + ".." + os.sep + "etc" + os.sep + "x"

    def test_default_base_path_is_empty(self):
        assert FixtureLoader().base_path == ""

    def test_base_path_is_read_only(self):
        loader = FixtureLoader("/fixtures")
        with pytest.raises(AttributeError):
            loader.base_path = "/elsewhere"

    def test_accepts_path_objects(self, fixture_tree):
        loader = FixtureLoader(fixture_tree)
        assert loader.base_path == str(fixture_tree)

    def test_load_round_trip(self, fixture_tree):
        """Content written to base + normalized path comes back unchanged."""
        loader = FixtureLoader(str(fixture_tree))
        Path(loader.resolve("sub/b.txt")).write_bytes(b"\x00beta\r\n")

        assert loader.load("sub/b.txt") == b"\x00beta\r\n"
        assert loader.load("/sub/a.txt") == b"alpha\n"

    def test_load_binary_fixture(self):
        loader = FixtureLoader(str(FIXTURES_DIR))
        assert loader.load("nested/blob.bin") == (FIXTURES_DIR / "nested" / "blob.bin").read_bytes()

    def test_load_text_and_json(self):
        loader = FixtureLoader(str(FIXTURES_DIR))
        assert loader.load_text("greeting.txt") == "Hello, fixture!\n"
        assert loader.load_json("nested/settings.json") == {"name": "morphotest", "retries": 3}

    def test_missing_fixture_raises_with_resolved_path(self):
        loader = FixtureLoader("/fixtures")
        expected = "/fixtures" + os.sep + "sub" + os.sep + "a.txt"

        with pytest.raises(FixtureNotFoundException) as exc_info:
            loader.load("sub/a.txt")

        assert exc_info.value.fixture_path == expected
        assert str(exc_info.value) == f'Fixture file: "{expected}" not found!'

    def test_directory_is_not_a_fixture(self, fixture_tree):
        loader = FixtureLoader(str(fixture_tree))
        with pytest.raises(FixtureNotFoundException):
            loader.load("sub")


class TestFixtureLoaderFixture:
    """Test the plugin-provided fixture_loader."""

    def test_uses_ini_base_path(self, fixture_loader):
        assert Path(fixture_loader.base_path).resolve() == FIXTURES_DIR.resolve()
        assert fixture_loader.load_text("greeting.txt") == "Hello, fixture!\n"

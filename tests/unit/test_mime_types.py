"""
Unit tests for MIME tables.
"""

import pytest

from statichttp.http.mime_types import (
    DEFAULT_MIME_TYPES,
    WEB_MIME_TYPES,
    extension_of,
    lookup_mime,
    get_mime_table,
    freeze_table,
)


class TestExtensionOf:

    def test_extension(self):
        assert extension_of("/srv/public/index.html") == ".html"
        assert extension_of("sub/b.png") == ".png"

    def test_case_preserved(self):
        assert extension_of("LOGO.PNG") == ".PNG"

    def test_last_suffix_only(self):
        assert extension_of("archive.tar.gz") == ".gz"

    def test_no_extension(self):
        assert extension_of("Makefile") == ""
        assert extension_of(".hidden") == ""


class TestTables:

    def test_default_table(self):
        """Test the default table's exact contents."""
        assert dict(DEFAULT_MIME_TYPES) == {
            ".html": "text/html",
            ".png": "image/png",
            ".svg": "image/svg",
            ".webmanifest": "text/json",
            ".xml": "text/xml",
        }

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_MIME_TYPES[".bin"] = "application/octet-stream"
        with pytest.raises(TypeError):
            WEB_MIME_TYPES[".bin"] = "application/octet-stream"

    def test_lookup(self):
        assert lookup_mime("a.html", DEFAULT_MIME_TYPES) == "text/html"
        assert lookup_mime("a.css", DEFAULT_MIME_TYPES) is None
        assert lookup_mime("a.css", WEB_MIME_TYPES) == "text/css"

    def test_lookup_is_case_sensitive(self):
        """Test that an upper-case extension has no mapping."""
        assert lookup_mime("LOGO.PNG", DEFAULT_MIME_TYPES) is None
        assert lookup_mime("page.Html", DEFAULT_MIME_TYPES) is None

    def test_get_mime_table(self):
        assert get_mime_table("default") is DEFAULT_MIME_TYPES
        assert get_mime_table("web") is WEB_MIME_TYPES

    def test_get_unknown_table(self):
        with pytest.raises(ValueError):
            get_mime_table("nope")


class TestFreezeTable:

    def test_freeze_copies_keys_as_given(self):
        source = {".TXT": "text/plain", ".txt": "text/x-plain"}
        frozen = freeze_table(source)

        source[".md"] = "text/markdown"

        assert dict(frozen) == {".TXT": "text/plain", ".txt": "text/x-plain"}
        with pytest.raises(TypeError):
            frozen[".md"] = "text/markdown"

    def test_frozen_table_returned_as_is(self):
        assert freeze_table(DEFAULT_MIME_TYPES) is DEFAULT_MIME_TYPES

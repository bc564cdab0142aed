"""Tests for utility functions."""

from codex_steering.utils import deep_merge
from codex_steering.utils import is_blank
from codex_steering.utils import salvage_utf8_prefix


class TestSalvageUtf8Prefix:
    """Test salvage_utf8_prefix function."""

    def test_valid_text_unchanged(self):
        assert salvage_utf8_prefix("plain ascii".encode()) == "plain ascii"
        assert salvage_utf8_prefix("naïve €".encode()) == "naïve €"

    def test_empty(self):
        assert salvage_utf8_prefix(b"") == ""

    def test_drops_incomplete_trailing_sequence(self):
        """Test each cut point inside a multi-byte character keeps the prefix."""
        for char in ["é", "€", "😀"]:
            encoded = ("ok" + char).encode()
            for cut in range(3, len(encoded)):
                assert salvage_utf8_prefix(encoded[:cut]) == "ok"

    def test_invalid_start_byte(self):
        assert salvage_utf8_prefix(b"\xffabc") is None

    def test_invalid_byte_before_incomplete_tail(self):
        """Test an invalid byte is fatal even when the tail is merely incomplete."""
        assert salvage_utf8_prefix(b"a\xffb\xe2\x82") is None

    def test_invalid_continuation_at_end(self):
        """Test a lead byte followed by a non-continuation byte is not salvaged."""
        assert salvage_utf8_prefix(b"abc\xe2A") is None

    def test_lone_trailing_invalid_byte(self):
        assert salvage_utf8_prefix(b"abc\xff") is None


class TestIsBlank:
    """Test is_blank function."""

    def test_empty_and_whitespace(self):
        assert is_blank("")
        assert is_blank(" \t\r\n\x0b\x0c")
        assert is_blank("\xa0\u2003\u3000\u2028")

    def test_text_is_not_blank(self):
        assert not is_blank("  rule  ")

    def test_information_separators_are_not_whitespace(self):
        """Test U+001C..U+001F count as content even though str.isspace() accepts them."""
        assert not is_blank("\x1c\x1d\x1e\x1f")


class TestDeepMerge:
    """Test deep_merge function."""

    def test_empty_dicts(self):
        assert deep_merge({}, {}) == {}

    def test_overlay_wins(self):
        base = {"steering": {"enabled": True}}
        overlay = {"steering": {"enabled": False}}
        assert deep_merge(base, overlay) == {"steering": {"enabled": False}}

    def test_nested_keys_combine(self):
        base = {"steering": {"enabled": True}, "other": 1}
        overlay = {"steering": {"doc_max_bytes": 512}}
        assert deep_merge(base, overlay) == {"steering": {"enabled": True, "doc_max_bytes": 512}, "other": 1}

    def test_non_dict_replaces_dict(self):
        assert deep_merge({"steering": {"enabled": True}}, {"steering": None}) == {"steering": None}

    def test_original_not_modified(self):
        base = {"steering": {"enabled": True}}
        overlay = {"steering": {"doc_max_bytes": 1}}
        deep_merge(base, overlay)

        assert base == {"steering": {"enabled": True}}
        assert overlay == {"steering": {"doc_max_bytes": 1}}

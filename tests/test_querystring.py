# =============================================================================
# tests/test_querystring.py - Extended Form Parser Tests
# =============================================================================
# Tests for lib/querystring.py: bracket nesting, arrays, duplicate keys,
# depth and array limits.
# =============================================================================

import pytest

from lib.querystring import count_parameters, parse_form, split_key


# =============================================================================
# split_key Tests
# =============================================================================

class TestSplitKey:
    """Test field name segmentation."""

    @pytest.mark.parametrize("key,expected", [
        ("name", ["name"]),
        ("seat[row]", ["seat", "row"]),
        ("seat[row][col]", ["seat", "row", "col"]),
        ("tags[]", ["tags", ""]),
        ("[leading]", ["leading"]),
        ("open[bracket", ["open[bracket"]),
    ])
    def test_segments(self, key, expected):
        assert split_key(key) == expected

    def test_depth_limit_keeps_remainder(self):
        """Segments past the depth limit stay as one literal key."""
        assert split_key("a[b][c][d]", depth=2) == ["a", "b", "c", "[d]"]

    def test_zero_depth_disables_nesting(self):
        assert split_key("a[b]", depth=0) == ["a[b]"]


# =============================================================================
# parse_form Tests
# =============================================================================

class TestParseForm:
    """Test nested form decoding."""

    def test_flat_fields(self):
        assert parse_form("from=Accra&to=Kumasi") == {"from": "Accra", "to": "Kumasi"}

    def test_percent_and_plus_decoding(self):
        result = parse_form("name=Ama+Mensah&note=window%20seat%21")

        assert result == {"name": "Ama Mensah", "note": "window seat!"}

    def test_blank_values_kept(self):
        assert parse_form("promo=&seat") == {"promo": "", "seat": ""}

    def test_empty_body(self):
        assert parse_form("") == {}

    def test_nested_objects(self):
        result = parse_form("passenger[name]=Kofi&passenger[contact][phone]=0244")

        assert result == {
            "passenger": {"name": "Kofi", "contact": {"phone": "0244"}}
        }

    def test_empty_brackets_build_list(self):
        assert parse_form("seats[]=4A&seats[]=4B") == {"seats": ["4A", "4B"]}

    def test_duplicate_keys_build_list(self):
        assert parse_form("seat=1&seat=2&seat=3") == {"seat": ["1", "2", "3"]}

    def test_indexed_list(self):
        result = parse_form("seats[1]=4B&seats[0]=4A")

        assert result == {"seats": ["4A", "4B"]}

    def test_sparse_indices_are_compacted(self):
        assert parse_form("seats[5]=9C") == {"seats": ["9C"]}

    def test_index_above_limit_becomes_key(self):
        assert parse_form("seats[21]=x") == {"seats": {"21": "x"}}

    def test_mixed_index_and_name_becomes_object(self):
        result = parse_form("a[0]=x&a[name]=y")

        assert result == {"a": {"0": "x", "name": "y"}}

    def test_list_of_objects(self):
        result = parse_form(
            "legs[0][from]=Accra&legs[0][to]=Tamale&legs[1][from]=Tamale"
        )

        assert result == {
            "legs": [{"from": "Accra", "to": "Tamale"}, {"from": "Tamale"}]
        }

    def test_depth_limit(self):
        result = parse_form("a[b][c][d]=1", depth=2)

        assert result == {"a": {"b": {"c": {"[d]": "1"}}}}

    def test_plain_value_then_nested_keeps_both(self):
        result = parse_form("a=1&a[b]=2")

        assert result == {"a": ["1", {"b": "2"}]}

    def test_empty_key_skipped(self):
        assert parse_form("=orphan&seat=1") == {"seat": "1"}


class TestCountParameters:
    """Test raw field counting."""

    @pytest.mark.parametrize("body,expected", [
        ("", 0),
        ("a=1", 1),
        ("a=1&b=2&c=3", 3),
        ("a=1&", 2),
    ])
    def test_count(self, body, expected):
        assert count_parameters(body) == expected

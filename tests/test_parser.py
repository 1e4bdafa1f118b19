"""Tests for null-delimited record parsing."""

from procenv.parser import parse_record


def test_trailing_null_is_trimmed():
    """Test a trailing terminator does not produce an empty last field."""
    assert parse_record(b"FOO=1\0BAR=2\0") == ["FOO=1", "BAR=2"]


def test_trailing_null_same_as_without():
    """Test input with and without the final terminator parses identically."""
    assert parse_record(b"a\0b\0c\0") == parse_record(b"a\0b\0c")


def test_without_trailing_null():
    """Test input lacking a terminator still splits on every null."""
    assert parse_record(b"FOO=1\0BAR=2") == ["FOO=1", "BAR=2"]


def test_empty_input():
    """Test empty input yields no fields."""
    assert parse_record(b"") == []


def test_single_null_is_one_empty_field():
    """Test a lone terminator yields exactly one empty field."""
    assert parse_record(b"\0") == [""]


def test_only_last_null_is_trimmed():
    """Test embedded and doubled terminators keep their empty fields."""
    assert parse_record(b"a\0\0b\0\0") == ["a", "", "b", ""]


def test_single_field_without_null():
    """Test a record without any null is a single field."""
    assert parse_record(b"/sbin/init") == ["/sbin/init"]


def test_non_utf8_bytes_pass_through():
    """Test undecodable bytes survive and can be recovered exactly."""
    fields = parse_record(b"NAME=\xff\xfe\0")
    assert len(fields) == 1
    assert fields[0].encode("utf-8", "surrogateescape") == b"NAME=\xff\xfe"


def test_utf8_text_decoded():
    """Test valid UTF-8 is decoded as text."""
    assert parse_record("LANG=café\0".encode()) == ["LANG=café"]

"""Tests for procenv data models."""

from procenv.models import ProcessRecord


def test_process_record_defaults():
    """Test ProcessRecord starts with both fields absent."""
    record = ProcessRecord(pid=42)

    assert record.pid == 42
    assert record.environment is None
    assert record.command_line is None


def test_process_record_uses_slots():
    """Test that ProcessRecord uses __slots__ for memory efficiency."""
    record = ProcessRecord(pid=1)
    assert not hasattr(record, "__dict__")


def test_to_dict_full():
    """Test to_dict includes populated fields under their short keys."""
    record = ProcessRecord(pid=3, environment=["A=1"], command_line=["x", "y"])

    assert record.to_dict() == {"pid": 3, "env": ["A=1"], "cmdline": ["x", "y"]}


def test_to_dict_omits_empty_fields():
    """Test to_dict drops missing and empty sequences."""
    assert ProcessRecord(pid=7).to_dict() == {"pid": 7}
    assert ProcessRecord(pid=7, environment=[], command_line=["sh"]).to_dict() == {
        "pid": 7,
        "cmdline": ["sh"],
    }


def test_to_dict_copies_lists():
    """Test mutating the dict does not touch the record."""
    record = ProcessRecord(pid=3, environment=["A=1"])
    record.to_dict()["env"].append("B=2")

    assert record.environment == ["A=1"]

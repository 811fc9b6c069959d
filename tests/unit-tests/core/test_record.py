import pytest
from fwf_reader.config import ReaderConfig
from fwf_reader.record import Record
from fwf_reader.errors import EmptyLine, WidthMismatch


def strict(widths, sep=0):
    return ReaderConfig(widths=widths, separator_length=sep, flexible_width=False, has_header=False)


def test_parse_record():
    record = Record.parse("123456789", strict([3, 3, 3]))
    assert record.line == "123456789"
    assert record.spans == ((0, 3), (3, 6), (6, 9))

def test_parse_record_with_separator():
    record = Record.parse("123-456-789", strict([3, 3, 3], sep=1))
    assert record.spans == ((0, 3), (4, 7), (8, 11))
    assert record.fields() == ["123", "456", "789"]

def test_parse_record_flexible():
    config = ReaderConfig(widths=[3, 3, 3], separator_length=0, flexible_width=True, has_header=False)
    record = Record.parse("123456", config)
    assert record.fields() == ["123", "456", ""]

def test_parse_record_errors():
    with pytest.raises(WidthMismatch):
        Record.parse("12345", strict([3, 3, 3]))
    with pytest.raises(EmptyLine):
        Record.parse("", strict([3, 3, 3]))

def test_get_field_by_index():
    record = Record.parse("123456789", strict([3, 3, 3]))
    assert record.get(0) == "123"
    assert record.get(1) == "456"
    assert record.get(2) == "789"
    assert record.get(3) is None
    assert record.get(100) is None

def test_get_negative_index_is_absent():
    record = Record.parse("123456789", strict([3, 3, 3]))
    assert record.get(-1) is None

def test_iterate_over_fields():
    record = Record.parse("123456789", strict([3, 3, 3]))
    assert list(record) == ["123", "456", "789"]
    assert len(record) == 3

def test_iteration_restarts_each_call():
    record = Record.parse("abcdef", strict([2, 2, 2]))
    first = record.iter_fields()
    assert next(first) == "ab"
    assert list(record.iter_fields()) == ["ab", "cd", "ef"]
    assert list(first) == ["cd", "ef"]

def test_iteration_keeps_empty_fields():
    config = ReaderConfig(widths=[2, 2, 2], separator_length=0, flexible_width=True, has_header=False)
    record = Record.parse("abc", config)
    assert list(record) == ["ab", "c", ""]

def test_to_dict():
    record = Record.parse("123456789", strict([3, 3, 3]))
    assert record.to_dict(["a", "b", "c"]) == {"a": "123", "b": "456", "c": "789"}
    with pytest.raises(ValueError):
        record.to_dict(["a", "b"])

def test_records_are_independent_values():
    a = Record.parse("123456789", strict([3, 3, 3]))
    b = Record.parse("123456789", strict([3, 3, 3]))
    assert a == b
    with pytest.raises(AttributeError):
        a.line = "x"  # type: ignore[misc]

def test_multibyte_fields():
    record = Record.parse("Zoë  Ünal façade", strict([5, 5, 6]))
    assert record.fields() == ["Zoë  ", "Ünal ", "façade"]

"""
Tests for VariableResolver and SymbolTable
"""
import pytest

from cmd_lib.errors import MalformedReference, UndefinedVariable
from cmd_lib.symbol_table import SymbolTable
from cmd_lib.variable_resolver import VariableResolver, resolve_template


def test_reference_inside_double_quotes_is_spliced_raw():
    table = {"name": "world"}
    assert resolve_template('echo "hello ${name}"', table) == 'echo "hello world"'


def test_bare_reference_is_wrapped_in_double_quotes():
    assert resolve_template("ls ${f}", {"f": "a b"}) == 'ls "a b"'


def test_reference_inside_single_quotes_is_literal():
    assert resolve_template("echo '${f}'", {}) == "echo '${f}'"


def test_undefined_variable():
    with pytest.raises(UndefinedVariable) as exc_info:
        resolve_template("ls ${missing}", {})
    assert exc_info.value.name == "missing"


def test_unclosed_reference_at_end_of_input():
    with pytest.raises(MalformedReference):
        resolve_template("ls ${oops", {"oops": "x"})


def test_reference_cut_by_statement_terminator():
    with pytest.raises(MalformedReference):
        resolve_template("ls ${a; date}", {"a": "x"})
    with pytest.raises(MalformedReference):
        resolve_template("ls ${a\n}", {"a": "x"})


def test_multiple_references_and_plain_dollar():
    table = SymbolTable({"src": "my dir", "n": 3})
    resolved = resolve_template('cp $HOME/${src} "${n} copies"', table)
    assert resolved == 'cp $HOME/"my dir" "3 copies"'


def test_resolver_accepts_symbol_table_instance():
    table = SymbolTable()
    table.set("file", "notes.txt")
    table.set("file", "todo.txt")
    assert VariableResolver().resolve("cat ${file}", table) == 'cat "todo.txt"'


def test_symbol_table_basics():
    table = SymbolTable()
    table.set("count", 42)
    assert table.get("count") == "42"
    assert "count" in table
    assert table.has("count")
    assert table.get("missing", "default") == "default"

    clone = table.copy()
    table.delete("count")
    assert "count" not in table
    assert clone.get("count") == "42"
    assert len(clone) == 1
    assert list(clone) == ["count"]

    clone.clear()
    assert len(clone) == 0


def test_from_mapping_returns_same_table():
    table = SymbolTable({"a": "1"})
    assert SymbolTable.from_mapping(table) is table
    assert SymbolTable.from_mapping({"a": "1"}).get("a") == "1"


def test_table_seeds_and_updates_another_table():
    base = SymbolTable({"a": "1", "b": 2})
    seeded = SymbolTable(base)
    assert seeded["a"] == "1"
    assert dict(seeded.items()) == {"a": "1", "b": "2"}

    seeded.update(SymbolTable({"b": "3", "c": "4"}))
    assert dict(seeded.items()) == {"a": "1", "b": "3", "c": "4"}
    assert base.get("b") == "2"


def test_getitem_missing_name_raises_key_error():
    with pytest.raises(KeyError):
        SymbolTable()["missing"]

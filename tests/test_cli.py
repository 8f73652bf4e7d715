import io
import pytest
from flatdb.cli import FlatDBREPL, main
from flatdb.constants import MAX_RECORDS, RECORD_SIZE
from flatdb.storage.record import Record
from flatdb.storage.table import Table


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "cli.db"


def run_script(db_path, commands):
    table = Table.open(str(db_path))
    stdin = io.StringIO("".join(line + "\n" for line in commands))
    stdout = io.StringIO()
    FlatDBREPL(table, stdin=stdin, stdout=stdout).cmdloop()
    return table, stdout.getvalue()


def test_insert_and_select(db_path):
    table, output = run_script(db_path, [
        "insert 1 bob bob@x.com",
        "insert 2 cat cat@x.com",
        "select",
        ".exit",
    ])

    assert output.count("Executed.") == 3
    assert "(1, bob, bob@x.com)\n(2, cat, cat@x.com)\n" in output
    assert table.closed
    assert db_path.stat().st_size == 2 * RECORD_SIZE


def test_persists_between_sessions(db_path):
    run_script(db_path, ["insert 1 bob bob@x.com", ".exit"])
    _, output = run_script(db_path, ["select", ".exit"])
    assert "(1, bob, bob@x.com)" in output


def test_error_messages(db_path):
    _, output = run_script(db_path, [
        "insert 1 bob",
        "insert -1 bob bob@x.com",
        "insert 1 " + "a" * 33 + " a@x.com",
        "delete 1",
        ".tables",
        "",
        ".exit",
    ])

    assert "Syntax error. Could not parse statement." in output
    assert "ID must be positive." in output
    assert "String is too long." in output
    assert "Unrecognized keyword at start of 'delete 1'." in output
    assert "Unrecognized command '.tables'" in output
    assert "Executed." not in output


def test_table_full(db_path):
    table = Table.open(str(db_path))
    for i in range(MAX_RECORDS):
        table.append(Record(i, "u", "e"))
    table.close()

    _, output = run_script(db_path, ["insert 9999 bob bob@x.com", ".exit"])
    assert "Error: Table full." in output


def test_stats(db_path):
    _, output = run_script(db_path, ["insert 1 a b", ".stats", ".exit"])
    assert "records: 1" in output
    assert "cached_pages: 1" in output


def test_eof_closes_table(db_path):
    table, _ = run_script(db_path, ["insert 1 bob bob@x.com"])
    assert table.closed
    assert db_path.stat().st_size == RECORD_SIZE


def test_main_requires_filename(capsys):
    assert main([]) == 1
    assert "Must supply a database filename." in capsys.readouterr().err


def test_main_runs_repl(db_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("insert 3 dan dan@x.com\nselect\n.exit\n"))
    assert main([str(db_path)]) == 0

    assert "(3, dan, dan@x.com)" in capsys.readouterr().out
    assert db_path.stat().st_size == RECORD_SIZE


def test_help_is_not_a_statement(db_path):
    table, output = run_script(db_path, ["help", "?", ".exit"])

    assert output.count("Unrecognized keyword at start of 'help'.") == 2
    assert "Documented commands" not in output

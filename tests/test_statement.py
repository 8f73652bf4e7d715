import pytest
from flatdb.statement import StatementType, prepare_statement, execute_statement
from flatdb.storage.record import Record
from flatdb.storage.table import Table
from flatdb.exceptions import (PrepareSyntaxError, NegativeIdError, StringTooLongError,
                               UnrecognizedStatementError)


def test_prepare_insert():
    statement = prepare_statement("insert 1 bob bob@x.com")
    assert statement.type == StatementType.INSERT
    assert statement.record == Record(1, "bob", "bob@x.com")


def test_prepare_select():
    statement = prepare_statement("select")
    assert statement.type == StatementType.SELECT
    assert statement.record is None


@pytest.mark.parametrize("line, error", [
    ("insert 1 bob", PrepareSyntaxError),
    ("insert 1 bob bob@x.com extra", PrepareSyntaxError),
    ("insert one bob bob@x.com", PrepareSyntaxError),
    ("insert 4294967296 bob bob@x.com", PrepareSyntaxError),
    ("insert -1 bob bob@x.com", NegativeIdError),
    ("insert 1 " + "a" * 33 + " bob@x.com", StringTooLongError),
    ("insert 1 bob " + "a" * 256, StringTooLongError),
    ("insert 1 bob\x00 bob@x.com", PrepareSyntaxError),
    ("update 1 bob bob@x.com", UnrecognizedStatementError),
    ("", UnrecognizedStatementError),
])
def test_prepare_errors(line, error):
    with pytest.raises(error):
        prepare_statement(line)


def test_max_length_strings_accepted():
    statement = prepare_statement("insert 1 " + "a" * 32 + " " + "b" * 255)
    assert statement.record.username == "a" * 32
    assert statement.record.email == "b" * 255


def test_execute(tmp_path):
    with Table.open(str(tmp_path / "stmt.db")) as table:
        assert execute_statement(prepare_statement("insert 1 bob bob@x.com"), table) is None
        assert execute_statement(prepare_statement("select"), table) == [
            Record(1, "bob", "bob@x.com")
        ]

import pytest
from flatdb.storage.cursor import Cursor, Location, locate
from flatdb.storage.record import Record
from flatdb.storage.table import Table


@pytest.fixture
def table(tmp_path):
    t = Table.open(str(tmp_path / "cursor.db"))
    yield t
    t.close()


@pytest.mark.parametrize("index, expected", [
    (0, Location(0, 0)),
    (1, Location(0, 291)),
    (13, Location(0, 13 * 291)),
    (14, Location(1, 0)),
    (29, Location(2, 291)),
    (1399, Location(99, 13 * 291)),
])
def test_locate(index, expected):
    assert locate(index) == expected


def test_locate_matches_formula():
    for i in range(0, 1400, 37):
        assert locate(i) == (i // 14, (i % 14) * 291)


def test_locate_negative():
    with pytest.raises(IndexError):
        locate(-1)


def test_start_of_empty_table(table):
    cursor = Cursor.at_start(table)
    assert cursor.record_index == 0
    assert cursor.end_of_table


def test_start_and_end(table):
    for i in range(3):
        table.append(Record(i, "u", "e"))

    start = Cursor.at_start(table)
    assert start.record_index == 0
    assert not start.end_of_table

    end = Cursor.at_end(table)
    assert end.record_index == 3
    assert end.end_of_table


def test_advance(table):
    table.append(Record(1, "a", "a"))
    table.append(Record(2, "b", "b"))

    cursor = Cursor.at_start(table)
    cursor.advance()
    assert cursor.record_index == 1
    assert not cursor.end_of_table

    cursor.advance()
    assert cursor.end_of_table

    # Keeps counting past the end
    cursor.advance()
    assert cursor.record_index == 3
    assert cursor.end_of_table


def test_resolve_uses_pager_page(table):
    for i in range(15):
        table.append(Record(i, "u", "e"))

    cursor = Cursor(table, 14, False)
    page, offset = cursor.resolve()
    assert page is table.pager.fetch(1)
    assert offset == 0

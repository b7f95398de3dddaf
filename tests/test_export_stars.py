import csv
import io
from datetime import datetime, timezone
from pathlib import Path

import pytest

from export_stars import COLUMNS, default_output_path, to_row, write_csv, write_rows
from models import OutputRow, StarEvent, User


def _event(login="octocat", email=None, location=None, hireable=False):
    return StarEvent(
        starred_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        user=User(
            login=login,
            email=email,
            location=location,
            followers_count=7,
            following_count=2,
            is_hireable=hireable,
        ),
    )


def test_to_row_copies_all_fields_verbatim():
    row = to_row(_event(email="octo@example.com", location="Lisbon", hireable=True))

    assert row == OutputRow(
        date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        username="octocat",
        email="octo@example.com",
        location="Lisbon",
        followers=7,
        following=2,
        hireable=True,
    )


def test_to_row_leaves_missing_fields_as_none():
    row = to_row(_event())

    assert row.email is None
    assert row.location is None


def test_to_row_is_pure():
    event = _event(email="x@y.z")

    assert to_row(event) == to_row(event)


def test_default_output_path():
    assert default_output_path("rust-lang", "rust") == Path("rust-lang-rust-stargazers.csv")


def test_write_rows_formats_header_dates_and_booleans():
    buffer = io.StringIO()

    count = write_rows([to_row(_event(hireable=True)), to_row(_event("b", email="b@c.d"))], buffer)

    lines = buffer.getvalue().splitlines()
    assert count == 2
    assert lines[0] == ",".join(COLUMNS) == "date,username,email,location,followers,following,hireable"
    assert lines[1] == "2024-01-02T03:04:05Z,octocat,,,7,2,true"
    assert lines[2] == "2024-01-02T03:04:05Z,b,b@c.d,,7,2,false"


def test_write_csv_quotes_and_keeps_utf8(tmp_path):
    path = tmp_path / "out.csv"
    events = [_event("zoë", location='São Paulo, "BR"')]

    assert write_csv(events, path) == 1

    with open(path, encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows == [{
        "date": "2024-01-02T03:04:05Z",
        "username": "zoë",
        "email": "",
        "location": 'São Paulo, "BR"',
        "followers": "7",
        "following": "2",
        "hireable": "false",
    }]


def test_write_csv_keeps_existing_file_when_a_row_fails(tmp_path):
    path = tmp_path / "out.csv"
    path.write_text("previous export\n", encoding="utf-8")

    with pytest.raises(UnicodeEncodeError):
        write_csv([_event("ok"), _event("bad\ud800")], path)

    assert path.read_text(encoding="utf-8") == "previous export\n"
    assert list(tmp_path.iterdir()) == [path]

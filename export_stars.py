"""
Projects star events into flat rows and writes them as CSV.
"""

import csv
import os
import tempfile
from dataclasses import asdict, fields
from datetime import timezone
from pathlib import Path

from config import logger
from models import OutputRow

COLUMNS = [f.name for f in fields(OutputRow)]


def to_row(event):
    """Flatten a StarEvent into an OutputRow. Optional fields stay None."""
    user = event.user
    return OutputRow(
        date=event.starred_at,
        username=user.login,
        email=user.email,
        location=user.location,
        followers=user.followers_count,
        following=user.following_count,
        hireable=user.is_hireable,
    )


def default_output_path(owner, repository):
    return Path(f"{owner}-{repository}-stargazers.csv")


def _format_cell(value):
    # csv writes None as an empty cell on its own
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "astimezone"):
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    return value


def write_rows(rows, fileobj):
    """Write a header and one line per row to an open text file. Returns the row count."""
    writer = csv.DictWriter(fileobj, fieldnames=COLUMNS)
    writer.writeheader()
    count = 0
    for row in rows:
        writer.writerow({key: _format_cell(value) for key, value in asdict(row).items()})
        count += 1
    return count


def write_csv(events, path):
    """
    Write star events to a UTF-8 CSV file.

    Args:
        events (list): StarEvent objects, written in the given order.
        path (str or Path): Destination file, replaced only after every row was written.

    Returns:
        int: Number of data rows written.
    """
    path = Path(path)
    logger.info(f"writing {len(events)} records to {path}.")
    # Written beside the target and moved into place, so a failure leaves no partial file
    tmp = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="", dir=path.parent, prefix=f".{path.name}.", delete=False
    )
    try:
        with tmp:
            count = write_rows((to_row(event) for event in events), tmp)
        os.replace(tmp.name, path)
    except BaseException:
        os.unlink(tmp.name)
        raise
    return count

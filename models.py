"""
Typed records for the stargazers connection and the exported CSV rows.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class User:
    login: str
    email: Optional[str]
    location: Optional[str]
    followers_count: int
    following_count: int
    is_hireable: bool


@dataclass(frozen=True)
class StarEvent:
    """One edge of the stargazers connection: who starred, and when."""
    starred_at: datetime
    user: User


@dataclass(frozen=True)
class Page:
    edges: Tuple[StarEvent, ...]
    has_next_page: bool
    end_cursor: Optional[str]


@dataclass(frozen=True)
class OutputRow:
    # Field order is the CSV column order
    date: datetime
    username: str
    email: Optional[str]
    location: Optional[str]
    followers: int
    following: int
    hireable: bool

"""
Movie Entity

The mutable resource protected by optimistic concurrency control.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

MIN_MOVIE_YEAR = 1888
MAX_GENRES = 5
MAX_TITLE_BYTES = 500


class Movie(SQLModel, table=True):
    """
    Movie entity - catalogue record.

    Business Rules:
    - version starts at 1 and increments by exactly 1 per successful update
    - Updates only succeed when the writer's expected version matches
    - Deletion is terminal; deleting a missing id is NotFound
    """

    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=500)
    year: int
    runtime: int  # minutes
    genres: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    version: int = Field(default=1)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_movie_title", "title"),)


def validate_movie(
    title: Optional[str],
    year: Optional[int],
    runtime: Optional[int],
    genres: Optional[List[str]],
) -> Dict[str, str]:
    """
    Check movie fields against catalogue rules.

    Returns:
        Mapping of field name to error message; empty when valid
    """
    errors: Dict[str, str] = {}

    if not title:
        errors["title"] = "must be provided"
    elif len(title.encode()) > MAX_TITLE_BYTES:
        errors["title"] = "must not be more than 500 bytes long"

    if not year:
        errors["year"] = "must be provided"
    elif year < MIN_MOVIE_YEAR:
        errors["year"] = "must be greater than 1888"
    elif year > utc_now().year:
        errors["year"] = "must not be in the future"

    if runtime is None or runtime == 0:
        errors["runtime"] = "must be provided"
    elif runtime < 0:
        errors["runtime"] = "must be a positive integer"

    if genres is None:
        errors["genres"] = "must be provided"
    elif len(genres) < 1:
        errors["genres"] = "must contain at least 1 genre"
    elif len(genres) > MAX_GENRES:
        errors["genres"] = "must not contain more than 5 genres"
    elif len(set(genres)) != len(genres):
        errors["genres"] = "must not contain duplicate values"

    return errors

"""
Movie Use Case DTOs (Data Transfer Objects)

Commands carry validated intent from the API layer; responses are decoupled
from the SQLModel entity.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import Movie


# ============================================================================
# Command DTOs
# ============================================================================


class CreateMovieCommand(BaseModel):
    """All fields required on creation"""

    title: Optional[str] = None
    year: Optional[int] = None
    runtime: Optional[int] = None
    genres: Optional[List[str]] = None


class UpdateMovieCommand(BaseModel):
    """Partial update - None means leave the field unchanged"""

    title: Optional[str] = None
    year: Optional[int] = None
    runtime: Optional[int] = None
    genres: Optional[List[str]] = None


class ListMoviesQuery(BaseModel):
    """Filters, sorting and pagination for the catalogue listing"""

    title: str = ""
    genres: List[str] = Field(default_factory=list)
    page: int = 1
    page_size: int = 20
    sort: str = "id"


# ============================================================================
# Response DTOs
# ============================================================================


class MovieResponse(BaseModel):
    """Movie as returned to clients"""

    id: int
    title: str
    year: int
    runtime: int
    genres: List[str]
    version: int

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieResponse":
        return cls(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            runtime=movie.runtime,
            genres=list(movie.genres),
            version=movie.version,
        )


class PaginationMetadata(BaseModel):
    """Pagination details; every field is None when nothing matched"""

    current_page: Optional[int] = None
    page_size: Optional[int] = None
    first_page: Optional[int] = None
    last_page: Optional[int] = None
    total_records: Optional[int] = None

    @classmethod
    def calculate(cls, total_records: int, page: int, page_size: int) -> "PaginationMetadata":
        if total_records == 0:
            return cls()
        return cls(
            current_page=page,
            page_size=page_size,
            first_page=1,
            last_page=(total_records + page_size - 1) // page_size,
            total_records=total_records,
        )


class MovieListResponse(BaseModel):
    """Response for list movies use case"""

    movies: List[MovieResponse]
    metadata: PaginationMetadata

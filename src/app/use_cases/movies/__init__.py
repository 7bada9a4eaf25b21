"""
Movie Use Cases

Catalogue CRUD; updates go through the version-checked write.
"""

from .create_movie_use_case import CreateMovieUseCase
from .show_movie_use_case import ShowMovieUseCase
from .list_movies_use_case import ListMoviesUseCase
from .update_movie_use_case import UpdateMovieUseCase
from .delete_movie_use_case import DeleteMovieUseCase
from .dtos import (
    CreateMovieCommand,
    ListMoviesQuery,
    MovieListResponse,
    MovieResponse,
    PaginationMetadata,
    UpdateMovieCommand,
)

__all__ = [
    # Use Cases
    "CreateMovieUseCase",
    "ShowMovieUseCase",
    "ListMoviesUseCase",
    "UpdateMovieUseCase",
    "DeleteMovieUseCase",
    # DTOs
    "CreateMovieCommand",
    "ListMoviesQuery",
    "MovieListResponse",
    "MovieResponse",
    "PaginationMetadata",
    "UpdateMovieCommand",
]

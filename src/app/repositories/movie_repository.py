from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import Movie


class IMovieRepository(ABC):
    """Movie repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Get movie by ID"""
        pass

    @abstractmethod
    async def create(self, movie: Movie) -> Movie:
        """Create a new movie (version starts at 1)"""
        pass

    @abstractmethod
    async def list(
        self,
        title: str,
        genres: List[str],
        sort_column: str,
        descending: bool,
        limit: int,
        offset: int,
    ) -> Tuple[List[Movie], int]:
        """List movies matching the filters, with the total match count"""
        pass

    @abstractmethod
    async def update_if_version(
        self, movie_id: int, expected_version: int, **fields
    ) -> Optional[int]:
        """
        Atomic compare-and-increment on id + version.

        Returns the new version, or None when no row matched (the movie was
        deleted or its version moved on).
        """
        pass

    @abstractmethod
    async def delete(self, movie_id: int) -> bool:
        """Delete movie by ID, returning False when it did not exist"""
        pass

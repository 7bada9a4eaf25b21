from typing import List, Optional, Tuple

from sqlalchemy import delete, func, update
from sqlmodel import select

from src.adapter.repositories.base import BoundedRepository
from src.app.repositories.movie_repository import IMovieRepository
from src.domain.entities import Movie


class MovieRepository(BoundedRepository, IMovieRepository):
    """Movie repository implementation using SQLModel"""

    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Get movie by ID, always re-reading the row from the store"""
        stmt = (
            select(Movie)
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def create(self, movie: Movie) -> Movie:
        """Create a new movie"""
        self.session.add(movie)
        await self._run(self.session.flush())
        await self._run(self.session.refresh(movie))
        return movie

    async def list(
        self,
        title: str,
        genres: List[str],
        sort_column: str,
        descending: bool,
        limit: int,
        offset: int,
    ) -> Tuple[List[Movie], int]:
        """List movies matching title substring and all requested genres"""
        conditions = []
        if title:
            conditions.append(Movie.title.icontains(title, autoescape=True))
        for genre in genres:
            # one json_each per genre: every requested genre must be an element
            elements = func.json_each(Movie.genres).table_valued("value")
            conditions.append(
                select(elements.c.value).where(elements.c.value == genre).exists()
            )

        count_stmt = select(func.count()).select_from(Movie).where(*conditions)
        total = (await self._run(self.session.exec(count_stmt))).one()

        column = getattr(Movie, sort_column)
        stmt = (
            select(Movie)
            .where(*conditions)
            .order_by(column.desc() if descending else column.asc(), Movie.id.asc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.exec(stmt))
        return list(result.all()), total

    async def update_if_version(
        self, movie_id: int, expected_version: int, **fields
    ) -> Optional[int]:
        """
        Compare-and-increment in a single UPDATE.

        Both the id and the version are part of the WHERE clause and the
        version is bumped by the same statement, so two writers that observed
        the same version cannot both succeed.
        """
        stmt = (
            update(Movie)
            .where(Movie.id == movie_id, Movie.version == expected_version)
            .values(**fields, version=Movie.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.session.execute(stmt))
        if result.rowcount == 0:
            return None
        return expected_version + 1

    async def delete(self, movie_id: int) -> bool:
        """Delete movie by ID"""
        if movie_id < 1:
            return False
        stmt = (
            delete(Movie)
            .where(Movie.id == movie_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.session.execute(stmt))
        return result.rowcount > 0

"""
Update Movie Use Case

Partial update protected by optimistic concurrency control.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities.movie import validate_movie
from src.libs.result import Error, Result, Return
from .dtos import MovieResponse, UpdateMovieCommand

logger = logging.getLogger(__name__)


class UpdateMovieUseCase:
    """
    Use case for updating a movie.

    Business Rules:
    - Missing movie is NOT_FOUND
    - If the caller supplied an expected version it must equal the stored one
    - The write matches id AND version and bumps version in one statement
    - Zero rows matched is EDIT_CONFLICT; the cause (deleted or moved on) is
      not distinguished and the update is never retried here
    - The loaded entity is never mutated, the store is the only writer
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        movie_id: int,
        command: UpdateMovieCommand,
        expected_version: Optional[int] = None,
    ) -> Result[MovieResponse]:
        """
        Execute movie update.

        Args:
            movie_id: Movie to update
            command: Fields to change (None leaves a field unchanged)
            expected_version: Version the client last observed, if it sent one

        Returns:
            Result with the updated movie (new version), or Error

        Errors:
            - NOT_FOUND: No movie with this id
            - FAILED_VALIDATION: Merged record breaks catalogue rules
            - EDIT_CONFLICT: Version mismatch or concurrent write
        """
        if movie_id < 1:
            return Return.err(Error("NOT_FOUND", "The requested resource could not be found"))

        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(
                    Error("NOT_FOUND", "The requested resource could not be found")
                )

            if expected_version is not None and expected_version != movie.version:
                return Return.err(
                    Error(
                        "EDIT_CONFLICT",
                        "Unable to update the record due to an edit conflict, please try again",
                    )
                )

            current = MovieResponse.from_entity(movie)
            changes = command.model_dump(exclude_none=True)
            merged = current.model_copy(update=changes)

            errors = validate_movie(merged.title, merged.year, merged.runtime, merged.genres)
            if errors:
                return Return.err(
                    Error("FAILED_VALIDATION", "Movie failed validation", errors)
                )

            new_version = await self.uow.movies.update_if_version(
                movie_id,
                current.version,
                title=merged.title,
                year=merged.year,
                runtime=merged.runtime,
                genres=list(merged.genres),
            )
            if new_version is None:
                logger.info(f"Edit conflict on movie {movie_id} at version {current.version}")
                return Return.err(
                    Error(
                        "EDIT_CONFLICT",
                        "Unable to update the record due to an edit conflict, please try again",
                    )
                )

            await self.uow.commit()

            return Return.ok(merged.model_copy(update={"version": new_version}))

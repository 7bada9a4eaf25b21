from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Movie
from src.domain.entities.movie import validate_movie
from src.libs.result import Error, Result, Return
from .dtos import CreateMovieCommand, MovieResponse


class CreateMovieUseCase:
    """
    Create Movie Use Case

    Business Rules:
    - Title, year, runtime and genres are validated before any write
    - New movies start at version 1
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateMovieCommand) -> Result[MovieResponse]:
        errors = validate_movie(command.title, command.year, command.runtime, command.genres)
        if errors:
            return Return.err(
                Error("FAILED_VALIDATION", "Movie failed validation", errors)
            )

        async with self.uow:
            movie = Movie(
                title=command.title,
                year=command.year,
                runtime=command.runtime,
                genres=list(command.genres),
            )
            movie = await self.uow.movies.create(movie)

            await self.uow.commit()

            return Return.ok(MovieResponse.from_entity(movie))

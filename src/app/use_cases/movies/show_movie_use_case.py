from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MovieResponse


class ShowMovieUseCase:
    """Fetch one movie by id; reads never take part in the version protocol"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, movie_id: int) -> Result[MovieResponse]:
        if movie_id < 1:
            return Return.err(Error("NOT_FOUND", "The requested resource could not be found"))

        async with self.uow:
            movie = await self.uow.movies.get_by_id(movie_id)
            if movie is None:
                return Return.err(
                    Error("NOT_FOUND", "The requested resource could not be found")
                )

            return Return.ok(MovieResponse.from_entity(movie))

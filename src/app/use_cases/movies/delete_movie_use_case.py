from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return


class DeleteMovieUseCase:
    """Delete a movie; a missing id is NOT_FOUND, never an edit conflict"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, movie_id: int) -> Result[None]:
        async with self.uow:
            deleted = await self.uow.movies.delete(movie_id)
            if not deleted:
                return Return.err(
                    Error("NOT_FOUND", "The requested resource could not be found")
                )

            await self.uow.commit()

            return Return.ok(None)

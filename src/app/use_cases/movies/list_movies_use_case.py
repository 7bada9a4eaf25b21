from typing import Dict

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import ListMoviesQuery, MovieListResponse, MovieResponse, PaginationMetadata

SORT_SAFELIST = ("id", "title", "year", "runtime", "-id", "-title", "-year", "-runtime")
MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100


class ListMoviesUseCase:
    """
    List Movies Use Case

    Business Rules:
    - title matches case-insensitively anywhere in the movie title
    - every requested genre must be present on the movie
    - page in 1..10,000,000, page_size in 1..100
    - sort must be in the safelist; ties are broken by ascending id
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @staticmethod
    def _validate(query: ListMoviesQuery) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if query.page < 1:
            errors["page"] = "must be greater than zero"
        elif query.page > MAX_PAGE:
            errors["page"] = "must be a maximum of 10 million"
        if query.page_size < 1:
            errors["page_size"] = "must be greater than zero"
        elif query.page_size > MAX_PAGE_SIZE:
            errors["page_size"] = "must be a maximum of 100"
        if query.sort not in SORT_SAFELIST:
            errors["sort"] = "invalid sort value"
        return errors

    async def execute(self, query: ListMoviesQuery) -> Result[MovieListResponse]:
        errors = self._validate(query)
        if errors:
            return Return.err(Error("FAILED_VALIDATION", "Invalid listing filters", errors))

        descending = query.sort.startswith("-")
        sort_column = query.sort.lstrip("-")

        async with self.uow:
            movies, total = await self.uow.movies.list(
                title=query.title,
                genres=query.genres,
                sort_column=sort_column,
                descending=descending,
                limit=query.page_size,
                offset=(query.page - 1) * query.page_size,
            )

            return Return.ok(
                MovieListResponse(
                    movies=[MovieResponse.from_entity(movie) for movie in movies],
                    metadata=PaginationMetadata.calculate(total, query.page, query.page_size),
                )
            )

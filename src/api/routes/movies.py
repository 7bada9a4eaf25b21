from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, Response, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.metrics import RequestMetrics
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.movies import (
    CreateMovieCommand,
    CreateMovieUseCase,
    DeleteMovieUseCase,
    ListMoviesQuery,
    ListMoviesUseCase,
    MovieListResponse,
    MovieResponse,
    ShowMovieUseCase,
    UpdateMovieCommand,
    UpdateMovieUseCase,
)
from src.domain.entities import PermissionCode
from src.depends import get_metrics, get_unit_of_work, require_permission

router = APIRouter(prefix="/v1/movies", tags=["Movies"])

can_read = require_permission(PermissionCode.movies_read.value)
can_write = require_permission(PermissionCode.movies_write.value)

_STATUS_BY_CODE = {
    "FAILED_VALIDATION": status.HTTP_422_UNPROCESSABLE_CONTENT,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "EDIT_CONFLICT": status.HTTP_409_CONFLICT,
}


def _raise_for(error, metrics: Optional[RequestMetrics] = None):
    if error.code == "EDIT_CONFLICT" and metrics is not None:
        metrics.increment("edit_conflicts")
    if error.code in _STATUS_BY_CODE:
        raise ClientError(error, status_code=_STATUS_BY_CODE[error.code])
    raise ServerError(error)


class MovieRequest(BaseModel):
    """
    Movie HTTP request payload

    Shapes are checked here; catalogue rules (year range, genre count) are
    enforced by the use case so every violation is reported together.
    """

    title: Optional[str] = Field(None, description="Movie title")
    year: Optional[int] = Field(None, description="Release year")
    runtime: Optional[int] = Field(None, description="Runtime in minutes")
    genres: Optional[List[str]] = Field(None, description="Between 1 and 5 genres")


class MovieEnvelope(BaseModel):
    movie: MovieResponse


class DeleteMovieResponse(BaseModel):
    message: str


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=MovieListResponse,
    response_model_exclude_none=True,
)
async def list_movies(
    title: str = Query(""),
    genres: str = Query(""),
    page: int = Query(1),
    page_size: int = Query(20),
    sort: str = Query("id"),
    _=Depends(can_read),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Movies

    Query:
        title: case-insensitive substring
        genres: comma separated, every genre must match
        page, page_size, sort: pagination and ordering (sort may be prefixed with '-')

    Raises:
        - 422 Unprocessable Entity: Invalid page, page_size or sort
    """
    query = ListMoviesQuery(
        title=title,
        genres=[genre.strip() for genre in genres.split(",") if genre.strip()],
        page=page,
        page_size=page_size,
        sort=sort,
    )
    result = await ListMoviesUseCase(uow).execute(query)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MovieEnvelope)
async def create_movie(
    request: MovieRequest,
    response: Response,
    _=Depends(can_write),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Movie

    Raises:
        - 422 Unprocessable Entity: Movie failed validation
    """
    command = CreateMovieCommand(**request.model_dump())
    result = await CreateMovieUseCase(uow).execute(command)

    if result.is_err():
        _raise_for(result.error)

    movie = result.value
    response.headers["Location"] = f"/v1/movies/{movie.id}"
    return MovieEnvelope(movie=movie)


@router.get("/{movie_id}", status_code=status.HTTP_200_OK, response_model=MovieEnvelope)
async def show_movie(
    movie_id: int,
    _=Depends(can_read),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ShowMovieUseCase(uow).execute(movie_id)

    if result.is_err():
        _raise_for(result.error)

    return MovieEnvelope(movie=result.value)


@router.patch("/{movie_id}", status_code=status.HTTP_200_OK, response_model=MovieEnvelope)
async def update_movie(
    movie_id: int,
    request: MovieRequest,
    expected_version: Optional[int] = Header(None, alias="X-Expected-Version"),
    _=Depends(can_write),
    uow: UnitOfWork = Depends(get_unit_of_work),
    metrics: RequestMetrics = Depends(get_metrics),
):
    """
    Partially Update Movie

    Only supplied fields change. The write succeeds only if the movie is still
    at the version that was read (and, when sent, at X-Expected-Version).

    Raises:
        - 404 Not Found: Unknown movie
        - 409 Conflict: EDIT_CONFLICT, the movie changed concurrently
        - 422 Unprocessable Entity: Merged movie failed validation
    """
    command = UpdateMovieCommand(**request.model_dump())
    result = await UpdateMovieUseCase(uow).execute(movie_id, command, expected_version)

    if result.is_err():
        _raise_for(result.error, metrics)

    return MovieEnvelope(movie=result.value)


@router.delete("/{movie_id}", status_code=status.HTTP_200_OK, response_model=DeleteMovieResponse)
async def delete_movie(
    movie_id: int,
    _=Depends(can_write),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteMovieUseCase(uow).execute(movie_id)

    if result.is_err():
        _raise_for(result.error)

    return DeleteMovieResponse(message="movie successfully deleted")

import pytest

from src.domain.base import utc_now
from src.domain.entities.movie import validate_movie

VALID = {"title": "Moana", "year": 2016, "runtime": 107, "genres": ["animation", "adventure"]}


def test_valid_movie_has_no_errors():
    assert validate_movie(**VALID) == {}


def test_missing_fields_reported_together():
    errors = validate_movie(None, None, None, None)

    assert set(errors) == {"title", "year", "runtime", "genres"}


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("title", "x" * 501, "must not be more than 500 bytes long"),
        ("year", 1887, "must be greater than 1888"),
        ("runtime", -5, "must be a positive integer"),
        ("genres", [], "must contain at least 1 genre"),
        ("genres", ["a", "b", "c", "d", "e", "f"], "must not contain more than 5 genres"),
        ("genres", ["drama", "drama"], "must not contain duplicate values"),
    ],
)
def test_field_rules(field, value, message):
    errors = validate_movie(**{**VALID, field: value})

    assert errors == {field: message}


def test_future_year_rejected():
    errors = validate_movie(**{**VALID, "year": utc_now().year + 1})

    assert errors == {"year": "must not be in the future"}


def test_title_limit_counts_bytes():
    # 250 two-byte characters = 500 bytes
    assert validate_movie(**{**VALID, "title": "é" * 250}) == {}
    assert "title" in validate_movie(**{**VALID, "title": "é" * 251})

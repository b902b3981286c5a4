"""
Read-side queries for the movie catalog.

Every search runs as a single SELECT: movies left-joined to their genres
and cast, restricted by the compiled filter clauses. The flat rows are
grouped per movie in memory, so a movie with 3 genres and 3 actors comes
back as one record with 3 + 3 names, not 9 rows.
"""

import unicodedata
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import InvalidFilterError, StorageUnavailableError
from .query import (
    Condition,
    ConditionKind,
    FilterSpec,
    build_conditions,
    compile_conditions,
)

MovieRow = Tuple[models.Movie, Optional[str], Optional[str]]


def title_sort_key(title: str) -> Tuple[str, str]:
    """
    Collation key for titles: accents and case are ignored first ("Étoile"
    sorts with "Etoile", before "Zorro"), the raw title breaks remaining ties.
    """
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), title


_SORT_KEYS = {
    "title": lambda movie: title_sort_key(movie.title),
    "year": lambda movie: movie.year,
    "rating": lambda movie: movie.rating,
}


def _movie_rows_stmt(clauses: list):
    return (
        select(models.Movie, models.Genre.name, models.CastMember.actor_name)
        .outerjoin(models.movie_genres, models.movie_genres.c.movie_id == models.Movie.id)
        .outerjoin(models.Genre, models.Genre.id == models.movie_genres.c.genre_id)
        .outerjoin(models.CastMember, models.CastMember.movie_id == models.Movie.id)
        .where(*clauses)
        # fixes first-appearance order: genres by name, cast by billing
        .order_by(models.Movie.id, models.Genre.name, models.CastMember.id)
    )


def _execute(db: Session, stmt, what: str):
    try:
        return db.execute(stmt).all()
    except SQLAlchemyError as exc:
        logger.error(f"[Catalog] Failed to read {what}: {exc}")
        raise StorageUnavailableError(f"Failed to read {what} from the database") from exc


def to_movie_out(movie: models.Movie, genres: List[str], cast: List[str]) -> schemas.MovieOut:
    return schemas.MovieOut(
        id=movie.id,
        title=movie.title,
        year=movie.year,
        genre=genres,
        poster=movie.poster,
        description=movie.description,
        rating=movie.rating,
        director=movie.director,
        cast=cast,
        runtime=movie.runtime,
        releaseDate=movie.release_date,
    )


def aggregate_rows(rows: Iterable[MovieRow]) -> List[schemas.MovieOut]:
    """
    Collapse joined (movie, genre name, actor name) rows into one record
    per movie. Names keep the order they first appear in; dicts serve as
    ordered sets.
    """
    grouped: Dict[int, Tuple[models.Movie, Dict[str, None], Dict[str, None]]] = {}

    for movie, genre_name, actor_name in rows:
        entry = grouped.get(movie.id)
        if entry is None:
            entry = grouped[movie.id] = (movie, {}, {})
        if genre_name is not None:
            entry[1].setdefault(genre_name)
        if actor_name is not None:
            entry[2].setdefault(actor_name)

    return [
        to_movie_out(movie, list(genres), list(cast))
        for movie, genres, cast in grouped.values()
    ]


def sort_movies(movies: List[schemas.MovieOut], sort_by: str, sort_order: str) -> List[schemas.MovieOut]:
    # Python's sort is stable even with reverse=True, so ties stay id-ascending
    ordered = sorted(movies, key=lambda movie: movie.id)
    ordered.sort(key=_SORT_KEYS[sort_by], reverse=sort_order == "desc")
    return ordered


def fetch_movies(db: Session, conditions: List[Condition]) -> List[schemas.MovieOut]:
    stmt = _movie_rows_stmt(compile_conditions(conditions))
    return aggregate_rows(_execute(db, stmt, "movies"))


def search_movies(db: Session, filters: FilterSpec) -> List[schemas.MovieOut]:
    logger.debug(f"[Catalog] search_movies filters={filters}")

    movies = fetch_movies(db, build_conditions(filters))
    movies = sort_movies(movies, filters.sort_by, filters.sort_order)

    logger.info(f"[Catalog] search matched {len(movies)} movies")
    return movies


def echo_filters(filters: FilterSpec) -> schemas.FiltersOut:
    return schemas.FiltersOut(
        query=filters.query,
        genre=filters.genre if filters.genre is not None else "all",
        year=str(filters.year) if filters.year is not None else "all",
        yearFrom=filters.year_from,
        yearTo=filters.year_to,
        sortBy=filters.sort_by,
        sortOrder=filters.sort_order,
    )


def list_movies(db: Session, filters: FilterSpec) -> schemas.MovieListOut:
    movies = search_movies(db, filters)
    return schemas.MovieListOut(
        movies=movies,
        total=len(movies),
        filters=echo_filters(filters),
    )


def get_popular_movies(db: Session, limit: int, max_limit: int) -> List[schemas.MovieOut]:
    """Top ``limit`` movies by rating; ``limit`` must be within 1..max_limit."""
    if limit < 1 or limit > max_limit:
        raise InvalidFilterError(f"Invalid limit {limit}; expected 1 to {max_limit}")

    return search_movies(db, FilterSpec())[:limit]


def get_movie(db: Session, movie_id: int) -> Optional[schemas.MovieOut]:
    movies = fetch_movies(db, [Condition(ConditionKind.EQUALS, ("id",), movie_id)])
    if not movies:
        logger.debug(f"[Catalog] movie {movie_id} not found")
        return None
    return movies[0]


def list_genres(db: Session) -> List[str]:
    rows = _execute(db, select(models.Genre.name).order_by(models.Genre.name), "genres")
    return [name for (name,) in rows]


def check_database(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning(f"[Catalog] Database health check failed: {exc}")
        return False
    return True
